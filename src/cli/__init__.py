"""Command-line interface for the iPlant wiki client.

This package provides the `iplant-wiki` CLI tool, a thin layer over
IPlantWikiClient with Rich output and exit codes for scripting.
"""

from .models import ExitCode

__all__ = [
    'ExitCode',
]
