"""Main CLI entry point for the iplant-wiki command.

This module provides the Typer application exposing the wiki client's page
and comment operations. Shared options (configuration source, verbosity,
log directory, colour) live on the main callback; each operation is a
subcommand.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, TypeVar

import typer

from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.iplant_wiki.client import IPlantWikiClient
from src.iplant_wiki.config import PropertiesLoader, WikiProperties
from src.iplant_wiki.errors import (
    AuthenticationError,
    ClientError,
    NotFoundError,
    RemoteCallError,
)

app = typer.Typer(
    name="iplant-wiki",
    help="""Create pages and manage comments on the iPlant wiki.

Settings are read from --config (YAML) or from CONFLUENCE_* environment
variables, which may be placed in a .env file.

EXAMPLES:
  iplant-wiki add-page "Muscle" --content "<p>Multiple alignment</p>"
  iplant-wiki add-comment DOC "Muscle" "Works well"
  iplant-wiki get-comment 42""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CliState:
    """Options given to the main callback, shared with subcommands."""

    def __init__(self, config: Optional[str], verbosity: int, no_color: bool):
        self.config = config
        self.verbosity = verbosity
        self.output = OutputHandler(verbosity=verbosity, no_color=no_color)


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)

    # Repeated invocations in one process replace, not stack, handlers
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"iplant-wiki_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _load_properties(state: CliState) -> WikiProperties:
    if state.config:
        return PropertiesLoader.load(state.config)
    return PropertiesLoader.from_env()


def _run(
    ctx: typer.Context,
    message: str,
    action: Callable[[IPlantWikiClient], T],
    keep_session: bool = False,
) -> T:
    """Build a client, run action with it and map failures to exit codes."""
    state: CliState = ctx.obj
    output = state.output

    try:
        properties = _load_properties(state)
        output.info(f"Connecting to {properties.base_url} as {properties.user}")
        wiki = IPlantWikiClient(properties)
        try:
            with output.spinner(message):
                return action(wiki)
        finally:
            # The login command hands its token to the caller, so that session stays open
            if not keep_session:
                wiki.close()

    except AuthenticationError as e:
        logger.error(f"Login failed: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.AUTH_ERROR)

    except (ClientError, NotFoundError, ValueError) as e:
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    except RemoteCallError as e:
        output.error(str(e))
        raise typer.Exit(ExitCode.NETWORK_ERROR)

    except typer.Exit:
        raise

    except Exception as e:
        logger.exception("Unexpected error")
        output.error(f"Unexpected error: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(
        None, "--config", "-c", help="YAML settings file (default: CONFLUENCE_* environment)"
    ),
    verbose: int = typer.Option(
        0, "--verbose", "-v", count=True, help="Increase verbosity (-v info, -vv debug)"
    ),
    logdir: Optional[str] = typer.Option(
        None, "--logdir", help="Directory for timestamped log files"
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
) -> None:
    """Create pages and manage comments on the iPlant wiki."""
    _configure_logging(verbose, logdir)
    ctx.obj = CliState(config=config, verbosity=verbose, no_color=no_color)


@app.command("add-page")
def add_page(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="Page title"),
    content: str = typer.Option("", "--content", help="Page content (storage format)"),
) -> None:
    """Create a page under the configured parent page and print its URL."""
    url = _run(ctx, "Creating page...", lambda wiki: wiki.create_page(title, content))
    ctx.obj.output.result(url)


@app.command("add-comment")
def add_comment(
    ctx: typer.Context,
    space: str = typer.Argument(..., help="Space key"),
    page_title: str = typer.Argument(..., help="Title of the page to comment on"),
    text: str = typer.Argument(..., help="Comment text"),
) -> None:
    """Add a comment to a page and print the new comment's ID."""
    comment = _run(ctx, "Adding comment...", lambda wiki: wiki.add_comment(space, page_title, text))
    ctx.obj.output.result(comment.comment_id)


@app.command("edit-comment")
def edit_comment(
    ctx: typer.Context,
    comment_id: int = typer.Argument(..., help="Comment ID"),
    text: str = typer.Argument(..., help="New comment text"),
) -> None:
    """Replace a comment's text."""
    _run(ctx, "Updating comment...", lambda wiki: wiki.edit_comment(comment_id, text))
    ctx.obj.output.success(f"Comment {comment_id} updated")


@app.command("remove-comment")
def remove_comment(
    ctx: typer.Context,
    comment_id: int = typer.Argument(..., help="Comment ID"),
) -> None:
    """Remove a comment."""
    _run(ctx, "Removing comment...", lambda wiki: wiki.remove_comment(comment_id))
    ctx.obj.output.success(f"Comment {comment_id} removed")


@app.command("get-comment")
def get_comment(
    ctx: typer.Context,
    comment_id: int = typer.Argument(..., help="Comment ID"),
) -> None:
    """Print a comment's text."""
    text = _run(ctx, "Fetching comment...", lambda wiki: wiki.get_comment(comment_id))
    ctx.obj.output.result(text)


@app.command("content-id")
def content_id(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="Page title"),
    space: Optional[str] = typer.Option(
        None, "--space", "-s", help="Space key (default: configured space)"
    ),
) -> None:
    """Print the numeric content ID of a page."""
    page_id = _run(
        ctx,
        "Looking up page...",
        lambda wiki: wiki.get_content_id(title, space or wiki.properties.space_name),
    )
    ctx.obj.output.result(page_id)


@app.command("login")
def login(ctx: typer.Context) -> None:
    """Log in and print the session token."""
    token = _run(ctx, "Logging in...", lambda wiki: wiki.get_token(), keep_session=True)
    if token is None:
        ctx.obj.output.error("Cannot login, see log for details")
        raise typer.Exit(ExitCode.AUTH_ERROR)
    ctx.obj.output.result(token)


if __name__ == "__main__":
    app()
