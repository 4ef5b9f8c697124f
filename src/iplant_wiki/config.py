"""Wiki connection settings and their loaders.

Settings come either from a YAML file or from environment variables
(optionally read from a .env file with python-dotenv). Both sources
produce the same immutable WikiProperties tuple, which the client only
ever reads.

YAML file structure:
    confluence:
      base_url: "https://wiki.example.org"
      user: "de-service"
      password: "secret"
      space_name: "DOC"
      parent_page: "List of Applications"
      space_url: "https://wiki.example.org/display/DOC/"
      timeout: 30
"""

import os
from typing import Any, Dict, NamedTuple, Optional

import yaml
from dotenv import load_dotenv

from .errors import ConfigError


DEFAULT_TIMEOUT = 30.0


class WikiProperties(NamedTuple):
    """Connection and placement settings for the iPlant wiki."""
    base_url: str
    user: str
    password: str
    space_name: str
    parent_page: str
    space_url: str
    timeout: float = DEFAULT_TIMEOUT


class PropertiesLoader:
    """Loads and validates WikiProperties from YAML or the environment.

    Required environment variables:
        CONFLUENCE_URL: Wiki base URL (e.g., https://wiki.example.org)
        CONFLUENCE_USER: Service account user name
        CONFLUENCE_PASSWORD: Service account password
        CONFLUENCE_SPACE: Space key new pages are created in
        CONFLUENCE_PARENT_PAGE: Title of the page new pages are created under
        CONFLUENCE_SPACE_URL: Public URL prefix that page titles are appended to

    Optional:
        CONFLUENCE_TIMEOUT: Request timeout in seconds (default 30)

    Example:
        >>> props = PropertiesLoader.load("iplant-wiki.yaml")
        >>> props.space_name
        'DOC'
    """

    # Field order matters: the first missing field is the one reported
    REQUIRED_FIELDS = ('base_url', 'user', 'password', 'space_name', 'parent_page', 'space_url')

    ENV_VARS = {
        'base_url': 'CONFLUENCE_URL',
        'user': 'CONFLUENCE_USER',
        'password': 'CONFLUENCE_PASSWORD',
        'space_name': 'CONFLUENCE_SPACE',
        'parent_page': 'CONFLUENCE_PARENT_PAGE',
        'space_url': 'CONFLUENCE_SPACE_URL',
        'timeout': 'CONFLUENCE_TIMEOUT',
    }

    @classmethod
    def load(cls, config_path: str) -> WikiProperties:
        """Load settings from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            WikiProperties parsed from the ``confluence`` section

        Raises:
            ConfigError: If the file cannot be read, is not valid YAML,
                or lacks a required field
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise ConfigError(f"Configuration file not found at {config_path}")
        except OSError as e:
            raise ConfigError(f"Cannot read {config_path}: {e}")

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {str(e)}")

        if config_dict is None:
            raise ConfigError("Configuration file is empty")

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        section = config_dict.get('confluence')
        if not isinstance(section, dict):
            raise ConfigError("Missing 'confluence' section", config_field='confluence')

        return cls._parse(section)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> WikiProperties:
        """Load settings from environment variables.

        A .env file is read first (python-dotenv does not override variables
        that are already set in the environment).

        Args:
            dotenv_path: Optional explicit .env file; defaults to searching
                from the working directory upwards

        Raises:
            ConfigError: If a required variable is missing or empty
        """
        load_dotenv(dotenv_path)

        values: Dict[str, Any] = {}
        for field, env_var in cls.ENV_VARS.items():
            value = os.getenv(env_var)
            if value:
                values[field] = value

        return cls._parse(values, source='environment')

    @classmethod
    def _parse(cls, values: Dict[str, Any], source: str = 'file') -> WikiProperties:
        for field in cls.REQUIRED_FIELDS:
            value = values.get(field)
            if value is None or not str(value).strip():
                if source == 'environment':
                    raise ConfigError(
                        f"{cls.ENV_VARS[field]} is not set", config_field=field
                    )
                raise ConfigError("Required field is missing or empty", config_field=field)

        timeout = values.get('timeout', DEFAULT_TIMEOUT)
        try:
            timeout = float(timeout)
        except (TypeError, ValueError):
            raise ConfigError(f"Must be a number, got {timeout!r}", config_field='timeout')
        if timeout <= 0:
            raise ConfigError("Must be greater than zero", config_field='timeout')

        return WikiProperties(
            base_url=str(values['base_url']).strip().rstrip('/'),
            user=str(values['user']).strip(),
            password=str(values['password']),
            space_name=str(values['space_name']).strip(),
            parent_page=str(values['parent_page']).strip(),
            space_url=str(values['space_url']).strip(),
            timeout=timeout,
        )
