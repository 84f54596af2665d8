import os
import tomllib
from pathlib import Path

CONFIG_ENVIRONMENT_VARIABLE = 'REPODM_CONFIG'
DEFAULT_CONFIG_FILE = 'repodm.toml'

# Settings key constants
SETTING_NEAR_THRESHOLD = 'compare.near_threshold'
SETTING_HIGH_THRESHOLD = 'compare.high_threshold'
SETTING_FETCH_CONCURRENCY = 'fetch.concurrency'
SETTING_GITHUB_API_URL = 'github.api_url'
SETTING_GITHUB_REF = 'github.ref'
SETTING_GITHUB_TOKEN = 'github.token'
SETTING_LOGGING_PATH = 'logging.path'


class Settings:
    """Read-only view of a repodm TOML configuration file.

    The file is optional. Without it every get() returns its default. Nested tables are
    addressed with dot notation, e.g. ``compare.near_threshold`` reads::

        [compare]
        near_threshold = 0.75
    """

    def __init__(self, path: Path | None = None):
        """Load settings from a TOML file.

        Args:
            path: TOML file to read, or None for empty settings

        Raises:
            FileNotFoundError: path is given but does not exist
            tomllib.TOMLDecodeError: The file is not valid TOML
        """
        self._path = path
        self._settings = {}

        if path is not None:
            with open(path, 'rb') as f:
                self._settings = tomllib.load(f)

    @classmethod
    def discover(cls, path: str | os.PathLike | None = None) -> 'Settings':
        """Load settings from an explicit path, $REPODM_CONFIG, or ./repodm.toml if it exists."""
        if path is None:
            path = os.environ.get(CONFIG_ENVIRONMENT_VARIABLE)
        if path is not None:
            return cls(Path(path))

        default = Path.cwd() / DEFAULT_CONFIG_FILE
        return cls(default if default.is_file() else None)

    @property
    def path(self) -> Path | None:
        return self._path

    def get(self, key: str, default=None):
        """Get a setting value by dot-separated key path, or default if not found.

        Examples:
            >>> settings.get(SETTING_NEAR_THRESHOLD, 0.7)
            0.75
            >>> settings.get('nonexistent.key', 'fallback')
            'fallback'
        """
        value = self._settings

        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value
