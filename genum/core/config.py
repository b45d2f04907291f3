"""
Configuration management for genum.
"""
import copy
from contextlib import contextmanager
from typing import Any, Dict, Optional

from genum.core.error_handling import ConfigurationError

DEFAULTS = {
    'loader': {
        'source_env_var': 'GOFILE',
        'source_extension': '.go',
        'include_tests': False,
    },
    'extraction': {
        'resolve_values': True,
        'fallback_to_syntax': True,
    },
    'generation': {
        'output_suffix': '_genum.go',
        'file_mode': 0o644,
    },
    'logging': {
        'level': 'WARNING',
    },
}


class Configuration:
    """Configuration manager for genum."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(Configuration, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        """Initialize the configuration with defaults."""
        self._config = copy.deepcopy(DEFAULTS)

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        try:
            return self._config[section][key]
        except KeyError:
            return default

    def set(self, section: str, key: str, value: Any):
        """Set a configuration value. Only known settings can be changed."""
        if section not in self._config or key not in self._config[section]:
            raise ConfigurationError(section, key)
        self._config[section][key] = value

    def reset(self):
        """Restore every setting to its default."""
        self._initialize()

    def validate(self, settings: Optional[Dict[str, Dict[str, Any]]]):
        """Raise ConfigurationError for the first unknown setting in ``settings``."""
        for section, values in (settings or {}).items():
            for key in values:
                if section not in self._config or key not in self._config[section]:
                    raise ConfigurationError(section, key)

    @contextmanager
    def override(self, settings: Optional[Dict[str, Dict[str, Any]]]):
        """Apply ``settings`` for the duration of the block, then restore the previous values."""
        saved = copy.deepcopy(self._config)
        try:
            for section, values in (settings or {}).items():
                for key, value in values.items():
                    self.set(section, key, value)
            yield self
        finally:
            self._config = saved


# Initialize configuration
config = Configuration()
