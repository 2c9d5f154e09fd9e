"""
Configuration Manager for Deformation Analyses.

Plain-text configuration files contain one ``key = value`` pair per line:

    # Bay of Bothnia, winter 2012
    scenario_name = Bothnia 2012
    observations_file = data/buoys_2012.csv
    static_file = data/shore_points.csv
    max_static = 1
    keep_smallest_static = true
"""

from pathlib import Path
from typing import Dict, Any, Union

from ..core.exceptions import ConfigurationError


DEFAULT_CONFIG: Dict[str, Any] = {
    'scenario_name': 'deformation',
    'observations_file': None,
    'static_file': None,
    'min_angle': 15.0,
    'max_static': 1,
    'keep_smallest_static': True,
    'min_area': 1e-6,
    'n_workers': 1,
    'output_dir': 'outputs',
    'fit_power_law': True,
}

_TYPES = {
    'min_angle': float,
    'max_static': int,
    'keep_smallest_static': bool,
    'min_area': float,
    'n_workers': int,
    'fit_power_law': bool,
}


class ConfigManager:
    """Load, default and validate analysis configurations."""

    @staticmethod
    def get_default_config() -> Dict[str, Any]:
        """Return a fresh copy of the default configuration."""
        return dict(DEFAULT_CONFIG)

    @staticmethod
    def _parse_value(value: str) -> Any:
        """Convert a raw string to bool, int, float, None or str."""
        lowered = value.lower()
        if lowered in ('true', 'yes', 'on'):
            return True
        if lowered in ('false', 'no', 'off'):
            return False
        if lowered in ('none', 'null', ''):
            return None
        for cast in (int, float):
            try:
                return cast(value)
            except ValueError:
                pass
        return value.strip('"\'')

    @staticmethod
    def load(filepath: Union[str, Path]) -> Dict[str, Any]:
        """
        Load configuration from file on top of the defaults.

        Args:
            filepath: Path to ``key = value`` text file

        Returns:
            Validated configuration dictionary

        Raises:
            FileNotFoundError: If the file does not exist
            ConfigurationError: On malformed lines or invalid values
        """
        filepath = Path(filepath)
        config = ConfigManager.get_default_config()

        with open(filepath, 'r') as f:
            for lineno, line in enumerate(f, 1):
                line = line.split('#', 1)[0].strip()
                if not line:
                    continue
                if '=' not in line:
                    raise ConfigurationError(
                        f"{filepath}:{lineno}: expected 'key = value', got '{line}'"
                    )
                key, value = line.split('=', 1)
                config[key.strip()] = ConfigManager._parse_value(value.strip())

        return ConfigManager.validate(config)

    @staticmethod
    def validate(config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Check value types and ranges.

        Returns:
            The configuration with numeric values coerced

        Raises:
            ConfigurationError: If a value is out of range or of wrong type
        """
        for key, kind in _TYPES.items():
            if key not in config or config[key] is None:
                continue
            value = config[key]
            if kind is bool:
                if not isinstance(value, bool):
                    raise ConfigurationError(f"'{key}' must be true or false, got {value!r}")
            elif kind is int:
                if (isinstance(value, bool) or not isinstance(value, (int, float))
                        or not float(value).is_integer()):
                    raise ConfigurationError(f"'{key}' must be an integer, got {value!r}")
                config[key] = int(value)
            else:
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise ConfigurationError(f"'{key}' must be a number, got {value!r}")
                config[key] = float(value)

        if config.get('max_static', 0) < 0:
            raise ConfigurationError("'max_static' must be >= 0")
        if not 0.0 <= config.get('min_angle', 15.0) <= 60.0:
            raise ConfigurationError("'min_angle' must be within [0, 60] degrees")
        if config.get('min_area', 0.0) < 0:
            raise ConfigurationError("'min_area' must be >= 0")
        if config.get('n_workers', 1) < 1:
            raise ConfigurationError("'n_workers' must be >= 1")

        return config
