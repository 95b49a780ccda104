"""
Configuration classes for mesh heightmap generation.

This module provides the configuration dataclass used to build height maps,
with validation, defaults, and JSON serialization.
"""

import json
import logging
import math
import numbers
from typing import Dict, Any
from dataclasses import dataclass, field, asdict, fields

from ..exceptions import ConfigError, InvalidArgument

# Set up logging
logger = logging.getLogger(__name__)

VALID_UP_AXES = ['y', 'z']


def _is_real(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


@dataclass
class HeightMapConfig:
    """
    Configuration for building a height map from a point cloud.

    Attributes:
        size: Edge length of the square output grid
        look_around_matrix_size: Width of the gap filling window (positive, even)
        height_scale: Multiplier applied by the scaled height accessors
        magnification_filter: Erosion filter coefficient in [0, 1)
        workers: Threads used to aggregate points
        up_axis: Vertical axis of the source mesh ('y' or 'z')
    """
    size: int = 64
    look_around_matrix_size: int = 4
    height_scale: float = 1.0
    magnification_filter: float = 0.5
    workers: int = 1
    up_axis: str = 'y'

    # Optional parameters (stored as dict)
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.validate()

    def validate(self) -> None:
        """
        Validate configuration parameters.

        Raises:
            InvalidArgument: If configuration is invalid
        """
        if not isinstance(self.size, int) or isinstance(self.size, bool) or self.size <= 0:
            raise InvalidArgument(f"size must be a positive integer, got {self.size!r}")

        if (not isinstance(self.look_around_matrix_size, int) or self.look_around_matrix_size <= 0
                or self.look_around_matrix_size % 2 != 0):
            raise InvalidArgument(
                f"look_around_matrix_size must be a positive even number, got {self.look_around_matrix_size!r}"
            )

        if not _is_real(self.height_scale):
            raise InvalidArgument(f"height_scale must be a finite number, got {self.height_scale!r}")

        if not _is_real(self.magnification_filter) or not 0 <= self.magnification_filter < 1:
            raise InvalidArgument(f"magnification_filter must be in [0, 1), got {self.magnification_filter}")

        if not isinstance(self.workers, int) or isinstance(self.workers, bool) or self.workers < 1:
            raise InvalidArgument(f"workers must be a positive integer, got {self.workers!r}")

        if self.up_axis not in VALID_UP_AXES:
            raise InvalidArgument(f"up_axis must be one of {VALID_UP_AXES}, got '{self.up_axis}'")

    def as_dict(self) -> Dict[str, Any]:
        """
        Get configuration as a dictionary.

        Returns:
            Dictionary representation of configuration
        """
        result = asdict(self)
        # Remove extra if empty
        if not result['extra']:
            del result['extra']
        return result

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'HeightMapConfig':
        """
        Create configuration from a dictionary.

        Unknown keys are kept in ``extra``.
        """
        names = [f.name for f in fields(cls)]
        known_params = {k: v for k, v in config_dict.items() if k in names and k != 'extra'}
        extra_params = {k: v for k, v in config_dict.items() if k not in names}
        extra_params.update(config_dict.get('extra', {}))

        config = cls(**known_params)
        config.extra.update(extra_params)
        return config


class ConfigManager:
    """Reads, writes and merges height map configurations."""

    @classmethod
    def create_config(cls, **kwargs) -> HeightMapConfig:
        """
        Create configuration with default values and overrides.

        Returns:
            HeightMapConfig with specified values
        """
        return HeightMapConfig.from_dict(kwargs)

    @classmethod
    def load_config(cls, config_file: str) -> HeightMapConfig:
        """
        Load configuration from a JSON file.

        Raises:
            ConfigError: If file cannot be read or parsed
            InvalidArgument: If configuration values are invalid
        """
        try:
            with open(config_file, 'r') as f:
                config_dict = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Failed to load configuration from {config_file}: {e}") from e

        if not isinstance(config_dict, dict):
            raise ConfigError(f"Configuration in {config_file} must be a JSON object")

        logger.debug(f"Loaded configuration from {config_file}")
        return HeightMapConfig.from_dict(config_dict)

    @classmethod
    def save_config(cls, config: HeightMapConfig, config_file: str) -> None:
        """
        Save configuration to a JSON file.

        Raises:
            ConfigError: If file cannot be written
        """
        try:
            with open(config_file, 'w') as f:
                json.dump(config.as_dict(), f, indent=2)
        except (OSError, TypeError) as e:
            raise ConfigError(f"Failed to save configuration to {config_file}: {e}") from e

    @classmethod
    def merge_configs(cls, base_config: HeightMapConfig, override_config: Dict[str, Any]) -> HeightMapConfig:
        """
        Merge base configuration with override values.

        Overrides set to None are ignored.

        Returns:
            New HeightMapConfig with merged values
        """
        config_dict = base_config.as_dict()

        # Flatten extra parameters into main dict
        if 'extra' in config_dict:
            config_dict.update(config_dict.pop('extra'))

        config_dict.update({k: v for k, v in override_config.items() if v is not None})
        return HeightMapConfig.from_dict(config_dict)
