"""Registry of named search configurations."""

from typing import Dict, Type

from .base import BaseConfig

DEFAULT_CONFIG = 'ringed-landable'


class ConfigurationLoader:
    """Loads and manages search configurations by name."""

    def __init__(self):
        self._loaded_configs: Dict[str, Type[BaseConfig]] = {}
        self._register_builtin_configs()

    def _register_builtin_configs(self):
        """Register built-in configurations."""
        from .ringed_landable import RingedLandableConfig
        from .earthlike_ringed_landable import EarthlikeRingedLandableConfig

        self._loaded_configs['ringed-landable'] = RingedLandableConfig
        self._loaded_configs['earthlike-ringed-landable'] = EarthlikeRingedLandableConfig

    def load_config_by_name(self, config_name: str) -> BaseConfig:
        """Load a built-in configuration by name.

        Args:
            config_name: Name of the built-in configuration

        Returns:
            Instantiated configuration object

        Raises:
            ValueError: If configuration name is not found
        """
        if config_name not in self._loaded_configs:
            available = ', '.join(sorted(self._loaded_configs))
            raise ValueError(f"Unknown configuration: {config_name} (available: {available})")

        config_class = self._loaded_configs[config_name]
        return config_class()

    def register_config(self, name: str, config_class: Type[BaseConfig]):
        """Register a new configuration class.

        Args:
            name: Name to register the configuration under
            config_class: Configuration class that inherits from BaseConfig
        """
        if not (isinstance(config_class, type) and issubclass(config_class, BaseConfig)):
            raise ValueError("Configuration class must inherit from BaseConfig")

        self._loaded_configs[name] = config_class

    def list_available_configs(self) -> Dict[str, str]:
        """List all available configurations.

        Returns:
            Dictionary mapping config names to descriptions
        """
        return {
            name: config_class().get_description()
            for name, config_class in self._loaded_configs.items()
        }


# Global configuration loader instance
config_loader = ConfigurationLoader()
