#!/usr/bin/env python3
"""
Configuration loader for chord generation.

Provides unified configuration management using YAML files. Handles
conversion of the ``generation`` and ``keyboard`` sections into the
immutable values the engine is built from.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List

from chord_framework.chord_types import ChordConfigError, GenerationConfig
from chord_framework.keyboard_model import KeyboardModel


class ConfigLoader:
    """Handles loading and processing of YAML configuration files."""

    SECTIONS = ('generation', 'keyboard', 'output_formats', 'cli')

    def __init__(self, config_path: str = "config.yaml"):
        """
        Initialize configuration loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        self._config_cache: Optional[Dict[str, Any]] = None

    def load_config(self) -> Dict[str, Any]:
        """
        Load YAML configuration file with validation.

        Returns:
            Full configuration dictionary

        Raises:
            FileNotFoundError: If configuration file doesn't exist
            yaml.YAMLError: If YAML parsing fails
        """
        if self._config_cache is not None:
            return self._config_cache

        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Error parsing YAML configuration: {e}")

        if config is None:
            config = {}

        if not isinstance(config, dict):
            raise ChordConfigError(f"Configuration root must be a mapping: {self.config_path}")

        self._config_cache = config
        return config

    def get_section(self, name: str) -> Dict[str, Any]:
        """Get a top-level section, empty if absent."""
        section = self.load_config().get(name) or {}
        if not isinstance(section, dict):
            raise ChordConfigError(f"Section '{name}' must be a mapping")
        return section

    def get_generation_config(self, overrides: Optional[Dict[str, Any]] = None) -> GenerationConfig:
        """
        Build the engine configuration from the ``generation`` section.

        Args:
            overrides: Values taking precedence over the file (None values ignored)

        Returns:
            Validated GenerationConfig

        Raises:
            ChordConfigError: If the resulting settings are invalid
        """
        settings = dict(self.get_section('generation'))
        if overrides:
            settings.update({key: value for key, value in overrides.items() if value is not None})
        return GenerationConfig.from_dict(settings)

    def get_keyboard_model(self) -> KeyboardModel:
        """
        Build the keyboard model, using the CC1 layout unless overridden.

        Returns:
            KeyboardModel instance
        """
        keyboard_config = self.get_section('keyboard')
        if not keyboard_config:
            return KeyboardModel.default()
        return KeyboardModel.from_dict(keyboard_config)

    def get_output_format_config(self, format_name: str) -> Dict[str, Any]:
        """
        Get output format configuration.

        Args:
            format_name: Name of output format (table, csv)

        Returns:
            Output format configuration
        """
        output_formats = self.get_section('output_formats')
        return output_formats.get(format_name) or {}

    def get_cli_config(self) -> Dict[str, Any]:
        """
        Get CLI defaults.

        Returns:
            CLI configuration with argument defaults
        """
        return self.get_section('cli')

    def validate_generation_config(self) -> List[str]:
        """
        Validate the configuration and return any issues found.

        Returns:
            List of validation error messages (empty if valid)
        """
        try:
            full_config = self.load_config()
        except (FileNotFoundError, yaml.YAMLError, ChordConfigError) as e:
            return [f"Configuration error: {e}"]

        issues = []

        unknown_sections = [key for key in full_config if key not in self.SECTIONS]
        if unknown_sections:
            issues.append(f"Unknown configuration sections: {unknown_sections}")

        try:
            generation = self.get_section('generation')
            known = set(GenerationConfig.__dataclass_fields__)
            unknown_settings = sorted(key for key in generation if key not in known)
            if unknown_settings:
                issues.append(f"Unknown generation settings: {unknown_settings}")
            self.get_generation_config()
        except ChordConfigError as e:
            issues.append(f"Invalid generation settings: {e}")

        try:
            self.get_keyboard_model()
        except ChordConfigError as e:
            issues.append(f"Invalid keyboard model: {e}")

        return issues


# Global configuration loader instance
_config_loader: Optional[ConfigLoader] = None


def get_config_loader(config_path: str = "config.yaml") -> ConfigLoader:
    """
    Get global configuration loader instance (singleton pattern).

    Args:
        config_path: Path to configuration file

    Returns:
        ConfigLoader instance
    """
    global _config_loader

    if _config_loader is None or _config_loader.config_path != Path(config_path):
        _config_loader = ConfigLoader(config_path)

    return _config_loader


def load_generation_config(config_path: str = "config.yaml",
                           overrides: Optional[Dict[str, Any]] = None) -> GenerationConfig:
    """
    Convenience function to load the engine configuration.

    Args:
        config_path: Path to configuration file
        overrides: Values taking precedence over the file

    Returns:
        Validated GenerationConfig
    """
    loader = get_config_loader(config_path)
    return loader.get_generation_config(overrides)
