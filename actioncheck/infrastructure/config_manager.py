#!/usr/bin/env python3
"""Hierarchical configuration manager for ActionCheck.

This module provides configuration management with:
- Layered precedence (defaults, file, environment, CLI, runtime)
- YAML configuration files
- Environment variable overrides (ACTIONCHECK_*)
- Dot-notation access and deep merging

Example:
    >>> config = ConfigManager()
    >>> config.load_file("actioncheck.yaml")
    >>> config.get("actioncheck.workflows_dir")
    '.github/workflows'
"""

import copy
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from actioncheck.core.constants import DEFAULT_WORKFLOWS_DIR, ErrorCode

ENV_PREFIX = "ACTIONCHECK_"
ENV_NESTING = "__"


class ConfigSource(Enum):
    """Configuration source precedence levels."""

    COMPILED_DEFAULTS = 1  # Lowest precedence
    USER_CONFIG = 2
    ENVIRONMENT = 3
    CLI_ARGS = 4
    RUNTIME = 5  # Highest precedence


class ConfigError(Exception):
    """Configuration error."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class ConfigManager:
    """Hierarchical configuration manager.

    Manages configuration from multiple sources with precedence:
    1. Compiled defaults (lowest)
    2. User config file (--config)
    3. Environment variables (ACTIONCHECK_*)
    4. CLI arguments
    5. Runtime updates (highest)
    """

    DEFAULT_CONFIG = {
        "actioncheck": {
            "workflows_dir": DEFAULT_WORKFLOWS_DIR,
            "logging": {
                "level": "INFO",
                "file": None,
            },
            "outputs": {
                "write_outputs": True,
                "step_summary": True,
            },
        }
    }

    def __init__(
        self, config_file: Optional[str] = None, environ: Optional[Mapping[str, str]] = None
    ):
        """Initialize configuration manager.

        Args:
            config_file: Optional config file to load
            environ: Environment mapping (defaults to os.environ)
        """
        self._config: Dict[ConfigSource, Dict[str, Any]] = {}
        self._config[ConfigSource.COMPILED_DEFAULTS] = copy.deepcopy(self.DEFAULT_CONFIG)

        if config_file:
            self.load_file(config_file)

        self._load_environment(os.environ if environ is None else environ)

    def load_file(self, file_path: str, source: ConfigSource = ConfigSource.USER_CONFIG) -> None:
        """Load configuration from YAML file.

        Args:
            file_path: Path to YAML config file
            source: Configuration source level

        Raises:
            ConfigError: If file cannot be loaded or parsed
        """
        path = Path(file_path).expanduser()

        if not path.exists():
            raise ConfigError(f"Config file not found: {file_path}", ErrorCode.NOT_FOUND)

        try:
            with open(path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML parse error in {file_path}: {e}", ErrorCode.INVALID_INPUT)
        except OSError as e:
            raise ConfigError(f"Error loading config {file_path}: {e}", ErrorCode.PERMISSION_DENIED)

        if config_data is None:
            config_data = {}
        if not isinstance(config_data, dict):
            raise ConfigError(f"Invalid config format in {file_path}", ErrorCode.INVALID_INPUT)

        if "actioncheck" not in config_data:
            config_data = {"actioncheck": config_data}

        self._config[source] = config_data

    def load_dict(
        self, config_data: Dict[str, Any], source: ConfigSource = ConfigSource.RUNTIME
    ) -> None:
        """Load configuration from dictionary.

        Args:
            config_data: Configuration dictionary
            source: Configuration source level
        """
        self._config[source] = copy.deepcopy(config_data)

    def _load_environment(self, environ: Mapping[str, str]) -> None:
        """Load configuration from environment variables.

        Variables use ``__`` for nesting:
        ACTIONCHECK_LOGGING__LEVEL=DEBUG -> actioncheck.logging.level
        ACTIONCHECK_WORKFLOWS_DIR=ci     -> actioncheck.workflows_dir
        """
        env_config: Dict[str, Any] = {}

        for key, value in environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            parts = key[len(ENV_PREFIX):].lower().split(ENV_NESTING)
            if not all(parts):
                continue

            current = env_config
            for part in parts[:-1]:
                current = current.setdefault(part, {})
                if not isinstance(current, dict):
                    break
            else:
                current[parts[-1]] = self._parse_env_value(value)

        if env_config:
            self._config[ConfigSource.ENVIRONMENT] = {"actioncheck": env_config}

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value into bool, int, float or str."""
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Args:
            key: Dot-separated key path (e.g., "actioncheck.logging.level")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        for source in sorted(self._config.keys(), key=lambda s: s.value, reverse=True):
            value = self._get_nested(self._config[source], key)
            if value is not None:
                return value

        return default

    def _get_nested(self, config: Dict[str, Any], key: str) -> Optional[Any]:
        current: Any = config
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return None
            current = current[part]
        return current

    def get_all(self) -> Dict[str, Any]:
        """Get merged configuration from all sources."""
        merged: Dict[str, Any] = {}
        for source in sorted(self._config.keys(), key=lambda s: s.value):
            merged = self._deep_merge(merged, self._config[source])
        return merged

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result
