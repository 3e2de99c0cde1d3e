"""Configuration manager for loading and validating .waitfor.yml"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from waitfor.domain.config import (
    AppConfig,
    CommandProbeConfig,
    HttpProbeConfig,
    TcpProbeConfig,
    WaitConfig,
)

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".waitfor.yml"

# Environment variable -> (section, key, type)
ENV_OVERRIDES = {
    "WAITFOR_LIMIT": ("wait", "limit", float),
    "WAITFOR_MIN_INTERVAL": ("wait", "min_interval", float),
    "WAITFOR_MAX_INTERVAL": ("wait", "max_interval", float),
    "WAITFOR_BACKOFF": ("wait", "backoff", float),
    "WAITFOR_REPORTS": ("wait", "reports", int),
    "WAITFOR_DESCRIPTION": ("wait", "description", str),
    "WAITFOR_HTTP_TIMEOUT": ("http", "timeout", float),
}


class ConfigurationError(Exception):
    """Configuration validation error."""

    pass


class ConfigManager:
    """Manages configuration from .waitfor.yml and environment variables

    Configuration priority:
    1. Default values (defined in Pydantic models)
    2. .waitfor.yml file (searched from current directory upwards)
    3. Environment variables (WAITFOR_*)
    4. CLI arguments (handled by CLI layer)
    """

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize config manager

        Args:
            config_path: Path to .waitfor.yml (searches from current dir if None)

        Raises:
            ConfigurationError: If configuration validation fails
        """
        if isinstance(config_path, str):
            config_path = Path(config_path)
        self.config_path = config_path or self._find_config_file()
        try:
            self.config: AppConfig = self._load_config()
        except ValidationError as e:
            errors = []
            for error in e.errors():
                field = ".".join(str(x) for x in error["loc"])
                errors.append(f"  - {field}: {error['msg']}")
            raise ConfigurationError(
                "Configuration validation failed:\n" + "\n".join(errors)
            ) from e

    def _find_config_file(self) -> Optional[Path]:
        """Find .waitfor.yml starting from current directory

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        for parent in [current] + list(current.parents):
            config_file = parent / CONFIG_FILE_NAME
            if config_file.exists():
                logger.info(f"Found config file: {config_file}")
                return config_file
        logger.debug(f"No {CONFIG_FILE_NAME} found, using defaults")
        return None

    def _load_config(self) -> AppConfig:
        """Load configuration from file and environment, then validate

        Raises:
            ValidationError: If configuration is invalid
        """
        config_dict = copy.deepcopy(AppConfig().model_dump())

        if self.config_path and self.config_path.exists():
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    file_config = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config from {self.config_path}: {e}")
                logger.info("Using default configuration")
            else:
                if not isinstance(file_config, dict):
                    raise ConfigurationError(f"{self.config_path}: top level must be a mapping")
                config_dict = self._merge_config(config_dict, file_config)
                logger.info(f"Loaded configuration from {self.config_path}")

        config_dict = self._apply_env_overrides(config_dict)
        return AppConfig(**config_dict)

    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge configuration dictionaries"""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_config(result[key], value)
            else:
                result[key] = value
        return result

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply WAITFOR_* environment variable overrides

        Raises:
            ConfigurationError: If a variable cannot be parsed
        """
        for name, (section, key, cast) in ENV_OVERRIDES.items():
            raw = os.getenv(name)
            if not raw:
                continue
            try:
                config.setdefault(section, {})[key] = cast(raw)
            except ValueError as e:
                raise ConfigurationError(f"Invalid value for {name}: {raw!r}") from e
            logger.debug(f"{name} overrides {section}.{key}")
        return config

    def get_wait_config(self) -> WaitConfig:
        return self.config.wait

    def get_http_config(self) -> HttpProbeConfig:
        return self.config.http

    def get_command_config(self) -> CommandProbeConfig:
        return self.config.command

    def get_tcp_config(self) -> TcpProbeConfig:
        return self.config.tcp
