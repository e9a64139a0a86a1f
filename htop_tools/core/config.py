# Copyright 2025 Ilya Makarov
#
# Licensed under the Business Source License 1.1
# Change Date: 2028-11-05
# Change License: Apache License 2.0

"""
htop-tools Configuration System

Configuration is loaded once at startup and handed to the catalog and the
front-ends as an immutable value. Sources, lowest precedence first:
- Programmatic defaults
- ~/.htop-tools/config.yaml
- ./.htop-tools.yaml
- An explicit config file
- Environment variables (HTOP_TOOLS_*)
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .crypto import MAX_PASSWORD_LENGTH
from .exceptions import ConfigError

logger = logging.getLogger("htop_tools.config")


# ============================================================================
# Configuration Model
# ============================================================================


class ToolsConfig(BaseModel):
    """Complete htop-tools configuration"""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    enabled: bool = Field(
        default=True, description="Register the CLI, chat and agent surfaces"
    )
    top_limit: int = Field(
        default=10,
        alias="topLimit",
        description="Default number of processes listed by top/mem",
        ge=0,
    )
    password_length: int = Field(
        default=16,
        description="Default length of generated passwords",
        ge=0,
        le=MAX_PASSWORD_LENGTH,
    )
    shell_timeout: float = Field(
        default=30.0, description="Shell command timeout (seconds)", gt=0
    )
    chat_max_length: int = Field(
        default=2000, description="Chat replies are truncated past this length", ge=1
    )
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[Path] = Field(
        default=None, description="Optional rotating log file"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {valid_levels}")
        return v_upper

    @field_validator("log_file", mode="before")
    @classmethod
    def ensure_path(cls, v):
        """Convert strings to Path objects"""
        if isinstance(v, str):
            return Path(v).expanduser()
        return v


# ============================================================================
# Configuration Loader
# ============================================================================


class ConfigLoader:
    """Load configuration from multiple sources"""

    @staticmethod
    def load_from_env() -> Dict[str, Any]:
        """Load configuration from environment variables"""
        config: Dict[str, Any] = {}

        enabled = os.getenv("HTOP_TOOLS_ENABLED")
        if enabled:
            config["enabled"] = enabled.lower() in ("true", "1", "yes", "on")

        top_limit = os.getenv("HTOP_TOOLS_TOP_LIMIT")
        if top_limit:
            config["top_limit"] = top_limit

        password_length = os.getenv("HTOP_TOOLS_PASSWORD_LENGTH")
        if password_length:
            config["password_length"] = password_length

        shell_timeout = os.getenv("HTOP_TOOLS_SHELL_TIMEOUT")
        if shell_timeout:
            config["shell_timeout"] = shell_timeout

        chat_max_length = os.getenv("HTOP_TOOLS_CHAT_MAX_LENGTH")
        if chat_max_length:
            config["chat_max_length"] = chat_max_length

        log_level = os.getenv("HTOP_TOOLS_LOG_LEVEL")
        if log_level:
            config["log_level"] = log_level

        log_file = os.getenv("HTOP_TOOLS_LOG_FILE")
        if log_file:
            config["log_file"] = log_file

        return config

    @staticmethod
    def load_from_file(file_path: Path) -> Dict[str, Any]:
        """Load configuration from a YAML (or JSON) file"""
        if not file_path.exists():
            return {}

        import yaml

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(
                f"Failed to load config file {file_path}", cause=e
            ) from e

        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file {file_path} must contain a mapping",
                details={"type": type(data).__name__},
            )
        return data

    @staticmethod
    def merge_configs(*configs: Mapping[str, Any]) -> Dict[str, Any]:
        """Deep merge multiple configuration dictionaries"""
        result: Dict[str, Any] = {}
        for config in configs:
            for key, value in config.items():
                if (
                    key in result
                    and isinstance(result[key], dict)
                    and isinstance(value, dict)
                ):
                    result[key] = ConfigLoader.merge_configs(result[key], value)
                else:
                    result[key] = value
        return result


def build_config(data: Optional[Mapping[str, Any]] = None) -> ToolsConfig:
    """
    Validate a raw mapping (host plugin config, merged files) into ToolsConfig.

    Raises:
        ConfigError: If any value fails validation
    """
    try:
        return ToolsConfig(**dict(data or {}))
    except ValidationError as e:
        messages = []
        for error in e.errors():
            field = ".".join(str(loc) for loc in error["loc"])
            messages.append(f"{field}: {error['msg']}")
        raise ConfigError(
            f"Config validation failed: {'; '.join(messages)}", cause=e
        ) from e


def load_config(
    config_file: Optional[Path] = None, env_override: bool = True
) -> ToolsConfig:
    """
    Load configuration from all sources

    Args:
        config_file: Optional specific config file to load
        env_override: Whether environment variables override file config

    Returns:
        ToolsConfig instance
    """
    configs = []

    default_locations = [
        Path.home() / ".htop-tools" / "config.yaml",
        Path.cwd() / ".htop-tools.yaml",
    ]

    for location in default_locations:
        if location.exists():
            logger.debug(f"Loading config from {location}")
            configs.append(ConfigLoader.load_from_file(location))

    if config_file:
        config_file = Path(config_file)
        if not config_file.exists():
            raise ConfigError(f"Config file not found: {config_file}")
        configs.append(ConfigLoader.load_from_file(config_file))

    if env_override:
        configs.append(ConfigLoader.load_from_env())

    merged = ConfigLoader.merge_configs(*configs) if configs else {}
    return build_config(merged)
