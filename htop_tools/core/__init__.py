# Copyright 2025 Ilya Makarov
#
# Licensed under the Business Source License 1.1
# Change Date: 2028-11-05
# Change License: Apache License 2.0

"""
htop-tools Core

Operation catalog, shell executor, crypto utilities and configuration.
"""

from .catalog import (
    InvocationRequest,
    Operation,
    OperationCatalog,
    OperationKind,
)
from .config import ConfigLoader, ToolsConfig, build_config, load_config
from .exceptions import (
    ConfigError,
    CryptoError,
    DecryptionError,
    InvalidInputError,
    InvalidPayloadError,
    ShellError,
    ShellTimeoutError,
    ToolsError,
)
from .shell import ShellExecutor, is_error
from .system import SystemInspector

__all__ = [
    # Catalog
    "InvocationRequest",
    "Operation",
    "OperationCatalog",
    "OperationKind",
    # Config
    "ConfigLoader",
    "ToolsConfig",
    "build_config",
    "load_config",
    # Errors
    "ConfigError",
    "CryptoError",
    "DecryptionError",
    "InvalidInputError",
    "InvalidPayloadError",
    "ShellError",
    "ShellTimeoutError",
    "ToolsError",
    # Shell
    "ShellExecutor",
    "SystemInspector",
    "is_error",
]
