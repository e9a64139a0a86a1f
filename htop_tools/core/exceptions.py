# Copyright 2025 Ilya Makarov
#
# Licensed under the Business Source License 1.1
# Change Date: 2028-11-05
# Change License: Apache License 2.0

"""
htop-tools Exception Hierarchy

Exceptions are raised inside the operations and converted to plain text
at the catalog boundary, so callers of the front-ends only ever see strings.

Exception Hierarchy:
    ToolsError (base)
    ├── ConfigError
    ├── InvalidInputError
    ├── ShellError
    │   └── ShellTimeoutError
    └── CryptoError
        ├── InvalidPayloadError
        └── DecryptionError
"""

from typing import Any, Dict, Optional

# ============================================================================
# Base Exceptions
# ============================================================================


class ToolsError(Exception):
    """Base exception for all htop-tools errors"""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization"""
        result = {
            "type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }

        if self.cause:
            result["cause"] = {
                "type": self.cause.__class__.__name__,
                "message": str(self.cause),
            }

        return result

    def __str__(self):
        base = self.message
        if self.details:
            base += f" | Details: {self.details}"
        if self.cause:
            base += f" | Caused by: {self.cause}"
        return base


# ============================================================================
# Configuration Errors
# ============================================================================


class ConfigError(ToolsError):
    """Configuration-related errors"""


# ============================================================================
# Input Errors
# ============================================================================


class InvalidInputError(ToolsError):
    """Malformed or missing operation input"""

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["field"] = self.field
        return result


# ============================================================================
# Shell Errors
# ============================================================================


class ShellError(ToolsError):
    """External command failed"""

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        exit_code: Optional[int] = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.command = command
        self.exit_code = exit_code

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result.update(
            {
                "command": self.command,
                "exit_code": self.exit_code,
            }
        )
        return result


class ShellTimeoutError(ShellError):
    """External command exceeded its wall-clock bound"""

    def __init__(self, message: str, timeout: float, **kwargs):
        super().__init__(message, **kwargs)
        self.timeout = timeout

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["timeout"] = self.timeout
        return result


# ============================================================================
# Crypto Errors
# ============================================================================


class CryptoError(ToolsError):
    """Encryption or decryption failed"""


class InvalidPayloadError(CryptoError):
    """Encrypted payload is not in iv:ciphertext form"""


class DecryptionError(CryptoError):
    """Wrong password or corrupted ciphertext (indistinguishable)"""


__all__ = [
    "ToolsError",
    "ConfigError",
    "InvalidInputError",
    "ShellError",
    "ShellTimeoutError",
    "CryptoError",
    "InvalidPayloadError",
    "DecryptionError",
]
