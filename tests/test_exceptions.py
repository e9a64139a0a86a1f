# Copyright 2025 Ilya Makarov
#
# Licensed under the Business Source License 1.1
# Change Date: 2028-11-05
# Change License: Apache License 2.0

"""Tests for the ToolsError hierarchy"""

from htop_tools.core.exceptions import (
    CryptoError,
    DecryptionError,
    InvalidInputError,
    ShellError,
    ShellTimeoutError,
    ToolsError,
)


def test_base_to_dict_with_cause():
    cause = ValueError("bad digit")
    error = ToolsError("conversion failed", details={"value": "x"}, cause=cause)

    assert error.to_dict() == {
        "type": "ToolsError",
        "message": "conversion failed",
        "details": {"value": "x"},
        "cause": {"type": "ValueError", "message": "bad digit"},
    }
    assert str(error) == "conversion failed | Details: {'value': 'x'} | Caused by: bad digit"


def test_input_error_carries_field():
    data = InvalidInputError("Invalid base64 string", field="input").to_dict()
    assert data["type"] == "InvalidInputError"
    assert data["field"] == "input"
    assert "cause" not in data


def test_timeout_error_carries_command_and_timeout():
    error = ShellTimeoutError("Command timed out after 2s: sleep 5", timeout=2, command="sleep 5")

    assert isinstance(error, ShellError)
    data = error.to_dict()
    assert data["command"] == "sleep 5"
    assert data["exit_code"] is None
    assert data["timeout"] == 2


def test_crypto_errors_share_base():
    assert issubclass(DecryptionError, CryptoError)
    assert issubclass(CryptoError, ToolsError)
