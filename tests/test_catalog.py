# Copyright 2025 Ilya Makarov
#
# Licensed under the Business Source License 1.1
# Change Date: 2028-11-05
# Change License: Apache License 2.0

"""Tests for the operation catalog"""

import dataclasses
import logging
import re

import pytest

from htop_tools.core.catalog import (
    InvocationRequest,
    Operation,
    OperationCatalog,
    OperationKind,
)
from htop_tools.core.config import ToolsConfig

from conftest import FAKE_OUTPUTS, FakeExecutor

ALL_OPERATIONS = [
    "top", "mem", "port", "disk", "memory", "load", "net",
    "md5", "sha1", "sha256", "base64", "unbase64", "urlencode", "urldecode",
    "passwd", "uuid", "encrypt", "decrypt",
]


class TestCatalogTable:
    """Shape of the operation table"""

    def test_all_operations_present(self, catalog):
        assert catalog.names() == ALL_OPERATIONS
        assert len(catalog) == 18

    def test_agent_names_exclude_crypto_pair(self, catalog):
        names = catalog.agent_names()
        assert len(names) == 16
        assert "encrypt" not in names
        assert "decrypt" not in names

    def test_kinds(self, catalog):
        assert catalog.get("disk").kind is OperationKind.NO_ARGS
        assert catalog.get("top").kind is OperationKind.LIMIT
        assert catalog.get("passwd").kind is OperationKind.LIMIT
        assert catalog.get("md5").kind is OperationKind.TEXT
        assert catalog.get("encrypt").kind is OperationKind.TEXT_WITH_PASSWORD

    def test_table_is_read_only(self, catalog):
        with pytest.raises(TypeError):
            catalog._operations["evil"] = catalog.get("md5")

    def test_operations_are_frozen(self, catalog):
        with pytest.raises(dataclasses.FrozenInstanceError):
            catalog.get("md5").name = "sha1"

    def test_default_limits_come_from_config(self, fake_executor):
        catalog = OperationCatalog(
            ToolsConfig(top_limit=3, password_length=24), executor=fake_executor
        )
        assert catalog.get("top").default_limit == 3
        assert catalog.get("mem").default_limit == 3
        assert catalog.get("passwd").default_limit == 24

    def test_contains_and_iter(self, catalog):
        assert "md5" in catalog
        assert "frobnicate" not in catalog
        assert all(isinstance(op, Operation) for op in catalog)


class TestDispatch:
    """dispatch() contracts"""

    def test_unknown_operation(self, catalog):
        assert catalog.dispatch(InvocationRequest("frobnicate")) == "Unknown command: frobnicate"

    def test_text_operation(self, catalog):
        assert catalog.run("md5", input="hello") == "5d41402abc4b2a76b9719d911017c592"

    def test_missing_input(self, catalog):
        for name in ["md5", "sha1", "sha256", "base64", "unbase64", "urlencode", "urldecode"]:
            assert catalog.run(name) == "Error: input required"

    def test_empty_input_is_present(self, catalog):
        assert catalog.run("md5", input="") == "d41d8cd98f00b204e9800998ecf8427e"

    def test_malformed_input_becomes_text(self, catalog):
        assert catalog.run("unbase64", input="a") == "Error: Invalid base64 string"
        assert catalog.run("urldecode", input="%zz") == "Error: Invalid URL encoded string"

    def test_limit_defaults(self, catalog, fake_executor):
        result = catalog.run("top")
        assert result == FAKE_OUTPUTS["ps aux --sort=-%cpu | head -11"]
        assert fake_executor.calls == ["ps aux --sort=-%cpu | head -11"]

    def test_explicit_limit(self, catalog, fake_executor):
        catalog.run("top", limit=5)
        assert fake_executor.calls == ["ps aux --sort=-%cpu | head -6"]

    def test_negative_limit_is_error_text(self, catalog, fake_executor):
        result = catalog.run("mem", limit=-4)
        assert result.startswith("Error: limit must be non-negative")
        assert fake_executor.calls == []

    def test_shell_failure_is_text(self, config):
        catalog = OperationCatalog(config, executor=FakeExecutor())
        assert catalog.run("disk").startswith("Error: Command failed with exit code 127")

    def test_passwd_default_and_custom_length(self, catalog):
        assert len(catalog.run("passwd")) == 16
        assert len(catalog.run("passwd", limit=30)) == 30
        assert catalog.run("passwd", limit=0) == ""

    def test_uuid(self, catalog):
        assert re.match(
            r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
            catalog.run("uuid"),
        )

    def test_encrypt_requires_password(self, catalog):
        assert catalog.run("encrypt", input="hello") == "Error: password required"
        assert catalog.run("encrypt", password="pw") == "Error: input required"

    def test_encrypt_decrypt_round_trip(self, catalog):
        payload = catalog.run("encrypt", input="hello world", password="secret")
        assert catalog.run("decrypt", input=payload, password="secret") == "hello world"

    def test_wrong_password_is_error_text(self, catalog):
        payload = catalog.run("encrypt", input="the plaintext", password="p1")
        result = catalog.run("decrypt", input=payload, password="p2")
        assert result.startswith("Error:")
        assert "the plaintext" not in result

    def test_bad_payload_is_error_text(self, catalog):
        assert catalog.run("decrypt", input="garbage", password="pw") == (
            "Error: Invalid encrypted format"
        )

    def test_unexpected_exception_becomes_text(self, config):
        def boom():
            raise RuntimeError("kaboom")

        catalog = OperationCatalog(config, executor=FakeExecutor())
        operations = dict(catalog._operations)
        operations["disk"] = dataclasses.replace(operations["disk"], handler=boom)
        catalog._operations = operations

        assert catalog.run("disk") == "Error: kaboom"

    def test_oversized_password_is_error_text(self, catalog):
        assert catalog.run("passwd", limit=9999999999).startswith(
            "Error: password length must be at most"
        )

    def test_error_is_logged_with_details(self, catalog, caplog):
        with caplog.at_level(logging.DEBUG, logger="htop_tools"):
            catalog.run("unbase64", input="!!!!")

        assert "'type': 'InvalidInputError'" in caplog.text
        assert "'field': 'input'" in caplog.text
