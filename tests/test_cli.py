# Copyright 2025 Ilya Makarov
#
# Licensed under the Business Source License 1.1
# Change Date: 2028-11-05
# Change License: Apache License 2.0

"""Tests for the htop-tools click CLI"""

import json

import pytest
from click.testing import CliRunner

from htop_tools.cli import cli
from htop_tools.core.catalog import OperationCatalog
from htop_tools.core.config import ToolsConfig

from conftest import FAKE_OUTPUTS, FakeExecutor


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, config, fake_executor):
    """Invoke the CLI against a catalog backed by canned shell output"""

    def _invoke(*args, executor=None):
        catalog = OperationCatalog(config, executor=executor or fake_executor)
        return runner.invoke(
            cli, list(args), obj={"config": config, "catalog": catalog}
        )

    return _invoke


class TestHelp:

    def test_help_lists_every_operation(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in [
            "top", "mem", "port", "disk", "memory", "load", "net",
            "md5", "sha1", "sha256", "base64", "unbase64", "urlencode", "urldecode",
            "passwd", "uuid", "encrypt", "decrypt",
        ]:
            assert f"htop-tools {name}" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output


class TestOperations:

    def test_md5(self, invoke):
        result = invoke("md5", "hello")
        assert result.exit_code == 0
        assert result.stdout == "5d41402abc4b2a76b9719d911017c592\n"

    def test_base64_and_back(self, invoke):
        assert invoke("base64", "hello").stdout == "aGVsbG8=\n"
        assert invoke("unbase64", "aGVsbG8=").stdout == "hello\n"

    def test_url(self, invoke):
        assert invoke("urlencode", "hello world").stdout == "hello%20world\n"
        assert invoke("urldecode", "hello%20world").stdout == "hello world\n"

    def test_top_default_limit(self, invoke, fake_executor):
        result = invoke("top")
        assert result.stdout == FAKE_OUTPUTS["ps aux --sort=-%cpu | head -11"] + "\n"
        assert fake_executor.calls == ["ps aux --sort=-%cpu | head -11"]

    def test_mem_with_number(self, invoke):
        result = invoke("mem", "-n", "3")
        assert result.stdout == FAKE_OUTPUTS["ps aux --sort=-%mem | head -4"] + "\n"

    def test_port(self, invoke):
        assert invoke("port").stdout == FAKE_OUTPUTS["ss -tuln"] + "\n"

    def test_passwd_length(self, invoke):
        result = invoke("passwd", "--length", "24")
        assert len(result.stdout.rstrip("\n")) == 24

    def test_uuid(self, invoke):
        assert len(invoke("uuid").stdout.strip()) == 36

    def test_encrypt_then_decrypt(self, invoke):
        payload = invoke("encrypt", "hello world", "-p", "secret").stdout.strip()
        result = invoke("decrypt", payload, "-p", "secret")
        assert result.exit_code == 0
        assert result.stdout == "hello world\n"

    def test_encrypt_requires_password(self, invoke):
        result = invoke("encrypt", "hello")
        assert result.exit_code != 0

    def test_error_text_exit_code_zero(self, invoke):
        result = invoke("unbase64", "a")
        assert result.exit_code == 0
        assert result.stdout == "Error: Invalid base64 string\n"

    def test_output_is_not_truncated(self, invoke):
        result = invoke("disk", executor=FakeExecutor({"df -h": "x" * 3000}))
        assert result.stdout == "x" * 3000 + "\n"


class TestFrontends:

    def test_chat(self, invoke):
        result = invoke("chat", "md5", "hello")
        assert result.stdout == "```\n5d41402abc4b2a76b9719d911017c592\n```\n"

    def test_schema(self, invoke):
        result = invoke("schema")
        schema = json.loads(result.stdout)
        assert schema["name"] == "system_tools"
        assert "encrypt" not in schema["inputSchema"]["properties"]["command"]["enum"]


class TestConfiguration:

    def test_disabled_config_fails(self, runner):
        result = runner.invoke(
            cli, ["md5", "x"], obj={"config": ToolsConfig(enabled=False, log_level="ERROR")}
        )
        assert result.exit_code != 0
        assert "disabled" in result.output

    def test_missing_config_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["--config", str(tmp_path / "nope.yaml"), "uuid"])
        assert result.exit_code != 0
        assert "Config file not found" in result.output

    def test_config_file_is_loaded(self, runner, tmp_path):
        config_file = tmp_path / "tools.yaml"
        config_file.write_text("password_length: 8\nlog_level: ERROR\n")
        result = runner.invoke(cli, ["--config", str(config_file), "passwd"])
        assert result.exit_code == 0
        assert len(result.stdout.rstrip("\n")) == 8
