# Copyright 2025 Ilya Makarov
#
# Licensed under the Business Source License 1.1
# Change Date: 2028-11-05
# Change License: Apache License 2.0

"""Shared fixtures for htop-tools tests"""

import logging
from typing import Dict, List

import pytest

from htop_tools.core.catalog import OperationCatalog
from htop_tools.core.config import ToolsConfig
from htop_tools.core.exceptions import ShellError
from htop_tools.core.shell import ShellExecutor


class FakeExecutor(ShellExecutor):
    """
    ShellExecutor returning canned output instead of spawning processes.

    Commands listed in ``outputs`` succeed with that text; anything else
    fails like a missing binary (exit code 127).
    """

    def __init__(self, outputs: Dict[str, str] = None):
        super().__init__(timeout=1)
        self.outputs = dict(outputs or {})
        self.calls: List[str] = []

    def execute(self, command: str) -> str:
        self.calls.append(command)
        if command in self.outputs:
            return self.outputs[command]
        raise ShellError(
            f"Command failed with exit code 127: {command}",
            command=command,
            exit_code=127,
        )


FAKE_OUTPUTS = {
    "ps aux --sort=-%cpu | head -6": "USER PID %CPU\nroot 1 99.0\n",
    "ps aux --sort=-%cpu | head -11": "USER PID %CPU\n" + "root 1 1.0\n" * 10,
    "ps aux --sort=-%mem | head -4": "USER PID %MEM\nroot 1 50.0\n",
    "df -h": "Filesystem Size Used Avail Use% Mounted on\n/dev/sda1 100G 50G 50G 50% /\n",
    "free -h": "Mem: 16Gi 8Gi 8Gi\n",
    "uptime": " 10:00:00 up 1 day, load average: 0.10, 0.20, 0.30\n",
    "ss -s": "Total: 100\nTCP: 10\n",
    "ss -tuln": "Netid State Local Address:Port\ntcp LISTEN 0.0.0.0:22\n",
}


@pytest.fixture
def config():
    """Quiet default configuration"""
    return ToolsConfig(log_level="ERROR")


@pytest.fixture
def fake_executor():
    return FakeExecutor(FAKE_OUTPUTS)


@pytest.fixture
def catalog(config, fake_executor):
    """Catalog whose system operations never touch the real OS"""
    return OperationCatalog(config, executor=fake_executor)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep user config files and HTOP_TOOLS_* variables out of tests"""
    for name in [
        "HTOP_TOOLS_ENABLED",
        "HTOP_TOOLS_TOP_LIMIT",
        "HTOP_TOOLS_PASSWORD_LENGTH",
        "HTOP_TOOLS_SHELL_TIMEOUT",
        "HTOP_TOOLS_CHAT_MAX_LENGTH",
        "HTOP_TOOLS_LOG_FILE",
    ]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HTOP_TOOLS_LOG_LEVEL", "ERROR")
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo setup_logging between tests"""
    yield
    logger = logging.getLogger("htop_tools")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    if hasattr(logger, "_htop_tools_configured"):
        del logger._htop_tools_configured
