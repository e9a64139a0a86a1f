# Copyright 2025 Ilya Makarov
#
# Licensed under the Business Source License 1.1
# Change Date: 2028-11-05
# Change License: Apache License 2.0

"""
System inspection operations.

Each method runs one templated command through the ShellExecutor and passes
its text output through untouched. The only values ever interpolated into a
command are integers validated here.
"""

import logging
from typing import Optional

from .exceptions import InvalidInputError
from .shell import ShellExecutor, is_error

logger = logging.getLogger("htop_tools.system")

# Tried in order by listening_ports()
PORT_COMMANDS = [
    "ss -tuln",
    "netstat -tuln 2>/dev/null",
    "lsof -i -P -n 2>/dev/null | grep LISTEN",
]


def _validate_limit(limit) -> int:
    try:
        value = int(limit)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(
            f"limit must be an integer, got {limit!r}", field="limit", cause=e
        ) from e
    if value < 0:
        raise InvalidInputError(
            f"limit must be non-negative, got {value}", field="limit"
        )
    return value


class SystemInspector:
    """Process, disk, memory, load and network views backed by OS commands"""

    def __init__(self, executor: Optional[ShellExecutor] = None):
        self.executor = executor or ShellExecutor()

    def top_processes(self, limit: int = 10) -> str:
        """Processes sorted by CPU usage, highest first"""
        limit = _validate_limit(limit)
        # +1 keeps the ps header line
        return self.executor.run(f"ps aux --sort=-%cpu | head -{limit + 1}")

    def memory_processes(self, limit: int = 10) -> str:
        """Processes sorted by resident memory, highest first"""
        limit = _validate_limit(limit)
        return self.executor.run(f"ps aux --sort=-%mem | head -{limit + 1}")

    def listening_ports(self) -> str:
        """Listening TCP/UDP sockets from the first tool that answers"""
        for command in PORT_COMMANDS:
            result = self.executor.run(command)
            if not is_error(result) and result.strip():
                return result
            logger.debug(f"Port listing via {command.split()[0]} gave nothing usable")
        return "Error: No suitable command found (tried ss, netstat, lsof)"

    def disk_usage(self) -> str:
        return self.executor.run("df -h")

    def memory_usage(self) -> str:
        return self.executor.run("free -h")

    def load_average(self) -> str:
        return self.executor.run("uptime")

    def network_summary(self) -> str:
        return self.executor.run("ss -s")
