# Copyright 2025 Ilya Makarov
#
# Licensed under the Business Source License 1.1
# Change Date: 2028-11-05
# Change License: Apache License 2.0

"""
Shell Executor

Runs fixed, pre-templated inspection commands (``df -h``, ``ps aux ...``)
with a hard wall-clock timeout. Failures never escape ``run``: they come
back as text prefixed with ``"Error: "`` so every front-end can treat the
result uniformly as a string.
"""

import logging
import subprocess
from typing import Dict, Optional

import psutil

from .exceptions import ShellError, ShellTimeoutError

logger = logging.getLogger("htop_tools.shell")

DEFAULT_TIMEOUT = 30.0
ERROR_PREFIX = "Error:"


def is_error(result: str) -> bool:
    """True if a text result carries the shell failure prefix"""
    return result.startswith(ERROR_PREFIX)


def _kill_process_tree(pid: int) -> None:
    """Kill a shell and every process it spawned"""
    try:
        parent = psutil.Process(pid)
    except psutil.NoSuchProcess:
        return

    procs = parent.children(recursive=True)
    procs.append(parent)
    for proc in procs:
        try:
            proc.kill()
        except psutil.NoSuchProcess:
            pass
    psutil.wait_procs(procs, timeout=5)


class ShellExecutor:
    """
    Bounded external-process runner.

    Args:
        timeout: Seconds before the command (and its children) is killed
        env: Environment for the child; inherits the current one when None
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, env: Optional[Dict[str, str]] = None):
        self.timeout = timeout
        self.env = env

    def run(self, command: str) -> str:
        """Run ``command`` and return its output, or ``"Error: ..."`` text."""
        try:
            return self.execute(command)
        except ShellError as e:
            logger.warning(f"Shell command failed: {e.to_dict()}")
            return f"Error: {e.message}"
        except OSError as e:
            logger.warning(f"Could not start shell command {command!r}: {e}")
            return f"Error: {e}"

    def execute(self, command: str) -> str:
        """
        Run ``command`` through the system shell.

        Returns:
            Combined stdout/stderr text

        Raises:
            ShellTimeoutError: Command exceeded the timeout and was killed
            ShellError: Command exited non-zero
            OSError: Shell could not be started
        """
        logger.debug(f"Running command: {command}")

        proc = subprocess.Popen(
            command,
            shell=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            stdin=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            env=self.env,
        )

        try:
            output, _ = proc.communicate(timeout=self.timeout)
        except subprocess.TimeoutExpired:
            _kill_process_tree(proc.pid)
            proc.communicate()
            raise ShellTimeoutError(
                f"Command timed out after {self.timeout:g}s: {command}",
                timeout=self.timeout,
                command=command,
            )

        if proc.returncode != 0:
            message = f"Command failed with exit code {proc.returncode}: {command}"
            if output and output.strip():
                message += f"\n{output.strip()}"
            raise ShellError(
                message,
                command=command,
                exit_code=proc.returncode,
            )

        return output or ""
