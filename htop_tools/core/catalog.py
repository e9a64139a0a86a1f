# Copyright 2025 Ilya Makarov
#
# Licensed under the Business Source License 1.1
# Change Date: 2028-11-05
# Change License: Apache License 2.0

"""
Operation Catalog

The single name -> operation table shared by every front-end (CLI, chat,
agent tool). Front-ends only translate their input into an
InvocationRequest and call ``OperationCatalog.dispatch``; all behavior
lives behind that call.

Operation kinds:
    NO_ARGS             port, disk, memory, load, net, uuid
    LIMIT               top, mem, passwd (limit is the password length)
    TEXT                md5, sha1, sha256, base64, unbase64, urlencode, urldecode
    TEXT_WITH_PASSWORD  encrypt, decrypt

``dispatch`` never raises. Unknown names, missing arguments, malformed input
and shell failures all come back as text.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, Iterator, List, Mapping, Optional

from . import crypto
from .config import ToolsConfig
from .exceptions import ToolsError
from .shell import ShellExecutor
from .system import SystemInspector

logger = logging.getLogger("htop_tools.catalog")


class OperationKind(Enum):
    """Argument shape of an operation"""

    NO_ARGS = "no_args"
    LIMIT = "limit"
    TEXT = "text"
    TEXT_WITH_PASSWORD = "text_with_password"


@dataclass(frozen=True)
class Operation:
    """One catalog entry. Handler signature depends on ``kind``."""

    name: str
    kind: OperationKind
    handler: Callable[..., str]
    default_limit: Optional[int] = None
    agent_callable: bool = True


@dataclass(frozen=True)
class InvocationRequest:
    """Normalized call built by a front-end"""

    operation: str
    input: Optional[str] = None
    limit: Optional[int] = None
    password: Optional[str] = None


class OperationCatalog:
    """
    Immutable table of supported operations.

    Args:
        config: Startup configuration (default limits, shell timeout)
        executor: Shell runner for the system operations; built from
            ``config.shell_timeout`` when omitted
    """

    def __init__(
        self,
        config: Optional[ToolsConfig] = None,
        executor: Optional[ShellExecutor] = None,
    ):
        self.config = config or ToolsConfig()
        self.executor = executor or ShellExecutor(timeout=self.config.shell_timeout)
        self.system = SystemInspector(self.executor)
        self._operations: Mapping[str, Operation] = MappingProxyType(
            self._build_operations()
        )

    def _build_operations(self) -> Dict[str, Operation]:
        system = self.system
        top_limit = self.config.top_limit

        operations = [
            # System monitoring
            Operation("top", OperationKind.LIMIT, system.top_processes, top_limit),
            Operation("mem", OperationKind.LIMIT, system.memory_processes, top_limit),
            Operation("port", OperationKind.NO_ARGS, system.listening_ports),
            Operation("disk", OperationKind.NO_ARGS, system.disk_usage),
            Operation("memory", OperationKind.NO_ARGS, system.memory_usage),
            Operation("load", OperationKind.NO_ARGS, system.load_average),
            Operation("net", OperationKind.NO_ARGS, system.network_summary),

            # Hashing
            Operation("md5", OperationKind.TEXT, crypto.md5_hash),
            Operation("sha1", OperationKind.TEXT, crypto.sha1_hash),
            Operation("sha256", OperationKind.TEXT, crypto.sha256_hash),

            # Encoding
            Operation("base64", OperationKind.TEXT, crypto.base64_encode),
            Operation("unbase64", OperationKind.TEXT, crypto.base64_decode),
            Operation("urlencode", OperationKind.TEXT, crypto.url_encode),
            Operation("urldecode", OperationKind.TEXT, crypto.url_decode),

            # Password tools
            Operation("passwd", OperationKind.LIMIT, crypto.generate_password,
                      self.config.password_length),
            Operation("uuid", OperationKind.NO_ARGS, crypto.generate_uuid),
            Operation("encrypt", OperationKind.TEXT_WITH_PASSWORD, crypto.aes_encrypt,
                      agent_callable=False),
            Operation("decrypt", OperationKind.TEXT_WITH_PASSWORD, crypto.aes_decrypt,
                      agent_callable=False),
        ]
        return {op.name: op for op in operations}

    # === Lookup ===

    def get(self, name: str) -> Optional[Operation]:
        return self._operations.get(name)

    def names(self) -> List[str]:
        return list(self._operations)

    def agent_names(self) -> List[str]:
        """Operations exposed through the agent tool (no encrypt/decrypt)"""
        return [op.name for op in self._operations.values() if op.agent_callable]

    def __contains__(self, name: object) -> bool:
        return name in self._operations

    def __iter__(self) -> Iterator[Operation]:
        return iter(self._operations.values())

    def __len__(self) -> int:
        return len(self._operations)

    # === Dispatch ===

    def dispatch(self, request: InvocationRequest) -> str:
        """Run ``request`` and return its text result (errors included)."""
        operation = self._operations.get(request.operation)
        if operation is None:
            logger.debug(f"Unknown operation requested: {request.operation!r}")
            return f"Unknown command: {request.operation}"

        logger.debug(f"Dispatching {operation.name} ({operation.kind.value})")

        try:
            return self._invoke(operation, request)
        except ToolsError as e:
            logger.debug(f"{operation.name} returned error: {e.to_dict()}")
            return f"Error: {e.message}"
        except Exception as e:
            logger.error(f"{operation.name} failed: {e}", exc_info=True)
            return f"Error: {e}"

    def run(self, name: str, **arguments) -> str:
        """Shorthand for ``dispatch(InvocationRequest(name, **arguments))``"""
        return self.dispatch(InvocationRequest(operation=name, **arguments))

    def _invoke(self, operation: Operation, request: InvocationRequest) -> str:
        kind = operation.kind

        if kind is OperationKind.NO_ARGS:
            return operation.handler()

        if kind is OperationKind.LIMIT:
            limit = operation.default_limit if request.limit is None else request.limit
            return operation.handler(limit)

        if request.input is None:
            return "Error: input required"

        if kind is OperationKind.TEXT:
            return operation.handler(request.input)

        if request.password is None:
            return "Error: password required"
        return operation.handler(request.input, request.password)


__all__ = [
    "InvocationRequest",
    "Operation",
    "OperationCatalog",
    "OperationKind",
]
