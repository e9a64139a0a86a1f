# Copyright 2025 Ilya Makarov
#
# Licensed under the Business Source License 1.1
# Change Date: 2028-11-05
# Change License: Apache License 2.0

"""
htop-tools Agent Tool - the operation catalog as one structured tool

Agents call ``system_tools`` with typed arguments::

    {"command": "top", "limit": 5}
    {"command": "sha256", "input": "hello"}

encrypt/decrypt are intentionally not part of the agent-callable enum.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from htop_tools.core.catalog import InvocationRequest, OperationCatalog

logger = logging.getLogger("htop_tools.mcp.tools")

TOOL_NAME = "system_tools"
TOOL_LABEL = "System Tools"
TOOL_DESCRIPTION = (
    "Run system monitoring and crypto utilities: top, port, md5, sha256, base64, etc."
)


class ToolArguments(BaseModel):
    """Typed arguments of a system_tools call (command checked separately)"""

    model_config = ConfigDict(extra="ignore")

    command: str
    input: Optional[str] = None
    limit: Optional[int] = None
    password: Optional[str] = None


def text_result(text: str) -> Dict[str, Any]:
    """Wrap text as a single-segment tool result"""
    return {"content": [{"type": "text", "text": text}]}


class SystemToolsAdapter:
    """
    Structured front-end over an OperationCatalog.

    Args:
        catalog: Shared operation table
    """

    name = TOOL_NAME
    label = TOOL_LABEL
    description = TOOL_DESCRIPTION

    def __init__(self, catalog: OperationCatalog):
        self.catalog = catalog
        self.commands: List[str] = catalog.agent_names()

    def parameters(self) -> Dict[str, Any]:
        """JSON schema of the tool arguments"""
        return {
            "type": "object",
            "properties": {
                "command": {
                    "type": "string",
                    "enum": list(self.commands),
                    "description": "Command to run",
                },
                "input": {
                    "type": "string",
                    "description": "Input text (for hash/encoding commands)",
                },
                "limit": {
                    "type": "integer",
                    "description": "Process count for top/mem, password length for passwd",
                    "default": self.catalog.config.top_limit,
                },
                "password": {
                    "type": "string",
                    "description": "Password (for encrypt/decrypt)",
                },
            },
            "required": ["command"],
        }

    def schema(self) -> Dict[str, Any]:
        """Full tool definition, MCP-style"""
        return {
            "name": self.name,
            "label": self.label,
            "description": self.description,
            "inputSchema": self.parameters(),
        }

    def build_request(self, arguments: Dict[str, Any]):
        """
        Validate ``arguments`` into an InvocationRequest.

        Returns:
            InvocationRequest, or an error/unknown-command string
        """
        command = arguments.get("command")
        if command not in self.commands:
            return f"Unknown command: {command}"

        try:
            args = ToolArguments(**arguments)
        except ValidationError as e:
            messages = []
            for error in e.errors():
                field = ".".join(str(loc) for loc in error["loc"])
                messages.append(f"{field}: {error['msg']}")
            return f"Error: Invalid arguments: {'; '.join(messages)}"

        return InvocationRequest(
            operation=args.command,
            input=args.input,
            # 0 means "not given" for agents, same as an omitted limit
            limit=args.limit or None,
            password=args.password,
        )

    async def execute(
        self, arguments: Optional[Dict[str, Any]], tool_call_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """Run a tool call; returns ``{"content": [{"type": "text", "text": ...}]}``."""
        arguments = arguments or {}
        logger.debug(f"Tool call {tool_call_id or '-'}: {arguments.get('command')}")

        request = self.build_request(arguments)
        if isinstance(request, str):
            return text_result(request)

        # Shell commands block for up to the timeout; keep the event loop free
        result = await asyncio.to_thread(self.catalog.dispatch, request)
        return text_result(result)
