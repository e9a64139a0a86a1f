# Copyright 2025 Ilya Makarov
#
# Licensed under the Business Source License 1.1
# Change Date: 2028-11-05
# Change License: Apache License 2.0

"""
Chat command handler for ``/tools``.

Turns one free-text argument string into a catalog call:

    /tools md5 hello world          -> md5("hello world")
    /tools top 5                    -> top(limit=5)
    /tools encrypt my text -p pass  -> encrypt("my text", password="pass")

Replies are ``{"text": ...}``; operation output is fenced as a code block
and cut at ``chat_max_length`` characters.
"""

import logging
import re
from typing import Any, Dict, Optional

from htop_tools.core.catalog import InvocationRequest, OperationCatalog, OperationKind

logger = logging.getLogger("htop_tools.chat")

COMMAND_NAME = "tools"
COMMAND_DESCRIPTION = "System tools: /tools top, /tools port, /tools md5 123, ..."

TRUNCATION_MARKER = "\n... (truncated)"

# Text is matched lazily, the password takes the rest of the line, so a
# password containing " -p " keeps it while text containing " -p " does not.
PASSWORD_ARGS_RE = re.compile(r"^\S+\s+(.+?)\s+-p\s+(.+)")

HELP_TEXT = """🔧 HTOP Tools help:

System monitoring:
  /tools top [n]     - Processes using the most CPU
  /tools mem [n]     - Processes using the most memory
  /tools port        - Listening ports
  /tools disk        - Disk usage
  /tools memory      - Memory usage
  /tools load        - System load
  /tools net         - Network connection summary

Hashing / encoding:
  /tools md5 <text>       - MD5 hash
  /tools sha1 <text>      - SHA1 hash
  /tools sha256 <text>    - SHA256 hash
  /tools base64 <text>    - Base64 encode
  /tools unbase64 <text>  - Base64 decode
  /tools urlencode <text> - URL encode
  /tools urldecode <text> - URL decode

Password tools:
  /tools passwd [len]     - Random password
  /tools uuid             - Random UUID
  /tools encrypt <text> -p <password>  - AES encrypt
  /tools decrypt <text> -p <password>  - AES decrypt

<text> is the rest of the line, spaces included (decoders too).

Examples:
  /tools md5 hello
  /tools passwd 20
  /tools top 5"""


def usage(operation: str) -> str:
    """Usage hint for one operation"""
    if operation in ("top", "mem"):
        return f"❌ Usage: /{COMMAND_NAME} {operation} [n]"
    if operation == "passwd":
        return f"❌ Usage: /{COMMAND_NAME} passwd [len]"
    if operation in ("encrypt", "decrypt"):
        return f"❌ Usage: /{COMMAND_NAME} {operation} <text> -p <password>"
    return f"❌ Usage: /{COMMAND_NAME} {operation} <text>"


def truncate(result: str, max_length: int) -> str:
    if len(result) > max_length:
        return result[:max_length] + TRUNCATION_MARKER
    return result


def fence(result: str) -> str:
    return "```\n" + result + "\n```"


class ChatCommandHandler:
    """
    Free-text front-end over an OperationCatalog.

    Args:
        catalog: Shared operation table
        max_length: Truncation bound for replies; defaults to the catalog
            config's ``chat_max_length``
    """

    def __init__(self, catalog: OperationCatalog, max_length: Optional[int] = None):
        self.catalog = catalog
        self.max_length = max_length or catalog.config.chat_max_length

    def __call__(self, args: Optional[str]) -> Dict[str, Any]:
        return self.handle(args)

    def handle(self, args: Optional[str]) -> Dict[str, Any]:
        """Parse ``args`` and return a ``{"text": ...}`` reply."""
        args = (args or "").strip()
        if not args:
            return {"text": HELP_TEXT}

        request = self.parse(args)
        if isinstance(request, str):
            return {"text": request}

        result = self.catalog.dispatch(request)
        return {"text": self.format_result(result)}

    def format_result(self, result: str) -> str:
        return fence(truncate(result, self.max_length))

    def parse(self, args: str):
        """
        Build an InvocationRequest from stripped, non-empty ``args``.

        Returns:
            InvocationRequest, or a reply string (usage hint / unknown command)
        """
        parts = args.split()
        name = parts[0].lower()
        arg1 = parts[1] if len(parts) > 1 else None

        operation = self.catalog.get(name)
        if operation is None:
            logger.debug(f"Unknown chat command: {name}")
            return f"❌ Unknown command: {name}\nType /{COMMAND_NAME} for help"

        if operation.kind is OperationKind.NO_ARGS:
            return InvocationRequest(name)

        if operation.kind is OperationKind.LIMIT:
            if arg1 is None:
                return InvocationRequest(name)
            try:
                return InvocationRequest(name, limit=int(arg1))
            except ValueError:
                return usage(name)

        if operation.kind is OperationKind.TEXT:
            if arg1 is None:
                return usage(name)
            # Everything after the operation token, inner whitespace intact
            return InvocationRequest(name, input=args[len(parts[0]):].strip())

        match = PASSWORD_ARGS_RE.match(args)
        if not match:
            return usage(name)
        return InvocationRequest(name, input=match.group(1), password=match.group(2))
