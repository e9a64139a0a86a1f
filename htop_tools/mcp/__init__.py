# Copyright 2025 Ilya Makarov
#
# Licensed under the Business Source License 1.1
# Change Date: 2028-11-05
# Change License: Apache License 2.0

"""
htop-tools agent tool

``SystemToolsAdapter`` needs no extra dependencies; the stdio server in
``htop_tools.mcp.server`` requires the ``mcp`` extra.
"""

from .tools import (
    TOOL_DESCRIPTION,
    TOOL_LABEL,
    TOOL_NAME,
    SystemToolsAdapter,
    ToolArguments,
    text_result,
)

__all__ = [
    "TOOL_DESCRIPTION",
    "TOOL_LABEL",
    "TOOL_NAME",
    "SystemToolsAdapter",
    "ToolArguments",
    "text_result",
]
