# Copyright 2025 Ilya Makarov
#
# Licensed under the Business Source License 1.1
# Change Date: 2028-11-05
# Change License: Apache License 2.0
# htop-tools Chat Command

from htop_tools.chat.handler import (
    COMMAND_DESCRIPTION,
    COMMAND_NAME,
    HELP_TEXT,
    TRUNCATION_MARKER,
    ChatCommandHandler,
)

__all__ = [
    "COMMAND_DESCRIPTION",
    "COMMAND_NAME",
    "HELP_TEXT",
    "TRUNCATION_MARKER",
    "ChatCommandHandler",
]
