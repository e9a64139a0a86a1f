# Copyright 2025 Ilya Makarov
#
# Licensed under the Business Source License 1.1
# Change Date: 2028-11-05
# Change License: Apache License 2.0

"""
Host plugin entry point.

A host runtime hands ``register`` an object exposing ``register_cli``,
``register_command`` and ``register_tool`` plus the raw plugin config
(``{"enabled": bool, "topLimit": int, ...}``). All three surfaces share one
OperationCatalog built from that config.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol

import click

from htop_tools.chat import COMMAND_DESCRIPTION, COMMAND_NAME, ChatCommandHandler
from htop_tools.cli import cli
from htop_tools.core.catalog import OperationCatalog
from htop_tools.core.config import build_config
from htop_tools.mcp.tools import SystemToolsAdapter

logger = logging.getLogger("htop_tools.plugin")

LOG_PREFIX = "[htop-tools]"


class PluginHost(Protocol):
    """What ``register`` needs from the host runtime"""

    def register_cli(
        self, group: click.Group, commands: List[str], obj: Dict[str, Any]
    ) -> None: ...

    def register_command(
        self,
        name: str,
        description: str,
        accepts_args: bool,
        require_auth: bool,
        handler: Callable[[Optional[str]], Dict[str, Any]],
    ) -> None: ...

    def register_tool(
        self,
        name: str,
        label: str,
        description: str,
        parameters: Dict[str, Any],
        execute: Callable[..., Any],
    ) -> None: ...


def register(host: PluginHost, plugin_config: Optional[Mapping[str, Any]] = None) -> bool:
    """
    Register the CLI group, the ``/tools`` chat command and the agent tool.

    Returns:
        False if the plugin is disabled (nothing registered), True otherwise

    Raises:
        ConfigError: If ``plugin_config`` has invalid values
    """
    config = build_config(plugin_config)

    if not config.enabled:
        logger.info(f"{LOG_PREFIX} Plugin is disabled")
        return False

    catalog = OperationCatalog(config)
    chat_handler = ChatCommandHandler(catalog)
    tool = SystemToolsAdapter(catalog)

    # obj is the click context object the host must invoke the group with
    host.register_cli(
        cli, commands=[COMMAND_NAME], obj={"config": config, "catalog": catalog}
    )

    host.register_command(
        name=COMMAND_NAME,
        description=COMMAND_DESCRIPTION,
        accepts_args=True,
        require_auth=True,
        handler=chat_handler.handle,
    )

    host.register_tool(
        name=tool.name,
        label=tool.label,
        description=tool.description,
        parameters=tool.parameters(),
        execute=tool.execute,
    )

    logger.info(f"{LOG_PREFIX} Plugin loaded successfully")
    return True
