# Copyright 2025 Ilya Makarov
#
# Licensed under the Business Source License 1.1
# Change Date: 2028-11-05
# Change License: Apache License 2.0

"""htop-tools CLI - system monitoring and crypto utilities"""

import json
import sys
from pathlib import Path
from typing import Optional, Tuple

import click

from htop_tools import __version__
from htop_tools.core.catalog import InvocationRequest, OperationCatalog
from htop_tools.core.config import load_config
from htop_tools.core.exceptions import ConfigError
from htop_tools.core.logger import setup_logging

EXAMPLES = """\b
Examples:
  $ htop-tools top                  # Processes using the most CPU
  $ htop-tools mem                  # Processes using the most memory
  $ htop-tools port                 # Listening ports
  $ htop-tools disk                 # Disk usage
  $ htop-tools memory               # Memory usage
  $ htop-tools load                 # System load
  $ htop-tools net                  # Network connection summary
  $ htop-tools md5 "hello"          # MD5 hash
  $ htop-tools sha1 "hello"         # SHA1 hash
  $ htop-tools sha256 "hello"       # SHA256 hash
  $ htop-tools base64 "hello"       # Base64 encode
  $ htop-tools unbase64 "aGVs..."   # Base64 decode
  $ htop-tools urlencode "hello world"    # URL encode
  $ htop-tools urldecode "hello%20world"  # URL decode
  $ htop-tools passwd               # Random password
  $ htop-tools uuid                 # Random UUID
  $ htop-tools encrypt "text" -p "password"      # AES encrypt
  $ htop-tools decrypt "iv:cipher" -p "password" # AES decrypt
"""


def _run(ctx: click.Context, name: str, **arguments) -> None:
    """Dispatch one operation and print its raw result"""
    catalog: OperationCatalog = ctx.obj["catalog"]
    click.echo(catalog.dispatch(InvocationRequest(name, **arguments)))


@click.group(epilog=EXAMPLES)
@click.version_option(version=__version__, prog_name="htop-tools")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (YAML)",
)
@click.pass_context
def cli(ctx: click.Context, config_file: Optional[Path]):
    """System monitoring and crypto tools."""
    ctx.ensure_object(dict)

    config = ctx.obj.get("config")
    if config is None:
        try:
            config = load_config(config_file)
        except ConfigError as e:
            raise click.ClickException(e.message)

    if not config.enabled:
        raise click.ClickException("htop-tools is disabled (set enabled: true)")

    setup_logging(config.log_level, config.log_file)
    ctx.obj["config"] = config
    if "catalog" not in ctx.obj:
        ctx.obj["catalog"] = OperationCatalog(config)


# =============================================================================
# System Monitoring
# =============================================================================


@cli.command()
@click.option("--number", "-n", type=int, default=None, help="Number of processes")
@click.pass_context
def top(ctx: click.Context, number: Optional[int]):
    """Show the processes using the most CPU."""
    _run(ctx, "top", limit=number)


@cli.command()
@click.option("--number", "-n", type=int, default=None, help="Number of processes")
@click.pass_context
def mem(ctx: click.Context, number: Optional[int]):
    """Show the processes using the most memory."""
    _run(ctx, "mem", limit=number)


@cli.command()
@click.pass_context
def port(ctx: click.Context):
    """Show listening ports."""
    _run(ctx, "port")


@cli.command()
@click.pass_context
def disk(ctx: click.Context):
    """Show disk usage."""
    _run(ctx, "disk")


@cli.command()
@click.pass_context
def memory(ctx: click.Context):
    """Show memory usage."""
    _run(ctx, "memory")


@cli.command()
@click.pass_context
def load(ctx: click.Context):
    """Show system load."""
    _run(ctx, "load")


@cli.command()
@click.pass_context
def net(ctx: click.Context):
    """Show network connection summary."""
    _run(ctx, "net")


# =============================================================================
# Hashing / Encoding
# =============================================================================


@cli.command()
@click.argument("text")
@click.pass_context
def md5(ctx: click.Context, text: str):
    """Compute MD5 hash."""
    _run(ctx, "md5", input=text)


@cli.command()
@click.argument("text")
@click.pass_context
def sha1(ctx: click.Context, text: str):
    """Compute SHA1 hash."""
    _run(ctx, "sha1", input=text)


@cli.command()
@click.argument("text")
@click.pass_context
def sha256(ctx: click.Context, text: str):
    """Compute SHA256 hash."""
    _run(ctx, "sha256", input=text)


@cli.command("base64")
@click.argument("text")
@click.pass_context
def base64_cmd(ctx: click.Context, text: str):
    """Base64 encode."""
    _run(ctx, "base64", input=text)


@cli.command()
@click.argument("text")
@click.pass_context
def unbase64(ctx: click.Context, text: str):
    """Base64 decode."""
    _run(ctx, "unbase64", input=text)


@cli.command()
@click.argument("text")
@click.pass_context
def urlencode(ctx: click.Context, text: str):
    """URL encode."""
    _run(ctx, "urlencode", input=text)


@cli.command()
@click.argument("text")
@click.pass_context
def urldecode(ctx: click.Context, text: str):
    """URL decode."""
    _run(ctx, "urldecode", input=text)


# =============================================================================
# Password Tools
# =============================================================================


@cli.command()
@click.option("--length", "-l", type=int, default=None, help="Password length")
@click.pass_context
def passwd(ctx: click.Context, length: Optional[int]):
    """Generate a random password."""
    _run(ctx, "passwd", limit=length)


@cli.command("uuid")
@click.pass_context
def uuid_cmd(ctx: click.Context):
    """Generate a UUID."""
    _run(ctx, "uuid")


@cli.command()
@click.argument("text")
@click.option("--password", "-p", required=True, help="Encryption password")
@click.pass_context
def encrypt(ctx: click.Context, text: str, password: str):
    """AES-encrypt text."""
    _run(ctx, "encrypt", input=text, password=password)


@cli.command()
@click.argument("text")
@click.option("--password", "-p", required=True, help="Decryption password")
@click.pass_context
def decrypt(ctx: click.Context, text: str, password: str):
    """AES-decrypt an iv:cipher payload."""
    _run(ctx, "decrypt", input=text, password=password)


# =============================================================================
# Other Front-ends
# =============================================================================


@cli.command()
@click.argument("args", nargs=-1)
@click.pass_context
def chat(ctx: click.Context, args: Tuple[str, ...]):
    """Run a /tools chat command locally.

    Examples:
        htop-tools chat md5 hello world
        htop-tools chat encrypt secret text -p pass
    """
    from htop_tools.chat import ChatCommandHandler

    handler = ChatCommandHandler(ctx.obj["catalog"])
    click.echo(handler.handle(" ".join(args))["text"])


@cli.command()
@click.pass_context
def schema(ctx: click.Context):
    """Print the agent tool schema as JSON."""
    from htop_tools.mcp.tools import SystemToolsAdapter

    adapter = SystemToolsAdapter(ctx.obj["catalog"])
    click.echo(json.dumps(adapter.schema(), indent=2, ensure_ascii=False))


@cli.command("mcp-serve")
@click.pass_context
def mcp_serve(ctx: click.Context):
    """Start the MCP server (stdio) for AI agent integration."""
    try:
        from htop_tools.mcp.server import main as run_mcp_server
    except ImportError as e:
        click.echo(f"Missing MCP dependencies: {e}", err=True)
        click.echo("Install with: pip install 'htop-tools[mcp]'", err=True)
        sys.exit(1)

    # stdout carries the protocol; status goes to stderr
    click.echo("Starting htop-tools MCP Server (stdio)...", err=True)
    run_mcp_server(ctx.obj["config"])


if __name__ == "__main__":
    cli()
