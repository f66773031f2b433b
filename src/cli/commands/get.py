"""Show one message by id."""

import asyncio

import typer
from rich.console import Console

from src.cli.output import format_error, format_message, json_output
from src.cli.utils import ConfigError, ConfigManager
from src.client import HubError

console = Console()


async def _get_message(url: str | None, message_id: str) -> dict | None:
    async with ConfigManager().open_client(url) as client:
        return await client.get_message(message_id)


def get_command(message_id: str, url: str | None, json_flag: bool) -> None:
    """Show a message with its per-channel delivery status."""
    message_id = message_id.strip()
    if not message_id:
        format_error(console, "Message ID cannot be empty")
        raise typer.Exit(code=2)

    try:
        message = asyncio.run(_get_message(url, message_id))
    except (ConfigError, ValueError) as e:
        format_error(console, str(e), hint="Check --url, HUB_URL or 'hub init'")
        raise typer.Exit(code=2)
    except HubError as e:
        format_error(console, f"Failed to fetch message: {e}")
        raise typer.Exit(code=1)

    if message is None:
        if json_flag:
            json_output(console, {"error": "not_found", "message_id": message_id})
        else:
            format_error(console, f"Message not found: {message_id}")
        raise typer.Exit(code=1)

    if json_flag:
        json_output(console, message)
        return
    format_message(console, message)
