"""Send a message through the hub."""

import asyncio

import typer
from rich.console import Console

from src.cli.output import format_error, format_message, json_output
from src.cli.utils import (
    ConfigError,
    ConfigManager,
    parse_template_vars,
    validate_channels,
    validate_message_content,
    validate_priority,
    validate_recipients,
)
from src.client import HubError

console = Console()


async def _send_message(url: str | None, **fields) -> dict:
    async with ConfigManager().open_client(url) as client:
        return await client.send_message(**fields)


def send_command(
    recipients: list[str] | None,
    content: str,
    channels: list[str] | None,
    priority: str,
    category: str | None,
    template_id: str | None,
    template_vars: list[str] | None,
    scheduled_at: str | None,
    webhook_url: str | None,
    url: str | None,
    json_flag: bool,
) -> None:
    """Send a message and show its delivery outcome."""
    try:
        fields = dict(
            recipients=validate_recipients(recipients),
            content=validate_message_content(content),
            channels=validate_channels(channels),
            priority=validate_priority(priority),
            category=category or None,
            template_id=template_id,
            template_variables=parse_template_vars(template_vars),
            scheduled_at=scheduled_at,
            webhook_url=webhook_url,
        )
    except ValueError as e:
        format_error(console, str(e))
        raise typer.Exit(code=2)

    try:
        message = asyncio.run(_send_message(url, **fields))
    except (ConfigError, ValueError) as e:
        format_error(console, str(e), hint="Check --url, HUB_URL or 'hub init'")
        raise typer.Exit(code=2)
    except HubError as e:
        format_error(console, f"Failed to send message: {e}")
        raise typer.Exit(code=1)

    if json_flag:
        json_output(console, message)
        return
    format_message(console, message)
