"""List messages stored in the hub."""

import asyncio

import typer
from rich.console import Console

from src.cli.output import format_error, format_table, json_output, styled_status
from src.cli.utils import ConfigError, ConfigManager, validate_status
from src.client import HubError

console = Console()


async def _list_messages(
    url: str | None, status: str | None, category: str | None, page: int, size: int,
) -> list[dict]:
    async with ConfigManager().open_client(url) as client:
        return await client.list_messages(status, category, page, size)


def _truncate(text: str, length: int) -> str:
    return text[:length] + "..." if len(text) > length else text


def list_command(
    status: str | None,
    category: str | None,
    page: int,
    size: int,
    url: str | None,
    json_flag: bool,
) -> None:
    """List messages, optionally filtered by status and category."""
    try:
        if status:
            status = validate_status(status)
        if page < 0:
            raise ValueError("Page must be zero or greater")
        if size < 1:
            raise ValueError("Size must be a positive integer")
    except ValueError as e:
        format_error(console, str(e))
        raise typer.Exit(code=2)

    try:
        msgs = asyncio.run(_list_messages(url, status, category, page, size))
    except (ConfigError, ValueError) as e:
        format_error(console, str(e), hint="Check --url, HUB_URL or 'hub init'")
        raise typer.Exit(code=2)
    except HubError as e:
        format_error(console, f"Failed to list messages: {e}")
        raise typer.Exit(code=1)

    if json_flag:
        json_output(console, {"page": page, "size": size, "count": len(msgs), "messages": msgs})
        return

    if not msgs:
        console.print("[yellow]No messages found[/yellow]")
        return

    rows = [
        (
            m["messageId"],
            styled_status(m["status"]),
            ", ".join(m["channels"]),
            m.get("category") or "",
            m["createdAt"][:19],
            _truncate(m["content"], 40),
        )
        for m in msgs
    ]
    format_table(
        console,
        f"Messages (page {page}, {len(msgs)} shown)",
        ["ID", "Status", "Channels", "Category", "Created", "Content"],
        rows,
    )
