"""Show message counts by status."""

import asyncio

import typer
from rich.console import Console

from src.cli.output import format_error, format_table, json_output, styled_status
from src.cli.utils import ConfigError, ConfigManager
from src.client import HubError

console = Console()

_ROWS = (
    ("queued", "queued"),
    ("processing", "processing"),
    ("delivered", "delivered"),
    ("partiallyDelivered", "partially_delivered"),
    ("failed", "failed"),
)


async def _stats(url: str | None) -> dict[str, int]:
    async with ConfigManager().open_client(url) as client:
        return await client.stats()


def stats_command(url: str | None, json_flag: bool) -> None:
    """Show how many stored messages are in each status."""
    try:
        counts = asyncio.run(_stats(url))
    except (ConfigError, ValueError) as e:
        format_error(console, str(e), hint="Check --url, HUB_URL or 'hub init'")
        raise typer.Exit(code=2)
    except HubError as e:
        format_error(console, f"Failed to fetch stats: {e}")
        raise typer.Exit(code=1)

    if json_flag:
        json_output(console, counts)
        return

    rows = [(styled_status(status), str(counts.get(key, 0))) for key, status in _ROWS]
    rows.append(("total", str(counts.get("total", 0))))
    format_table(console, "Messages by status", ["Status", "Count"], rows)
