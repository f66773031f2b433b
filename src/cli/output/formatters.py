"""Rich terminal output formatters."""

from typing import Any, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

STATUS_STYLES = {
    "delivered": "green",
    "partially_delivered": "yellow",
    "failed": "red",
    "processing": "cyan",
    "queued": "dim",
}


def styled_status(status: str) -> str:
    style = STATUS_STYLES.get(status, "white")
    return f"[{style}]{status}[/{style}]"


def format_success(console: Console, message: str) -> None:
    """Display success message in green."""
    console.print(f"[green]{message}[/green]")


def format_error(console: Console, message: str, hint: str | None = None) -> None:
    """Display error message in red with optional hint."""
    console.print(f"[red]Error:[/red] {message}")
    if hint:
        console.print(f"[yellow]Hint:[/yellow] {hint}")


def format_table(
    console: Console,
    title: str,
    columns: Sequence[str],
    rows: Sequence[Sequence[str]],
) -> None:
    """Display data as a formatted table."""
    table = Table(title=title)
    for col in columns:
        table.add_column(col)
    for row in rows:
        table.add_row(*row)
    console.print(table)


def format_key_value(console: Console, data: dict[str, Any]) -> None:
    """Display key-value pairs."""
    max_key_len = max(len(k) for k in data.keys()) if data else 0
    for key, value in data.items():
        console.print(f"[cyan]{key.ljust(max_key_len)}[/cyan]: {value}")


def format_message(console: Console, message: dict[str, Any]) -> None:
    """Display one message: summary panel, channel table and analytics."""
    summary = "\n".join([
        f"[cyan]Status[/cyan]:     {styled_status(message['status'])}",
        f"[cyan]Priority[/cyan]:   {message['priority']}",
        f"[cyan]Category[/cyan]:   {message.get('category') or '-'}",
        f"[cyan]Recipients[/cyan]: {', '.join(message['recipients'])}",
        f"[cyan]Created[/cyan]:    {message['createdAt'][:19]}",
        f"[cyan]Delivered[/cyan]:  {(message.get('deliveredAt') or '-')[:19]}",
    ])
    console.print(Panel(summary, title=message["messageId"]))

    rows = [
        (
            channel,
            styled_status(outcome["status"]),
            str(outcome["attempts"]),
            outcome.get("errorMessage") or "",
        )
        for channel, outcome in message["channelStatus"].items()
    ]
    format_table(console, "Channels", ["Channel", "Status", "Attempts", "Error"], rows)

    analytics = message["analytics"]
    format_key_value(console, {
        "Total": analytics["totalRecipients"],
        "Delivered": analytics["delivered"],
        "Failed": analytics["failed"],
        "Pending": analytics["pending"],
        "Rate": f"{analytics['deliveryRate']:.1f}%",
    })
