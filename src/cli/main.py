"""Main CLI entry point for the messaging hub."""

from typing import List, Optional

import typer
from rich.console import Console

from src.cli.commands.get import get_command
from src.cli.commands.init import init_command
from src.cli.commands.list_messages import list_command
from src.cli.commands.send import send_command
from src.cli.commands.serve import serve_command
from src.cli.commands.stats import stats_command

app = typer.Typer(
    name="hub",
    help="Messaging Hub - multi-channel message dispatch with delivery tracking",
    no_args_is_help=True,
    add_completion=False,
)
console = Console()

_URL_HELP = "Hub base URL (default: HUB_URL or config file)"


@app.command("init")
def init(
    url: str = typer.Option(..., "-u", "--url", help="Hub base URL"),
    timeout: float = typer.Option(30.0, "--timeout", help="Request timeout (seconds)"),
    force: bool = typer.Option(False, "-f", "--force", help="Overwrite config"),
    json_flag: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Save the hub URL to the CLI config file."""
    init_command(url, timeout, force, json_flag)


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8084, "-p", "--port", help="Bind port"),
    log_level: str = typer.Option("info", "--log-level", help="uvicorn log level"),
) -> None:
    """Run the hub HTTP API."""
    serve_command(host, port, log_level)


@app.command("send")
def send(
    recipients: Optional[List[str]] = typer.Option(None, "-r", "--recipient", help="Recipient (repeatable)"),
    message: str = typer.Option(..., "-m", "--message", help="Content"),
    channels: Optional[List[str]] = typer.Option(None, "-c", "--channel", help="Channel (repeatable)"),
    priority: str = typer.Option("normal", "-p", "--priority", help="low, normal, high or urgent"),
    category: str = typer.Option(None, "--category", help="Category label"),
    template_id: str = typer.Option(None, "--template", help="Template ID"),
    template_vars: Optional[List[str]] = typer.Option(None, "--var", help="Template variable KEY=VALUE"),
    scheduled_at: str = typer.Option(None, "--scheduled-at", help="ISO 8601 send time"),
    webhook_url: str = typer.Option(None, "--webhook-url", help="Status callback URL"),
    url: str = typer.Option(None, "-u", "--url", help=_URL_HELP),
    json_flag: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Send a message through one or more channels."""
    send_command(
        recipients, message, channels, priority, category, template_id,
        template_vars, scheduled_at, webhook_url, url, json_flag,
    )


@app.command("get")
def get(
    message_id: str = typer.Argument(..., help="Message ID"),
    url: str = typer.Option(None, "-u", "--url", help=_URL_HELP),
    json_flag: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show a message and its per-channel delivery status."""
    get_command(message_id, url, json_flag)


@app.command("list")
def list_messages(
    status: str = typer.Option(None, "-s", "--status", help="Status filter"),
    category: str = typer.Option(None, "--category", help="Category filter"),
    page: int = typer.Option(0, "--page", help="Zero-based page"),
    size: int = typer.Option(20, "-n", "--size", help="Page size"),
    url: str = typer.Option(None, "-u", "--url", help=_URL_HELP),
    json_flag: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List messages with optional filters."""
    list_command(status, category, page, size, url, json_flag)


@app.command("stats")
def stats(
    url: str = typer.Option(None, "-u", "--url", help=_URL_HELP),
    json_flag: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show message counts by status."""
    stats_command(url, json_flag)


def main() -> None:
    """Entry point."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled[/yellow]")
        raise typer.Exit(130)
