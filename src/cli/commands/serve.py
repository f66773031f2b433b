"""Run the hub HTTP server."""

import typer
import uvicorn
from rich.console import Console

from src.cli.output import format_error

console = Console()


def serve_command(host: str, port: int, log_level: str) -> None:
    """Serve the API with uvicorn, configured from HUB_* environment variables."""
    if not 0 < port < 65536:
        format_error(console, f"Port must be between 1 and 65535, got {port}")
        raise typer.Exit(code=2)
    console.print(f"[cyan]Messaging hub listening on[/cyan] http://{host}:{port}")
    uvicorn.run(
        "src.server.app:create_app",
        factory=True,
        host=host,
        port=port,
        log_level=log_level.lower(),
    )
