"""Write the CLI configuration file."""

import typer
from rich.console import Console

from src.cli.output import format_error, format_success, json_output
from src.cli.utils import ClientSettings, ConfigError, ConfigManager, validate_url

console = Console()


def init_command(url: str, timeout: float, force: bool, json_flag: bool) -> None:
    """Save the hub URL so other commands can omit --url."""
    try:
        url = validate_url(url)
        if timeout <= 0:
            raise ValueError("Timeout must be positive")
    except ValueError as e:
        format_error(console, str(e))
        raise typer.Exit(code=2)

    config = ConfigManager()
    try:
        config.save(ClientSettings(url=url, timeout=timeout), force=force)
    except ConfigError as e:
        format_error(console, str(e))
        raise typer.Exit(code=1)

    if json_flag:
        json_output(console, {"url": url, "timeout": timeout, "config_path": str(config.config_path)})
        return
    format_success(console, f"Saved hub URL {url} to {config.config_path}")
