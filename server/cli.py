"""Command-line entry point: run the MCP server, or set up / show configuration.

Usage:
    quip-mcp                 # serve over stdio
    quip-mcp --setup         # store an API token in the config file
    quip-mcp --config        # show where configuration comes from
"""

import os
from pathlib import Path

import typer

from server.mcp_server import create_server
from shared.helper.ConfigFile import TOKEN_KEY, ConfigFile, validate_token
from shared.helper.HelperConfig import KEY_ALIASES, HelperConfig
from shared.logging.logging_setup import setup_logging

APP_VERSION = os.getenv("APP_VERSION", "1.4.0")
TOKEN_ENV_KEY = TOKEN_KEY.upper()
TOKEN_ENV_KEYS = (TOKEN_ENV_KEY,) + KEY_ALIASES[TOKEN_ENV_KEY]
TRANSPORTS = ("stdio", "sse", "streamable-http")

app = typer.Typer(add_completion=False, help="A Model Context Protocol server for Quip integration.")


def mask_token(token: str) -> str:
    if len(token) <= 8:
        return "*" * len(token)
    return f"{token[:4]}...{token[-4:]}"


def run_setup(config_file: ConfigFile) -> None:
    typer.echo("🔧 Quip MCP Server Setup")
    typer.echo("========================\n")
    typer.echo("To use the Quip MCP server, you need a Quip API token.")
    typer.echo("You can get one from: https://quip.com/dev/token\n")

    token = typer.prompt("Enter your Quip API token", hide_input=True)
    try:
        config_file.save_token(token)
    except ValueError as e:
        typer.echo(f"❌ Configuration setup failed: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"\n✅ Configuration saved to: {config_file.get_path()}")
    typer.echo("🚀 You can now run 'quip-mcp' to start the server!")
    typer.echo(f"\nNote: You can override this token anytime by setting the {TOKEN_ENV_KEY} environment variable.")


def show_config(config_file: ConfigFile) -> None:
    typer.echo("Quip MCP Server Configuration")
    typer.echo("=============================\n")
    typer.echo(f"Config file: {config_file.get_path()}")

    env_key = next((key for key in TOKEN_ENV_KEYS if os.getenv(key)), None)
    file_token = config_file.get_token()
    if env_key:
        typer.echo(f"API token: {mask_token(os.environ[env_key])} (from {env_key})")
    elif file_token:
        typer.echo(f"API token: {mask_token(file_token)} (from config file)")
    else:
        typer.echo("API token: not configured")


def print_missing_token(config_file: ConfigFile) -> None:
    typer.echo("❌ No Quip API token found!\n", err=True)
    typer.echo("You can set up your token in one of these ways:\n", err=True)
    typer.echo("1. 🔧 Interactive setup (recommended):\n   quip-mcp --setup\n", err=True)
    typer.echo(f"2. 🌍 Environment variable:\n   export {TOKEN_ENV_KEY}=\"your-token-here\"\n   quip-mcp\n", err=True)
    typer.echo(f"3. 📁 Configuration file ({config_file.get_path()}):\n   {TOKEN_KEY}: your-token-here\n", err=True)
    typer.echo("Get your token from: https://quip.com/dev/token", err=True)


@app.command()
def main(
    version: bool = typer.Option(False, "--version", help="Show version information."),
    setup: bool = typer.Option(False, "--setup", help="Run interactive configuration setup."),
    config: bool = typer.Option(False, "--config", help="Show current configuration."),
    config_path: Path | None = typer.Option(None, "--config-path", help="Path to configuration file."),
    transport: str = typer.Option("stdio", "--transport", help="MCP transport: stdio, sse or streamable-http."),
) -> None:
    """Start the Quip MCP server."""
    if version:
        typer.echo(f"quip-mcp {APP_VERSION}")
        raise typer.Exit()

    config_file = ConfigFile(config_path)

    if setup:
        run_setup(config_file)
        raise typer.Exit()

    if config:
        show_config(config_file)
        raise typer.Exit()

    if transport not in TRANSPORTS:
        typer.echo(f"❌ Unknown transport '{transport}'. Use one of: {', '.join(TRANSPORTS)}", err=True)
        raise typer.Exit(code=2)

    try:
        file_values = config_file.load()
    except ValueError as e:
        typer.echo(f"❌ Failed to load configuration: {e}", err=True)
        raise typer.Exit(code=1)

    logging = setup_logging()
    helper_config = HelperConfig(logger=logging, file_values=file_values)

    try:
        validate_token(helper_config.get_string_val(TOKEN_ENV_KEY, default=""))
    except ValueError:
        print_missing_token(config_file)
        raise typer.Exit(code=1)

    logging.info("Starting Quip MCP Server v%s (transport=%s)...", APP_VERSION, transport)
    create_server(helper_config).run(transport=transport)


if __name__ == "__main__":
    app()
