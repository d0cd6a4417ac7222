"""Defines the Command Line Interface (CLI) using Typer."""

from pathlib import Path

import typer
import uvicorn
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from triage_bot.commands.parser import parse_commands
from triage_bot.configuration.exceptions import InvalidConfigurationError, RequiredConfigurationElementError
from triage_bot.configuration.models import DEFAULT_TRIGGER_PREFIX
from triage_bot.configuration.reconcile import build_bot_config
from triage_bot.server.app import create_app
from triage_bot.utils.logging import configure_logging

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False)


@typer_app.command(name="serve")
def serve_cli(
    host: Annotated[str, Option(envvar="HOST", help="Interface to listen on.")] = "127.0.0.1",
    port: Annotated[int, Option(envvar="PORT", help="Port to listen on.")] = 8000,
    webhook_path: Annotated[str, Option(envvar="WEBHOOK_PATH", help="Path receiving webhook deliveries.")] = "/webhook",
    github_api_url: Annotated[str, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")] = "https://api.github.com",
    github_app_id: Annotated[int | None, Option(envvar="GITHUB_APP_ID", help="GitHub App ID.")] = None,
    github_app_private_key: Annotated[
        str | None, Option(envvar="GITHUB_APP_PRIVATE_KEY", help="GitHub App private key (PEM).", show_default=False)
    ] = None,
    github_app_private_key_path: Annotated[Path | None, Option(envvar="GITHUB_APP_PRIVATE_KEY_PATH", help="Path to GitHub App private key.")] = None,
    webhook_secret: Annotated[str | None, Option(envvar="GITHUB_WEBHOOK_SECRET", help="Webhook shared secret.", show_default=False)] = None,
    trigger_prefix: Annotated[str, Option(envvar="TRIGGER_PREFIX", help="Prefix marking a comment line as a bot command.")] = DEFAULT_TRIGGER_PREFIX,
    privileged_user_ids: Annotated[
        str, Option(envvar="PRIVILEGED_USER_IDS", help="Comma-separated GitHub user ids allowed to run commands anywhere.")
    ] = "",
    path_label_rules_file: Annotated[
        Path | None, Option(envvar="PATH_LABEL_RULES_FILE", help="YAML mapping of changed-path substrings to labels.")
    ] = None,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug logging.")] = False,
) -> None:
    """Serve the webhook endpoint."""
    configure_logging(debug)
    try:
        config = build_bot_config(
            github_app_id=github_app_id,
            github_app_private_key=github_app_private_key,
            github_app_private_key_path=github_app_private_key_path,
            webhook_secret=webhook_secret,
            github_api_url=github_api_url,
            trigger_prefix=trigger_prefix,
            privileged_user_ids=privileged_user_ids,
            path_label_rules_file=path_label_rules_file,
            webhook_path=webhook_path,
            debug=debug,
        )
    except (RequiredConfigurationElementError, InvalidConfigurationError) as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(code=1) from e

    typer.echo(f"Listening for webhook deliveries on http://{host}:{port}{config.webhook_path}")
    uvicorn.run(create_app(config), host=host, port=port, log_config=None)


@typer_app.command(name="parse-comment")
def parse_comment_cli(
    body: Annotated[str, Argument(help="Comment body to parse.")],
    trigger_prefix: Annotated[str, Option(envvar="TRIGGER_PREFIX", help="Prefix marking a comment line as a bot command.")] = DEFAULT_TRIGGER_PREFIX,
) -> None:
    """Print the commands a comment body would run, without contacting GitHub."""
    commands = parse_commands(body, trigger_prefix)
    if not commands:
        typer.echo("No commands found.")
        return
    for command in commands:
        typer.echo(repr(command))


if __name__ == "__main__":
    typer_app()
