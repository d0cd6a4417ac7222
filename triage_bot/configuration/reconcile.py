"""Reconciles environment settings and command line options into a BotConfig."""

from collections.abc import Mapping
from pathlib import Path

import structlog

from triage_bot.configuration.env import Settings
from triage_bot.configuration.exceptions import InvalidConfigurationError, RequiredConfigurationElementError
from triage_bot.configuration.models import DEFAULT_GITHUB_API_URL, DEFAULT_TRIGGER_PREFIX, DEFAULT_WEBHOOK_PATH, BotConfig
from triage_bot.reconcile.file_paths import DEFAULT_PATH_LABEL_RULES
from triage_bot.utils.yaml import load_yaml_file

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def parse_privileged_user_ids(value: str | None) -> frozenset[int]:
    """Parse a comma-separated list of numeric GitHub user ids."""
    if not value:
        return frozenset()
    user_ids: set[int] = set()
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        try:
            user_ids.add(int(item))
        except ValueError as exc:
            raise InvalidConfigurationError(f"Privileged user ids must be integers, got {item!r}") from exc
    return frozenset(user_ids)


def load_path_label_rules(path: Path | None) -> Mapping[str, str]:
    """Load a mapping of path substring to label from a YAML file, or return the default rules."""
    if path is None:
        return dict(DEFAULT_PATH_LABEL_RULES)
    try:
        rules = load_yaml_file(path)
    except OSError as exc:
        raise InvalidConfigurationError(f"Unable to read path label rules file {path}: {exc}") from exc
    if not isinstance(rules, dict) or not all(isinstance(k, str) and isinstance(v, str) and k and v for k, v in rules.items()):
        raise InvalidConfigurationError(f"Path label rules file {path} must map non-empty path substrings to label names")
    logger.info("Loaded path label rules", path=str(path), rule_count=len(rules))
    return rules


def read_private_key(private_key: str | None, private_key_path: Path | None) -> str:
    """Return the GitHub App private key, preferring an inline value over a key file."""
    if private_key:
        return private_key
    if private_key_path is None:
        raise RequiredConfigurationElementError(
            name="GitHub App private key",
            cli_name="--github-app-private-key-path",
            env_name="GITHUB_APP_PRIVATE_KEY or GITHUB_APP_PRIVATE_KEY_PATH",
        )
    try:
        with open(private_key_path, encoding="utf-8") as f:
            return f.read()
    except OSError as exc:
        raise InvalidConfigurationError(f"Unable to read GitHub App private key {private_key_path}: {exc}") from exc


def build_bot_config(
    github_app_id: int | None,
    github_app_private_key: str | None,
    github_app_private_key_path: Path | None,
    webhook_secret: str | None,
    github_api_url: str = DEFAULT_GITHUB_API_URL,
    trigger_prefix: str = DEFAULT_TRIGGER_PREFIX,
    privileged_user_ids: str | None = None,
    path_label_rules_file: Path | None = None,
    webhook_path: str = DEFAULT_WEBHOOK_PATH,
    debug: bool = False,
) -> BotConfig:
    """Validate the configuration elements and build the BotConfig.

    Raises:
        RequiredConfigurationElementError: If the App id, private key or
            webhook secret is missing.
        InvalidConfigurationError: If a supplied element cannot be used.
    """
    if not github_app_id:
        raise RequiredConfigurationElementError(name="GitHub App ID", cli_name="--github-app-id", env_name="GITHUB_APP_ID")
    if not webhook_secret:
        raise RequiredConfigurationElementError(name="Webhook secret", cli_name="--webhook-secret", env_name="GITHUB_WEBHOOK_SECRET")
    if not trigger_prefix or not trigger_prefix.strip():
        raise InvalidConfigurationError("The command trigger prefix must not be empty")
    if not webhook_path.startswith("/"):
        raise InvalidConfigurationError(f"Webhook path must start with '/', got {webhook_path!r}")

    return BotConfig(
        github_app_id=github_app_id,
        github_app_private_key=read_private_key(github_app_private_key, github_app_private_key_path),
        webhook_secret=webhook_secret,
        github_api_url=github_api_url,
        trigger_prefix=trigger_prefix.strip(),
        privileged_user_ids=parse_privileged_user_ids(privileged_user_ids),
        path_label_rules=load_path_label_rules(path_label_rules_file),
        webhook_path=webhook_path,
        debug=debug,
    )


def build_bot_config_from_settings(settings: Settings) -> BotConfig:
    """Build the BotConfig from environment settings."""
    return build_bot_config(
        github_app_id=settings.GITHUB_APP_ID,
        github_app_private_key=settings.GITHUB_APP_PRIVATE_KEY,
        github_app_private_key_path=settings.GITHUB_APP_PRIVATE_KEY_PATH,
        webhook_secret=settings.GITHUB_WEBHOOK_SECRET,
        github_api_url=settings.GITHUB_API_URL,
        trigger_prefix=settings.TRIGGER_PREFIX,
        privileged_user_ids=settings.PRIVILEGED_USER_IDS,
        path_label_rules_file=settings.PATH_LABEL_RULES_FILE,
        webhook_path=settings.WEBHOOK_PATH,
        debug=settings.DEBUG,
    )
