"""Models for the bot configuration."""

from collections.abc import Mapping
from dataclasses import dataclass, field

from triage_bot.reconcile.file_paths import DEFAULT_PATH_LABEL_RULES

DEFAULT_TRIGGER_PREFIX = "!bot"
DEFAULT_WEBHOOK_PATH = "/webhook"
DEFAULT_GITHUB_API_URL = "https://api.github.com"


@dataclass(frozen=True)
class BotConfig:
    """Configuration the service is started with, passed explicitly to the router and web app."""

    github_app_id: int
    github_app_private_key: str
    webhook_secret: str
    github_api_url: str = DEFAULT_GITHUB_API_URL
    trigger_prefix: str = DEFAULT_TRIGGER_PREFIX
    privileged_user_ids: frozenset[int] = frozenset()
    path_label_rules: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_PATH_LABEL_RULES))
    webhook_path: str = DEFAULT_WEBHOOK_PATH
    debug: bool = False
