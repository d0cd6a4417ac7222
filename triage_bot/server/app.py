"""FastAPI application receiving GitHub webhook deliveries.

Each delivery is verified against the webhook secret, decoded into an event
and routed. Failures while handling one delivery are logged and answered with
a server error; they never stop the service from handling later deliveries.
"""

import hashlib
import hmac
from typing import Annotated

import structlog
from fastapi import FastAPI, Header, Request
from fastapi.responses import JSONResponse

from triage_bot.configuration.env import Settings
from triage_bot.configuration.models import BotConfig
from triage_bot.configuration.reconcile import build_bot_config_from_settings
from triage_bot.events.decode import decode_event
from triage_bot.events.exceptions import DecodeError, WebhookSignatureError
from triage_bot.github.adapter import GitHubAppClientFactory
from triage_bot.github.exceptions import TrackerCallFailure
from triage_bot.routing.router import EventRouter, TrackerClientFactory
from triage_bot.utils.logging import configure_logging

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def verify_signature(secret: str, body: bytes, signature: str | None) -> None:
    """Check the X-Hub-Signature-256 header against the shared secret.

    Raises:
        WebhookSignatureError: If the signature is missing or does not match.
    """
    if not signature:
        raise WebhookSignatureError("Missing X-Hub-Signature-256 header")
    expected = "sha256=" + hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
    # Header values may carry any latin-1 character; compare_digest only accepts ASCII str.
    if not hmac.compare_digest(expected.encode("ascii"), signature.encode("utf-8", "surrogateescape")):
        raise WebhookSignatureError("Signature does not match the webhook secret")


def create_app(config: BotConfig, client_factory: TrackerClientFactory | None = None) -> FastAPI:
    """Build the web application for a configuration.

    The client factory defaults to one authenticating as the configured
    GitHub App; tests pass a factory returning fake clients.
    """
    if client_factory is None:
        client_factory = GitHubAppClientFactory(config.github_app_id, config.github_app_private_key, config.github_api_url)
    router = EventRouter(config, client_factory)

    app = FastAPI(title="triage-bot", docs_url=None, redoc_url=None)
    app.state.router = router

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    @app.post(config.webhook_path)
    async def receive_webhook(
        request: Request,
        x_github_event: Annotated[str | None, Header()] = None,
        x_github_delivery: Annotated[str | None, Header()] = None,
        x_hub_signature_256: Annotated[str | None, Header()] = None,
    ) -> JSONResponse:
        body = await request.body()
        log = logger.bind(delivery_id=x_github_delivery, event_name=x_github_event)

        try:
            verify_signature(config.webhook_secret, body, x_hub_signature_256)
        except WebhookSignatureError as exc:
            log.warning("Rejecting delivery with invalid signature", reason=str(exc))
            return JSONResponse(status_code=401, content={"delivery": x_github_delivery, "error": str(exc)})

        try:
            event = decode_event(x_github_event, body, delivery_id=x_github_delivery)
        except DecodeError as exc:
            log.warning("Rejecting undecodable delivery", reason=str(exc))
            return JSONResponse(status_code=400, content={"delivery": x_github_delivery, "error": str(exc)})

        try:
            result = await router.route(event)
        except TrackerCallFailure as exc:
            log.error("Tracker call failed while handling delivery", operation=exc.operation, status_code=exc.status_code, error=str(exc))
            return JSONResponse(status_code=500, content={"delivery": x_github_delivery, "event": event.kind, "outcome": "failed"})
        except Exception:
            log.exception("Unexpected error while handling delivery")
            return JSONResponse(status_code=500, content={"delivery": x_github_delivery, "event": event.kind, "outcome": "failed"})

        log.info("Handled delivery", outcome=result.outcome.value, applied_step_count=len(result.applied_steps))
        return JSONResponse(
            status_code=200,
            content={
                "delivery": x_github_delivery,
                "event": event.kind,
                "outcome": result.outcome.value,
                "calls": len(result.applied_steps),
            },
        )

    return app


def create_app_from_env() -> FastAPI:
    """Application factory reading its configuration from the environment.

    For ASGI servers: `uvicorn triage_bot.server.app:create_app_from_env --factory`.
    """
    settings = Settings()
    configure_logging(settings.DEBUG)
    return create_app(build_bot_config_from_settings(settings))
