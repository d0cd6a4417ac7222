"""Decodes raw webhook deliveries into events."""

import json
from typing import Any, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from triage_bot.events.exceptions import DecodeError
from triage_bot.events.models import (
    ActorIdentity,
    Event,
    IssueCommentCreatedEvent,
    IssueOpenedEvent,
    OtherEvent,
    PingEvent,
    PullRequestEditedEvent,
    PullRequestOpenedEvent,
    PullRequestReopenedEvent,
)
from triage_bot.events.schemas import (
    IssueCommentPayload,
    IssuesPayload,
    PingPayload,
    PullRequestEventPayload,
    UserPayload,
)

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

PULL_REQUEST_EVENTS: dict[str, type[PullRequestOpenedEvent | PullRequestReopenedEvent | PullRequestEditedEvent]] = {
    "opened": PullRequestOpenedEvent,
    "reopened": PullRequestReopenedEvent,
    "edited": PullRequestEditedEvent,
}


def _load_payload(body: bytes | str | dict[str, Any], event_name: str) -> dict[str, Any]:
    """Parse the request body into a JSON object."""
    if isinstance(body, dict):
        return body
    try:
        payload = json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
        raise DecodeError(f"Webhook body is not valid JSON: {exc}", event_name=event_name) from exc
    if not isinstance(payload, dict):
        raise DecodeError("Webhook body must be a JSON object", event_name=event_name)
    return payload


def _validate(schema: type[ModelT], payload: dict[str, Any], event_name: str) -> ModelT:
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise DecodeError(f"Malformed {event_name} payload: {exc.error_count()} validation error(s)", event_name=event_name) from exc


def _actor(user: UserPayload) -> ActorIdentity:
    return ActorIdentity(login=user.login, id=user.id)


def decode_event(event_name: str | None, body: bytes | str | dict[str, Any], delivery_id: str | None = None) -> Event:
    """Decode a delivery into an event using the X-GitHub-Event header value.

    Event types and actions the bot does not act on decode to OtherEvent
    without validating the rest of the payload.

    Raises:
        DecodeError: If the event header is missing, the body is not a JSON
            object, or a handled event does not match its expected schema.
    """
    if not event_name:
        raise DecodeError("Missing event type header")
    payload = _load_payload(body, event_name)
    action = payload.get("action")
    if action is not None and not isinstance(action, str):
        raise DecodeError("Webhook action must be a string", event_name=event_name)
    repository = payload.get("repository")
    repository_name = repository.get("full_name") if isinstance(repository, dict) else None

    if event_name == "ping":
        ping = _validate(PingPayload, payload, event_name)
        return PingEvent(delivery_id=delivery_id, zen=ping.zen, hook_id=ping.hook_id)

    if event_name == "issues" and action == "opened":
        issues = _validate(IssuesPayload, payload, event_name)
        return IssueOpenedEvent(
            delivery_id=delivery_id,
            repository=issues.repository.full_name,
            installation_id=issues.installation.id if issues.installation else None,
            actor=_actor(issues.sender),
            author_association=issues.issue.author_association,
            issue_number=issues.issue.number,
        )

    if event_name == "issue_comment" and action == "created":
        comment = _validate(IssueCommentPayload, payload, event_name)
        return IssueCommentCreatedEvent(
            delivery_id=delivery_id,
            repository=comment.repository.full_name,
            installation_id=comment.installation.id if comment.installation else None,
            actor=_actor(comment.comment.user),
            author_association=comment.comment.author_association,
            issue_number=comment.issue.number,
            issue_author=_actor(comment.issue.user),
            body=comment.comment.body or "",
        )

    if event_name == "pull_request" and action in PULL_REQUEST_EVENTS:
        pull_request = _validate(PullRequestEventPayload, payload, event_name)
        return PULL_REQUEST_EVENTS[action](
            delivery_id=delivery_id,
            repository=pull_request.repository.full_name,
            installation_id=pull_request.installation.id if pull_request.installation else None,
            actor=_actor(pull_request.sender),
            author_association=pull_request.pull_request.author_association,
            pull_number=pull_request.pull_request.number,
        )

    logger.debug("Decoded event the bot does not act on", event_name=event_name, action=action)
    return OtherEvent(
        delivery_id=delivery_id,
        name=event_name,
        action=action,
        repository=repository_name if isinstance(repository_name, str) else None,
    )
