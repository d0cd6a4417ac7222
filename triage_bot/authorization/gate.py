"""Decides whether a commenter may issue bot commands."""

from collections.abc import Collection

import structlog

from triage_bot.authorization.privilege import PrivilegeTier, classify_author_association
from triage_bot.events.models import ActorIdentity

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def may_issue_commands(
    actor: ActorIdentity,
    author_association: str | None,
    issue_author: ActorIdentity,
    privileged_user_ids: Collection[int] = (),
) -> bool:
    """Return True if the actor may run commands on the issue.

    Collaborators and above are always allowed. Anyone may run commands on an
    issue they opened themselves. User ids in the configured allowlist are
    allowed regardless of their association.
    """
    tier = classify_author_association(author_association)
    if tier >= PrivilegeTier.COLLABORATOR:
        logger.debug("Actor authorized by privilege tier", actor=actor.login, tier=tier.name)
        return True
    if actor.id == issue_author.id:
        logger.debug("Actor authorized as issue author", actor=actor.login)
        return True
    if actor.id in privileged_user_ids:
        logger.debug("Actor authorized by privileged user allowlist", actor=actor.login)
        return True
    logger.info(
        "Actor not authorized to issue commands",
        actor=actor.login,
        actor_id=actor.id,
        author_association=author_association,
        tier=tier.name,
    )
    return False
