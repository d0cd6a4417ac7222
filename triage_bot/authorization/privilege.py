"""Maps GitHub author associations onto privilege tiers."""

from enum import IntEnum


class PrivilegeTier(IntEnum):
    """Ordered trust tiers derived from a commenter's author association."""

    NONE = 0
    COLLABORATOR = 1
    MEMBER = 2


_ASSOCIATION_TIERS: dict[str, PrivilegeTier] = {
    "OWNER": PrivilegeTier.MEMBER,
    "MEMBER": PrivilegeTier.MEMBER,
    "COLLABORATOR": PrivilegeTier.COLLABORATOR,
}


def classify_author_association(association: str | None) -> PrivilegeTier:
    """Return the privilege tier for a raw author association string.

    GitHub sends one of OWNER, MEMBER, COLLABORATOR, CONTRIBUTOR,
    FIRST_TIMER, FIRST_TIME_CONTRIBUTOR, MANNEQUIN or NONE. Anything that is
    not an owner, member or collaborator (including unknown values) maps to
    PrivilegeTier.NONE.
    """
    if not association:
        return PrivilegeTier.NONE
    return _ASSOCIATION_TIERS.get(association.strip().upper(), PrivilegeTier.NONE)
