from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet

from .exceptions import AuthorizationError


class Role(str, Enum):
    MAKER = "maker"
    CHECKER = "checker"
    ADMIN = "admin"


class Capability(str, Enum):
    CREATE_PAGE = "create_page"
    EDIT_CONTENT = "edit_content"
    DELETE_PAGE = "delete_page"
    SUBMIT = "submit"
    REVIEW = "review"
    PUBLISH = "publish"
    MOVE_TO_DRAFT = "move_to_draft"
    MARK_EXPIRED = "mark_expired"
    OVERRIDE_STATE = "override_state"
    ROLLBACK = "rollback"
    MANAGE_LINKS = "manage_links"
    READ_AUDIT = "read_audit"


_EVERYONE = frozenset(Role)

CAPABILITIES: Dict[Capability, FrozenSet[Role]] = {
    Capability.CREATE_PAGE: _EVERYONE,
    Capability.EDIT_CONTENT: _EVERYONE,
    Capability.DELETE_PAGE: _EVERYONE,
    Capability.SUBMIT: _EVERYONE,
    Capability.REVIEW: frozenset({Role.CHECKER, Role.ADMIN}),
    Capability.PUBLISH: _EVERYONE,
    Capability.MOVE_TO_DRAFT: _EVERYONE,
    Capability.MARK_EXPIRED: _EVERYONE,
    Capability.OVERRIDE_STATE: frozenset({Role.ADMIN}),
    Capability.ROLLBACK: _EVERYONE,
    Capability.MANAGE_LINKS: _EVERYONE,
    Capability.READ_AUDIT: frozenset({Role.ADMIN}),
}


@dataclass(frozen=True)
class Actor:
    """Authenticated identity handed to the core by the identity provider."""

    actor_id: str
    role: Role

    def can(self, capability: Capability) -> bool:
        return self.role in CAPABILITIES[capability]


def assert_capability(actor: Actor, capability: Capability) -> None:
    if actor is None or not actor.can(capability):
        role = actor.role.value if actor is not None else "anonymous"
        raise AuthorizationError(role, capability.value)
