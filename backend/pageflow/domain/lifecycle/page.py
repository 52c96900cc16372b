from enum import Enum
from typing import Dict, FrozenSet

from ..exceptions import IllegalTransition, ValidationError
from ..roles import Capability


class PageState(str, Enum):
    DRAFT = "Draft"
    PENDING_APPROVAL = "Pending_Approval"
    APPROVED = "Approved"
    LIVE = "Live"
    EXPIRED = "Expired"
    REJECTED = "Rejected"

    @classmethod
    def parse(cls, value) -> "PageState":
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ValidationError(
                f"Invalid state '{value}'. Must be one of: {allowed}",
                field="state",
            ) from None


class Transition(str, Enum):
    SUBMIT = "submit_for_approval"
    APPROVE = "approve"
    REJECT = "reject"
    PUBLISH = "publish"
    MOVE_TO_DRAFT = "move_to_draft"
    MARK_EXPIRED = "mark_expired"


_ALL = frozenset(PageState)

# Explicit allowed source states per transition
ALLOWED_SOURCES: Dict[Transition, FrozenSet[PageState]] = {
    Transition.SUBMIT: frozenset({PageState.DRAFT, PageState.REJECTED}),
    Transition.APPROVE: frozenset({PageState.PENDING_APPROVAL}),
    Transition.REJECT: frozenset({PageState.PENDING_APPROVAL}),
    Transition.PUBLISH: frozenset({PageState.APPROVED}),
    Transition.MOVE_TO_DRAFT: _ALL,
    Transition.MARK_EXPIRED: _ALL - {PageState.EXPIRED},
}

TARGETS: Dict[Transition, PageState] = {
    Transition.SUBMIT: PageState.PENDING_APPROVAL,
    Transition.APPROVE: PageState.APPROVED,
    Transition.REJECT: PageState.REJECTED,
    Transition.PUBLISH: PageState.LIVE,
    Transition.MOVE_TO_DRAFT: PageState.DRAFT,
    Transition.MARK_EXPIRED: PageState.EXPIRED,
}

REQUIRED_CAPABILITY: Dict[Transition, Capability] = {
    Transition.SUBMIT: Capability.SUBMIT,
    Transition.APPROVE: Capability.REVIEW,
    Transition.REJECT: Capability.REVIEW,
    Transition.PUBLISH: Capability.PUBLISH,
    Transition.MOVE_TO_DRAFT: Capability.MOVE_TO_DRAFT,
    Transition.MARK_EXPIRED: Capability.MARK_EXPIRED,
}

# setState targets reachable without an administrative override
STATE_TRANSITIONS: Dict[PageState, Transition] = {
    PageState.LIVE: Transition.PUBLISH,
    PageState.DRAFT: Transition.MOVE_TO_DRAFT,
    PageState.EXPIRED: Transition.MARK_EXPIRED,
}


def assert_page_transition(*, transition: Transition, from_state: PageState) -> PageState:
    """
    Guards page lifecycle transitions.
    Single source of truth for status changes; returns the target state.
    """
    target = TARGETS[transition]

    if from_state not in ALLOWED_SOURCES[transition]:
        raise IllegalTransition(from_state.value, target.value, transition.value)

    return target
