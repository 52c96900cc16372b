from pageflow.domain.exceptions import IllegalTransition
from pageflow.domain.lifecycle.page import STATE_TRANSITIONS, PageState, Transition
from pageflow.domain.roles import Capability
from .common import require_page, require_reason
from .transition import apply_transition

# Transition whose side effects an administrative correction replays
OVERRIDE_TRANSITIONS = {
    PageState.PENDING_APPROVAL: Transition.SUBMIT,
    PageState.APPROVED: Transition.APPROVE,
    PageState.REJECTED: Transition.REJECT,
}


def publish_page(store, *, page_id: str, actor):
    return apply_transition(store, page_id=page_id, actor=actor, transition=Transition.PUBLISH)


def move_to_draft(store, *, page_id: str, actor):
    return apply_transition(store, page_id=page_id, actor=actor, transition=Transition.MOVE_TO_DRAFT)


def mark_expired(store, *, page_id: str, actor):
    return apply_transition(store, page_id=page_id, actor=actor, transition=Transition.MARK_EXPIRED)


def set_page_state(store, *, page_id: str, state, actor, reason: str | None = None):
    """
    Move a page to ``state`` directly.

    Live, Draft and Expired go through the regular transition table. Admins
    may also make moves the table refuses, or assign review states, as an
    administrative correction. Timestamp guards apply either way: publish_at
    is only stamped when leaving Approved and expire_at only when entering
    Expired.
    """
    target = PageState.parse(state)
    can_override = actor.can(Capability.OVERRIDE_STATE)
    transition = STATE_TRANSITIONS.get(target)

    if transition is None:
        if not can_override:
            current = require_page(store, page_id).state
            raise IllegalTransition(current.value, target.value, "set_state")
        transition = OVERRIDE_TRANSITIONS[target]

    if transition is Transition.REJECT:
        reason = require_reason(reason)

    return apply_transition(
        store,
        page_id=page_id,
        actor=actor,
        transition=transition,
        reason=reason,
        allow_override=can_override,
    )
