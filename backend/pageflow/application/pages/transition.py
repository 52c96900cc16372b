"""
Lifecycle engine: applies one transition to one page.

Every transition runs inside the page lock and commits the new record and
its audit entry as one unit, so a refused transition leaves no trace.
"""
import logging
from dataclasses import replace

from pageflow.domain.invariants.page import assert_page
from pageflow.domain.lifecycle.page import (
    ALLOWED_SOURCES,
    REQUIRED_CAPABILITY,
    TARGETS,
    PageState,
    Transition,
    assert_page_transition,
)
from pageflow.domain.roles import assert_capability
from pageflow.utils.audit import log_action
from pageflow.utils.clock import utcnow
from .common import require_page

logger = logging.getLogger(__name__)


def transition_effects(*, transition, prior, actor_id, reason, now):
    """Field changes that accompany a transition, besides the state itself."""
    changes = {"state": TARGETS[transition]}

    if transition is Transition.SUBMIT:
        changes["submitted_at"] = now
    elif transition is Transition.APPROVE:
        changes.update(approved_at=now, approved_by=actor_id)
    elif transition is Transition.REJECT:
        changes.update(rejected_at=now, approved_by=actor_id, rejection_reason=reason)
    elif transition is Transition.PUBLISH:
        # never back-date a publish that did not come through approval
        if prior is PageState.APPROVED:
            changes["publish_at"] = now
    elif transition is Transition.MARK_EXPIRED:
        if prior is not PageState.EXPIRED:
            changes["expire_at"] = now

    if changes["state"] is not PageState.REJECTED:
        changes["rejection_reason"] = None

    return changes


def apply_transition(
    store,
    *,
    page_id: str,
    actor,
    transition: Transition,
    reason: str | None = None,
    allow_override: bool = False,
):
    """
    Run ``transition`` on a page and return the updated record.

    With ``allow_override`` a source state outside the transition table is
    accepted as an administrative correction instead of being refused.
    """
    assert_capability(actor, REQUIRED_CAPABILITY[transition])

    with store.locked(page_id):
        page = require_page(store, page_id)
        prior = page.state

        overridden = prior not in ALLOWED_SOURCES[transition]
        if not allow_override:
            assert_page_transition(transition=transition, from_state=prior)

        changes = transition_effects(
            transition=transition,
            prior=prior,
            actor_id=actor.actor_id,
            reason=reason,
            now=utcnow(),
        )
        updated = replace(page, **changes)
        assert_page(updated)

        with store.atomic():
            store.save_page(updated)
            log_action(
                store,
                action="page.state_override" if overridden else f"page.{transition.value}",
                entity_type="page",
                entity_id=page.id,
                actor_id=actor.actor_id,
                payload={
                    "from": prior.value,
                    "to": updated.state.value,
                    **({"reason": reason} if reason else {}),
                },
            )

    logger.debug("Page %s moved %s -> %s", page_id, prior.value, updated.state.value)
    return updated
