from pageflow.domain.lifecycle.page import Transition
from .common import require_reason
from .transition import apply_transition


def approve_page(store, *, page_id: str, actor):
    """
    Approve a page waiting for review.

    Records the reviewer in ``approved_by`` and clears any earlier
    rejection reason.
    """
    return apply_transition(store, page_id=page_id, actor=actor, transition=Transition.APPROVE)


def reject_page(store, *, page_id: str, actor, reason: str | None):
    """
    Reject a page waiting for review. A non-blank reason is mandatory.

    ``approved_by`` doubles as "reviewed by" and is set for rejections too.
    """
    return apply_transition(
        store,
        page_id=page_id,
        actor=actor,
        transition=Transition.REJECT,
        reason=require_reason(reason),
    )
