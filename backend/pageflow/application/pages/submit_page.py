from pageflow.domain.lifecycle.page import Transition
from .transition import apply_transition


def submit_for_approval(store, *, page_id: str, actor):
    """Draft (or Rejected) -> Pending_Approval; stamps submitted_at."""
    return apply_transition(store, page_id=page_id, actor=actor, transition=Transition.SUBMIT)
