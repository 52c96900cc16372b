from ..exceptions import InvariantViolation
from ..lifecycle.page import PageState
from ..records import CONTENT_FIELDS

# Timestamp that must be present once a page has reached the state
_STATE_STAMPS = {
    PageState.PENDING_APPROVAL: "submitted_at",
    PageState.REJECTED: "rejected_at",
    PageState.EXPIRED: "expire_at",
}


def assert_page(page):
    if not isinstance(page.state, PageState):
        raise InvariantViolation(f"Page {page.id} has unknown state {page.state!r}")

    for name in CONTENT_FIELDS:
        if not isinstance(getattr(page, name), str):
            raise InvariantViolation(f"Page {page.id} field '{name}' must be a string")

    if page.rejection_reason is not None and page.state is not PageState.REJECTED:
        raise InvariantViolation(
            f"Page {page.id} carries a rejection reason outside Rejected state"
        )

    if page.state is PageState.REJECTED and not page.rejection_reason:
        raise InvariantViolation(f"Rejected page {page.id} has no rejection reason")

    stamp = _STATE_STAMPS.get(page.state)
    if stamp and getattr(page, stamp) is None:
        raise InvariantViolation(
            f"Page {page.id} is {page.state.value} but {stamp} is not set"
        )
