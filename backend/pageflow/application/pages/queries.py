"""Read-only page and version queries."""
from typing import Dict, List

from pageflow.domain.exceptions import NotFound
from pageflow.domain.lifecycle.page import PageState
from pageflow.domain.records import PageRecord, PageVersionRecord
from .common import require_page


def get_page(store, *, page_id: str) -> PageRecord:
    return require_page(store, page_id)


def get_pages(store) -> List[PageRecord]:
    return store.list_pages()


def get_pages_by_state(store, *, state) -> List[PageRecord]:
    return store.list_pages_by_state(PageState.parse(state))


def get_pending_approval_pages(store) -> List[PageRecord]:
    """Review queue, oldest submission first."""
    return store.list_pending_approval()


def list_versions(store, *, page_id: str) -> List[PageVersionRecord]:
    """
    Newest version first. Versions of a deleted page stay readable;
    an id that never had a page or a version is NotFound.
    """
    versions = store.list_versions(page_id)
    if not versions:
        require_page(store, page_id)
    return versions


def get_version(store, *, version_id: str) -> PageVersionRecord:
    version = store.get_version(version_id)
    if version is None:
        raise NotFound("PageVersion", version_id)
    return version


def page_stats(store) -> Dict[str, int]:
    pages = store.list_pages()
    counts = {state: 0 for state in PageState}
    for page in pages:
        counts[page.state] += 1

    return {
        "total_pages": len(pages),
        "live_pages": counts[PageState.LIVE],
        "draft_pages": counts[PageState.DRAFT],
        "expired_pages": counts[PageState.EXPIRED],
        "pending_approval_pages": counts[PageState.PENDING_APPROVAL],
        "approved_pages": counts[PageState.APPROVED],
        "rejected_pages": counts[PageState.REJECTED],
    }
