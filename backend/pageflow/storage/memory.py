import threading
from contextlib import contextmanager
from typing import Dict, List, Optional

from pageflow.domain.exceptions import InvariantViolation
from pageflow.domain.lifecycle.page import PageState
from pageflow.domain.records import (
    AuditEntry,
    NavigationLinkRecord,
    PageRecord,
    PageVersionRecord,
)
from .base import Storage


def _submission_key(page: PageRecord):
    # pages that were never stamped sort first, like an epoch timestamp
    stamped = page.submitted_at is not None
    return (stamped, page.submitted_at.timestamp() if stamped else 0.0, page.created_at.timestamp())


class InMemoryStorage(Storage):
    """
    Process-local storage.

    Records are frozen, so readers can be handed the stored objects directly.
    A single commit lock covers every read and every ``atomic`` block, which
    makes a multi-record write appear all at once to other threads.
    """

    def __init__(self) -> None:
        super().__init__()
        self._pages: Dict[str, PageRecord] = {}
        self._versions: Dict[str, PageVersionRecord] = {}
        self._links: Dict[str, NavigationLinkRecord] = {}
        self._audit: List[AuditEntry] = []
        self._commit_lock = threading.RLock()
        self._depth = 0

    @contextmanager
    def atomic(self):
        with self._commit_lock:
            outermost = self._depth == 0
            if outermost:
                saved = (dict(self._pages), dict(self._versions), dict(self._links), len(self._audit))
            self._depth += 1
            try:
                yield
            except Exception:
                if outermost:
                    self._pages, self._versions, self._links = saved[0], saved[1], saved[2]
                    del self._audit[saved[3]:]
                raise
            finally:
                self._depth -= 1

    # -------------------------------------------------
    # Pages
    # -------------------------------------------------
    def get_page(self, page_id: str) -> Optional[PageRecord]:
        with self._commit_lock:
            return self._pages.get(page_id)

    def list_pages(self) -> List[PageRecord]:
        with self._commit_lock:
            pages = list(self._pages.values())
        return sorted(pages, key=lambda p: p.created_at, reverse=True)

    def list_pages_by_state(self, state: PageState) -> List[PageRecord]:
        return [page for page in self.list_pages() if page.state is state]

    def list_pending_approval(self) -> List[PageRecord]:
        with self._commit_lock:
            pending = [p for p in self._pages.values() if p.state is PageState.PENDING_APPROVAL]
        return sorted(pending, key=_submission_key)

    def add_page(self, page: PageRecord) -> None:
        with self.atomic():
            if page.id in self._pages:
                raise InvariantViolation(f"Page {page.id} already exists")
            self._pages[page.id] = page

    def save_page(self, page: PageRecord) -> None:
        with self.atomic():
            if page.id not in self._pages:
                raise InvariantViolation(f"Page {page.id} vanished while being saved")
            self._pages[page.id] = page

    def remove_page(self, page_id: str) -> bool:
        with self.atomic():
            return self._pages.pop(page_id, None) is not None

    # -------------------------------------------------
    # Versions
    # -------------------------------------------------
    def list_versions(self, page_id: str) -> List[PageVersionRecord]:
        with self._commit_lock:
            versions = [v for v in self._versions.values() if v.page_id == page_id]
        return sorted(versions, key=lambda v: v.version_number, reverse=True)

    def get_version(self, version_id: str) -> Optional[PageVersionRecord]:
        with self._commit_lock:
            return self._versions.get(version_id)

    def version_numbers(self, page_id: str) -> List[int]:
        with self._commit_lock:
            return [v.version_number for v in self._versions.values() if v.page_id == page_id]

    def add_version(self, version: PageVersionRecord) -> None:
        with self.atomic():
            if version.version_number in self.version_numbers(version.page_id):
                raise InvariantViolation(
                    f"Version number {version.version_number} already exists for page {version.page_id}"
                )
            self._versions[version.id] = version

    # -------------------------------------------------
    # Navigation links
    # -------------------------------------------------
    def list_links(self) -> List[NavigationLinkRecord]:
        with self._commit_lock:
            links = list(self._links.values())
        return sorted(links, key=lambda link: link.created_at)

    def links_for_page(self, page_id: str) -> List[NavigationLinkRecord]:
        return [link for link in self.list_links() if link.touches(page_id)]

    def get_link(self, link_id: str) -> Optional[NavigationLinkRecord]:
        with self._commit_lock:
            return self._links.get(link_id)

    def add_link(self, link: NavigationLinkRecord) -> None:
        with self.atomic():
            for page_id in (link.from_page_id, link.to_page_id):
                if page_id not in self._pages:
                    raise InvariantViolation(f"Link {link.id} references missing page {page_id}")
            self._links[link.id] = link

    def remove_link(self, link_id: str) -> bool:
        with self.atomic():
            return self._links.pop(link_id, None) is not None

    def remove_links_for_page(self, page_id: str) -> int:
        with self.atomic():
            doomed = [link.id for link in self._links.values() if link.touches(page_id)]
            for link_id in doomed:
                del self._links[link_id]
            return len(doomed)

    # -------------------------------------------------
    # Audit
    # -------------------------------------------------
    def add_audit_entry(self, entry: AuditEntry) -> None:
        with self.atomic():
            self._audit.append(entry)

    def list_audit_entries(self, *, entity_id=None, action=None, limit=50) -> List[AuditEntry]:
        with self._commit_lock:
            entries = list(reversed(self._audit))
        if entity_id is not None:
            entries = [e for e in entries if e.entity_id == entity_id]
        if action is not None:
            entries = [e for e in entries if e.action == action]
        return entries[:limit]
