"""
Storage interface for the page lifecycle core.

Use cases depend on :class:`Storage` only. Two implementations ship with the
package: :class:`~pageflow.storage.memory.InMemoryStorage` and
:class:`~pageflow.storage.database.SQLAlchemyStorage`.

Write discipline:

- ``locked(*page_ids)`` serializes every read-decide-write sequence on the
  given pages. Operations on other pages proceed in parallel.
- ``atomic()`` groups writes into one unit. Readers outside the unit see
  either all of its writes or none of them; an exception discards them all.
"""
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import ContextManager, Iterator, List, Optional

from pageflow.domain.lifecycle.page import PageState
from pageflow.domain.records import (
    AuditEntry,
    NavigationLinkRecord,
    PageRecord,
    PageVersionRecord,
)
from .locks import PageLockRegistry


class Storage(ABC):

    def __init__(self) -> None:
        self.page_locks = PageLockRegistry()

    @contextmanager
    def locked(self, *page_ids: str) -> Iterator[None]:
        with self.page_locks.hold(*page_ids):
            self._lock_rows(page_ids)
            yield

    def _lock_rows(self, page_ids) -> None:
        """Hook for backends with row-level locks."""

    @abstractmethod
    def atomic(self) -> ContextManager[None]:
        ...

    # -------------------------------------------------
    # Pages
    # -------------------------------------------------
    @abstractmethod
    def get_page(self, page_id: str) -> Optional[PageRecord]:
        ...

    @abstractmethod
    def list_pages(self) -> List[PageRecord]:
        """All pages, newest created first."""

    @abstractmethod
    def list_pages_by_state(self, state: PageState) -> List[PageRecord]:
        ...

    @abstractmethod
    def list_pending_approval(self) -> List[PageRecord]:
        """Pending pages, oldest submission first (unsubmitted rows lead)."""

    @abstractmethod
    def add_page(self, page: PageRecord) -> None:
        ...

    @abstractmethod
    def save_page(self, page: PageRecord) -> None:
        ...

    @abstractmethod
    def remove_page(self, page_id: str) -> bool:
        ...

    # -------------------------------------------------
    # Versions (append-only)
    # -------------------------------------------------
    @abstractmethod
    def list_versions(self, page_id: str) -> List[PageVersionRecord]:
        """Versions of a page, highest version number first."""

    @abstractmethod
    def get_version(self, version_id: str) -> Optional[PageVersionRecord]:
        ...

    @abstractmethod
    def version_numbers(self, page_id: str) -> List[int]:
        ...

    @abstractmethod
    def add_version(self, version: PageVersionRecord) -> None:
        ...

    # -------------------------------------------------
    # Navigation links
    # -------------------------------------------------
    @abstractmethod
    def list_links(self) -> List[NavigationLinkRecord]:
        ...

    @abstractmethod
    def links_for_page(self, page_id: str) -> List[NavigationLinkRecord]:
        """Links where the page is the source or the target."""

    @abstractmethod
    def get_link(self, link_id: str) -> Optional[NavigationLinkRecord]:
        ...

    @abstractmethod
    def add_link(self, link: NavigationLinkRecord) -> None:
        ...

    @abstractmethod
    def remove_link(self, link_id: str) -> bool:
        ...

    @abstractmethod
    def remove_links_for_page(self, page_id: str) -> int:
        ...

    # -------------------------------------------------
    # Audit
    # -------------------------------------------------
    @abstractmethod
    def add_audit_entry(self, entry: AuditEntry) -> None:
        ...

    @abstractmethod
    def list_audit_entries(
        self,
        *,
        entity_id: Optional[str] = None,
        action: Optional[str] = None,
        limit: int = 50,
    ) -> List[AuditEntry]:
        """Newest first."""
