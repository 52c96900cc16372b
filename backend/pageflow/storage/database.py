import threading
from contextlib import contextmanager
from typing import List, Optional

from sqlalchemy import nulls_first, or_, select
from sqlalchemy.exc import IntegrityError

from pageflow.domain.exceptions import InvariantViolation
from pageflow.domain.lifecycle.page import PageState
from pageflow.domain.records import (
    AuditEntry,
    NavigationLinkRecord,
    PageRecord,
    PageVersionRecord,
)
from pageflow.extensions import db
from pageflow.models import AuditLog, NavigationLink, Page, PageVersion
from pageflow.utils.transaction import transactional
from .base import Storage


class SQLAlchemyStorage(Storage):
    """
    Storage backed by the Flask-SQLAlchemy session of the current app context.

    Pages are locked twice: the in-process registry serializes threads of
    this worker, ``SELECT ... FOR UPDATE`` serializes workers on databases
    that support row locks. Every outermost ``atomic`` block commits once.
    """

    def __init__(self) -> None:
        super().__init__()
        self._local = threading.local()

    def _lock_rows(self, page_ids) -> None:
        # reload locked rows so later session.get() calls never see stale state
        db.session.execute(
            select(Page)
            .where(Page.id.in_(list(page_ids)))
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalars().all()

    @contextmanager
    def atomic(self):
        depth = getattr(self._local, "depth", 0)
        self._local.depth = depth + 1
        try:
            if depth:
                yield
            else:
                with transactional():
                    yield
        finally:
            self._local.depth = depth

    # -------------------------------------------------
    # Pages
    # -------------------------------------------------
    def get_page(self, page_id: str) -> Optional[PageRecord]:
        page = db.session.get(Page, page_id)
        return page.to_record() if page else None

    def list_pages(self) -> List[PageRecord]:
        pages = Page.query.order_by(Page.created_at.desc(), Page.id.desc()).all()
        return [page.to_record() for page in pages]

    def list_pages_by_state(self, state: PageState) -> List[PageRecord]:
        pages = (
            Page.query
            .filter_by(state=state.value)
            .order_by(Page.created_at.desc(), Page.id.desc())
            .all()
        )
        return [page.to_record() for page in pages]

    def list_pending_approval(self) -> List[PageRecord]:
        pages = (
            Page.query
            .filter_by(state=PageState.PENDING_APPROVAL.value)
            .order_by(nulls_first(Page.submitted_at.asc()), Page.created_at.asc())
            .all()
        )
        return [page.to_record() for page in pages]

    def add_page(self, page: PageRecord) -> None:
        with self.atomic():
            db.session.add(Page.from_record(page))
            db.session.flush()

    def save_page(self, page: PageRecord) -> None:
        with self.atomic():
            row = db.session.get(Page, page.id)
            if row is None:
                raise InvariantViolation(f"Page {page.id} vanished while being saved")
            row.apply(page)
            db.session.flush()

    def remove_page(self, page_id: str) -> bool:
        with self.atomic():
            row = db.session.get(Page, page_id)
            if row is None:
                return False
            db.session.delete(row)
            db.session.flush()
            return True

    # -------------------------------------------------
    # Versions
    # -------------------------------------------------
    def list_versions(self, page_id: str) -> List[PageVersionRecord]:
        versions = (
            PageVersion.query
            .filter_by(page_id=page_id)
            .order_by(PageVersion.version_number.desc())
            .all()
        )
        return [version.to_record() for version in versions]

    def get_version(self, version_id: str) -> Optional[PageVersionRecord]:
        version = db.session.get(PageVersion, version_id)
        return version.to_record() if version else None

    def version_numbers(self, page_id: str) -> List[int]:
        rows = db.session.execute(
            select(PageVersion.version_number).where(PageVersion.page_id == page_id)
        ).scalars()
        return list(rows)

    def add_version(self, version: PageVersionRecord) -> None:
        with self.atomic():
            db.session.add(PageVersion.from_record(version))
            try:
                db.session.flush()
            except IntegrityError as exc:
                # uq_page_version: two writers computed the same number
                raise InvariantViolation(
                    f"Version number {version.version_number} already exists for page {version.page_id}"
                ) from exc

    # -------------------------------------------------
    # Navigation links
    # -------------------------------------------------
    def list_links(self) -> List[NavigationLinkRecord]:
        links = NavigationLink.query.order_by(NavigationLink.created_at.asc()).all()
        return [link.to_record() for link in links]

    def links_for_page(self, page_id: str) -> List[NavigationLinkRecord]:
        links = (
            NavigationLink.query
            .filter(or_(NavigationLink.from_page_id == page_id, NavigationLink.to_page_id == page_id))
            .order_by(NavigationLink.created_at.asc())
            .all()
        )
        return [link.to_record() for link in links]

    def get_link(self, link_id: str) -> Optional[NavigationLinkRecord]:
        link = db.session.get(NavigationLink, link_id)
        return link.to_record() if link else None

    def add_link(self, link: NavigationLinkRecord) -> None:
        with self.atomic():
            db.session.add(NavigationLink.from_record(link))
            db.session.flush()

    def remove_link(self, link_id: str) -> bool:
        with self.atomic():
            row = db.session.get(NavigationLink, link_id)
            if row is None:
                return False
            db.session.delete(row)
            db.session.flush()
            return True

    def remove_links_for_page(self, page_id: str) -> int:
        with self.atomic():
            removed = NavigationLink.query.filter(
                or_(NavigationLink.from_page_id == page_id, NavigationLink.to_page_id == page_id)
            ).delete(synchronize_session=False)
            db.session.flush()
            return removed

    # -------------------------------------------------
    # Audit
    # -------------------------------------------------
    def add_audit_entry(self, entry: AuditEntry) -> None:
        with self.atomic():
            db.session.add(AuditLog.from_entry(entry))

    def list_audit_entries(self, *, entity_id=None, action=None, limit=50) -> List[AuditEntry]:
        query = AuditLog.query
        if entity_id is not None:
            query = query.filter(AuditLog.entity_id == entity_id)
        if action is not None:
            query = query.filter(AuditLog.action == action)

        logs = query.order_by(AuditLog.created_at.desc(), AuditLog.id.desc()).limit(limit).all()
        return [log.to_entry() for log in logs]
