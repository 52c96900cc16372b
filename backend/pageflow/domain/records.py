"""
Immutable records passed between the storage layer and the use cases.

Storage implementations hand out these values, never live ORM rows, so a
reader always holds a consistent committed copy. Changes are expressed with
``dataclasses.replace`` and written back through the store.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from .lifecycle.page import PageState

CONTENT_FIELDS = ("name", "html", "css", "js")


@dataclass(frozen=True)
class PageRecord:
    id: str
    name: str
    html: str
    css: str
    js: str
    created_at: datetime
    state: PageState = PageState.DRAFT
    page_type: str = "custom"
    thumbnail: Optional[str] = None
    submitted_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None
    rejected_at: Optional[datetime] = None
    publish_at: Optional[datetime] = None
    expire_at: Optional[datetime] = None
    approved_by: Optional[str] = None
    rejection_reason: Optional[str] = None

    def content(self) -> Dict[str, str]:
        return {name: getattr(self, name) for name in CONTENT_FIELDS}


@dataclass(frozen=True)
class PageVersionRecord:
    id: str
    page_id: str
    version_number: int
    name: str
    html: str
    css: str
    js: str
    state: PageState
    created_at: datetime
    change_description: Optional[str] = None
    created_by: Optional[str] = None

    def content(self) -> Dict[str, str]:
        return {name: getattr(self, name) for name in CONTENT_FIELDS}


@dataclass(frozen=True)
class NavigationLinkRecord:
    id: str
    from_page_id: str
    to_page_id: str
    created_at: datetime
    from_element_id: Optional[str] = None
    trigger_text: Optional[str] = None
    link_type: str = "button"

    def touches(self, page_id: str) -> bool:
        return page_id in (self.from_page_id, self.to_page_id)


@dataclass(frozen=True)
class AuditEntry:
    id: str
    actor_id: Optional[str]
    action: str
    entity_type: str
    entity_id: Optional[str]
    created_at: datetime
    payload: Dict[str, Any] = field(default_factory=dict)
