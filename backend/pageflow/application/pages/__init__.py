from .create_page import create_page
from .update_page import update_page
from .delete_page import delete_page
from .submit_page import submit_for_approval
from .review_page import approve_page, reject_page
from .set_page_state import set_page_state, publish_page, move_to_draft, mark_expired
from .rollback_page import rollback_page
from .queries import (
    get_page,
    get_pages,
    get_pages_by_state,
    get_pending_approval_pages,
    list_versions,
    get_version,
    page_stats,
)

__all__ = [
    "create_page",
    "update_page",
    "delete_page",
    "submit_for_approval",
    "approve_page",
    "reject_page",
    "set_page_state",
    "publish_page",
    "move_to_draft",
    "mark_expired",
    "rollback_page",
    "get_page",
    "get_pages",
    "get_pages_by_state",
    "get_pending_approval_pages",
    "list_versions",
    "get_version",
    "page_stats",
]
