import logging
from typing import Any, Dict

from pageflow.domain.exceptions import ValidationError
from pageflow.domain.invariants.page import assert_page
from pageflow.domain.lifecycle.page import PageState
from pageflow.domain.records import PageRecord
from pageflow.domain.roles import Capability, assert_capability
from pageflow.utils.audit import log_action
from pageflow.utils.clock import new_id, utcnow
from .common import optional_text, require_text

logger = logging.getLogger(__name__)


def create_page(
    store,
    *,
    actor,
    data: Dict[str, Any],
) -> PageRecord:
    """
    Create a new page in DRAFT state from producer content.

    Accepts ``{name, html, css, js, page_type, thumbnail, state?}`` from
    any content producer (manual form, importer, AI generator). ``state``
    may only be Draft: every page enters through the start of the workflow.
    """
    assert_capability(actor, Capability.CREATE_PAGE)

    if "state" in data and data["state"] is not None:
        if PageState.parse(data["state"]) is not PageState.DRAFT:
            raise ValidationError("New pages always start in Draft", field="state")

    page = PageRecord(
        id=new_id(),
        name=require_text(data, "name").strip(),
        html=require_text(data, "html", allow_empty=True),
        css=optional_text(data, "css"),
        js=optional_text(data, "js"),
        created_at=utcnow(),
        page_type=optional_text(data, "page_type") or "custom",
        thumbnail=optional_text(data, "thumbnail", default=None),
    )

    # 🔒 Domain invariants (single source of truth)
    assert_page(page)

    with store.atomic():
        store.add_page(page)
        log_action(
            store,
            action="page.create",
            entity_type="page",
            entity_id=page.id,
            actor_id=actor.actor_id,
            payload={
                "name": page.name,
                "page_type": page.page_type,
                "state": page.state.value,
            },
        )

    logger.info("Created page %s (%s)", page.id, page.name)
    return page
