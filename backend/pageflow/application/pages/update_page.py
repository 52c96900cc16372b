from dataclasses import replace
from typing import Any, Dict

from pageflow.domain.exceptions import ValidationError
from pageflow.domain.invariants.page import assert_page
from pageflow.domain.records import CONTENT_FIELDS, PageRecord
from pageflow.domain.roles import Capability, assert_capability
from pageflow.utils.audit import log_action
from pageflow.utils.versioning import snapshot_page
from .common import optional_text, require_page, require_text


ALLOWED_UPDATE_FIELDS = set(CONTENT_FIELDS) | {"page_type", "thumbnail"}


def _clean_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    unknown = set(data) - ALLOWED_UPDATE_FIELDS
    if unknown:
        raise ValidationError(
            f"Fields cannot be updated directly: {', '.join(sorted(unknown))}",
            field=sorted(unknown)[0],
        )

    fields = {}
    for field in CONTENT_FIELDS:
        if field in data:
            fields[field] = require_text(data, field, allow_empty=field != "name")
    if "name" in fields:
        fields["name"] = fields["name"].strip()
    if "page_type" in data:
        fields["page_type"] = require_text(data, "page_type")
    if "thumbnail" in data:
        fields["thumbnail"] = optional_text(data, "thumbnail", default=None)
    return fields


def update_page(
    store,
    *,
    page_id: str,
    actor,
    data: Dict[str, Any],
) -> PageRecord:
    """
    Update mutable fields on a page.

    Design rules:
    - Only whitelisted fields are mutable; lifecycle state and workflow
      timestamps change through transitions only
    - Submitting the current values returns the page as is, with no
      version and no audit entry
    - A change to name/html/css/js first snapshots the pre-update page
    - Snapshot and update commit together or not at all
    """
    assert_capability(actor, Capability.EDIT_CONTENT)

    fields = _clean_fields(data)

    with store.locked(page_id):
        page = require_page(store, page_id)

        changed = {
            field: value
            for field, value in fields.items()
            if getattr(page, field) != value
        }
        if not changed:
            return page

        updated = replace(page, **changed)
        assert_page(updated)

        content_changed = any(field in changed for field in CONTENT_FIELDS)

        with store.atomic():
            version = None
            if content_changed:
                version = snapshot_page(
                    store,
                    page,
                    change_description="Page updated",
                    created_by=actor.actor_id,
                )

            store.save_page(updated)

            log_action(
                store,
                action="page.update",
                entity_type="page",
                entity_id=page.id,
                actor_id=actor.actor_id,
                payload={
                    "fields": sorted(changed),
                    "version": version.version_number if version else None,
                },
            )

    return updated
