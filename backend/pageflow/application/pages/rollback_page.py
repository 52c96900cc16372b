# pageflow/application/pages/rollback_page.py
import logging
from dataclasses import replace

from pageflow.domain.exceptions import NotFound
from pageflow.domain.invariants.page import assert_page
from pageflow.domain.lifecycle.page import PageState
from pageflow.domain.records import PageRecord
from pageflow.domain.roles import Capability, assert_capability
from pageflow.utils.audit import log_action
from pageflow.utils.versioning import snapshot_page
from .common import require_page

logger = logging.getLogger(__name__)


def rollback_page(
    store,
    *,
    page_id: str,
    version_id: str,
    actor,
) -> PageRecord:
    """
    Roll back a page's content to a previous version.

    Responsibilities:
    - Refuse versions that belong to another page
    - Snapshot the content being abandoned as a new version
    - Restore name/html/css/js from the target version
    - Send the page back to Draft so it is reviewed again
    - Commit snapshot and restore as one unit
    - Audit logging
    """
    assert_capability(actor, Capability.ROLLBACK)

    # 1️⃣ Resolve the target version (immutable, safe to read unlocked)
    target = store.get_version(version_id)
    if target is None or target.page_id != page_id:
        raise NotFound(
            "PageVersion",
            version_id,
            message=f"Version {version_id} not found for page {page_id}",
        )

    with store.locked(page_id):
        # 2️⃣ Resolve the live page under the page lock
        page = require_page(store, page_id)

        # 3️⃣ Restored content always re-enters the approval workflow
        restored = replace(
            page,
            **target.content(),
            state=PageState.DRAFT,
            rejection_reason=None,
        )
        assert_page(restored)

        with store.atomic():
            # 4️⃣ Keep the state being abandoned
            snapshot = snapshot_page(
                store,
                page,
                change_description=f"Rollback to version {target.version_number}",
                created_by=actor.actor_id,
            )

            # 5️⃣ Apply the restore
            store.save_page(restored)

            # 6️⃣ Audit logging
            log_action(
                store,
                action="page.rollback",
                entity_type="page",
                entity_id=page.id,
                actor_id=actor.actor_id,
                payload={
                    "restored_version": target.version_number,
                    "snapshot_version": snapshot.version_number,
                    "from_state": page.state.value,
                },
            )

    logger.info(
        "Page %s rolled back to version %s (previous content kept as version %s)",
        page_id, target.version_number, snapshot.version_number,
    )
    return restored
