from pageflow.domain.roles import Capability, assert_capability
from pageflow.utils.audit import log_action


def delete_page(
    store,
    *,
    page_id: str,
    actor,
) -> bool:
    """
    Hard-delete a page and every navigation link that touches it.

    Notes:
    - Returns False when the page does not exist
    - Links go first so no reader ever sees a link to a missing page
    - Page versions are retained for audit
    """
    assert_capability(actor, Capability.DELETE_PAGE)

    with store.locked(page_id):
        if store.get_page(page_id) is None:
            return False

        with store.atomic():
            removed_links = store.remove_links_for_page(page_id)
            store.remove_page(page_id)

            log_action(
                store,
                action="page.delete",
                entity_type="page",
                entity_id=page_id,
                actor_id=actor.actor_id,
                payload={
                    "removed_links": removed_links,
                },
            )

    return True
