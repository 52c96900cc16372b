from typing import Any, Dict, List

from pageflow.domain.exceptions import NotFound, ValidationError
from pageflow.domain.records import NavigationLinkRecord
from pageflow.domain.roles import Capability, assert_capability
from pageflow.utils.audit import log_action
from pageflow.utils.clock import new_id, utcnow

ALLOWED_LINK_TYPES = {"button", "link", "image", "custom"}


def create_link(
    store,
    *,
    actor,
    data: Dict[str, Any],
) -> NavigationLinkRecord:
    """
    Link a clickable element on one page to another page.

    Both pages are locked while the link is written, so a concurrent
    delete of either end cannot leave the link dangling.
    """
    assert_capability(actor, Capability.MANAGE_LINKS)

    from_page_id = data.get("from_page_id")
    to_page_id = data.get("to_page_id")
    if not from_page_id or not to_page_id:
        raise ValidationError("Both from_page_id and to_page_id are required")

    link_type = data.get("link_type") or "button"
    if link_type not in ALLOWED_LINK_TYPES:
        raise ValidationError(f"Invalid link type: {link_type}", field="link_type")

    with store.locked(from_page_id, to_page_id):
        for page_id in (from_page_id, to_page_id):
            if store.get_page(page_id) is None:
                raise NotFound("Page", page_id)

        link = NavigationLinkRecord(
            id=new_id(),
            from_page_id=from_page_id,
            to_page_id=to_page_id,
            created_at=utcnow(),
            from_element_id=data.get("from_element_id"),
            trigger_text=data.get("trigger_text"),
            link_type=link_type,
        )

        with store.atomic():
            store.add_link(link)
            log_action(
                store,
                action="link.create",
                entity_type="link",
                entity_id=link.id,
                actor_id=actor.actor_id,
                payload={"from_page_id": from_page_id, "to_page_id": to_page_id},
            )

    return link


def delete_link(store, *, link_id: str, actor) -> bool:
    assert_capability(actor, Capability.MANAGE_LINKS)

    link = store.get_link(link_id)
    if link is None:
        return False

    with store.locked(link.from_page_id, link.to_page_id):
        with store.atomic():
            removed = store.remove_link(link_id)
            if removed:
                log_action(
                    store,
                    action="link.delete",
                    entity_type="link",
                    entity_id=link_id,
                    actor_id=actor.actor_id,
                )
    return removed


def get_links(store) -> List[NavigationLinkRecord]:
    return store.list_links()


def get_links_by_page(store, *, page_id: str) -> List[NavigationLinkRecord]:
    return store.links_for_page(page_id)
