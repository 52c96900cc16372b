from .page import _iso


def normalize_link(link):
    return {
        "id": link.id,
        "from_page_id": link.from_page_id,
        "to_page_id": link.to_page_id,
        "from_element_id": link.from_element_id,
        "trigger_text": link.trigger_text,
        "link_type": link.link_type,
        "created_at": _iso(link.created_at),
    }
