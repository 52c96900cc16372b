def _iso(value):
    return value.isoformat() if value else None


def normalize_page(page, include_content=True):
    data = {
        "id": page.id,
        "name": page.name,
        "state": page.state.value,
        "page_type": page.page_type,
        "thumbnail": page.thumbnail,
        "created_at": _iso(page.created_at),
        "submitted_at": _iso(page.submitted_at),
        "approved_at": _iso(page.approved_at),
        "rejected_at": _iso(page.rejected_at),
        "publish_at": _iso(page.publish_at),
        "expire_at": _iso(page.expire_at),
        "approved_by": page.approved_by,
        "rejection_reason": page.rejection_reason,
    }

    if include_content:
        data.update(html=page.html, css=page.css, js=page.js)

    return data
