from .page import _iso


def normalize_version(version, include_content=True):
    data = {
        "id": version.id,
        "page_id": version.page_id,
        "version_number": version.version_number,
        "name": version.name,
        "state": version.state.value,
        "change_description": version.change_description,
        "created_by": version.created_by,
        "created_at": _iso(version.created_at),
    }

    if include_content:
        data.update(html=version.html, css=version.css, js=version.js)

    return data
