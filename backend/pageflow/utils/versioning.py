from pageflow.domain.invariants.version import assert_version_sequence
from pageflow.domain.records import PageVersionRecord
from .clock import new_id, utcnow


def next_version(numbers):
    return (max(numbers) + 1) if numbers else 1


def snapshot_page(store, page, *, change_description=None, created_by=None):
    """
    Append the page's current content to its version log and return the
    new version. Callers hold the page lock and pass the pre-change record.
    """
    numbers = store.version_numbers(page.id)
    assert_version_sequence(page.id, numbers)
    number = next_version(numbers)

    version = PageVersionRecord(
        id=new_id(),
        page_id=page.id,
        version_number=number,
        name=page.name,
        html=page.html,
        css=page.css,
        js=page.js,
        state=page.state,
        created_at=utcnow(),
        change_description=change_description,
        created_by=created_by,
    )
    store.add_version(version)
    return version
