"""
Version history tests: every content change is preceded by a snapshot of
the content it replaces, and version numbers per page run 1..k.
"""
import pytest

from pageflow.application import pages as page_service
from pageflow.domain.exceptions import InvariantViolation, NotFound, ValidationError
from pageflow.domain.lifecycle.page import PageState
from pageflow.utils.versioning import next_version


def test_next_version():
    assert next_version([]) == 1
    assert next_version([1, 2, 3]) == 4


def test_content_update_snapshots_previous_content(store, make_page, maker):
    page = make_page(html="<p>v1</p>")

    updated = page_service.update_page(
        store, page_id=page.id, actor=maker, data={"html": "<p>v2</p>"}
    )

    versions = page_service.list_versions(store, page_id=page.id)
    assert len(versions) == 1
    assert versions[0].version_number == 1
    assert versions[0].html == "<p>v1</p>"
    assert versions[0].css == page.css
    assert versions[0].state is PageState.DRAFT
    assert versions[0].change_description == "Page updated"
    assert versions[0].created_by == "maker-1"
    assert updated.html == "<p>v2</p>"


def test_versions_are_listed_newest_first_and_numbered_densely(store, make_page, maker):
    page = make_page()
    for n in range(2, 6):
        page_service.update_page(store, page_id=page.id, actor=maker, data={"html": f"<p>v{n}</p>"})

    versions = page_service.list_versions(store, page_id=page.id)
    assert [v.version_number for v in versions] == [4, 3, 2, 1]
    assert versions[0].html == "<p>v4</p>"


def test_state_changes_do_not_snapshot(store, make_page, maker, checker):
    page = make_page()
    page_service.submit_for_approval(store, page_id=page.id, actor=maker)
    page_service.approve_page(store, page_id=page.id, actor=checker)
    page_service.publish_page(store, page_id=page.id, actor=maker)

    assert page_service.list_versions(store, page_id=page.id) == []


def test_metadata_only_update_does_not_snapshot(store, make_page, maker):
    page = make_page()

    updated = page_service.update_page(
        store, page_id=page.id, actor=maker, data={"thumbnail": "thumbs/landing.png"}
    )

    assert updated.thumbnail == "thumbs/landing.png"
    assert page_service.list_versions(store, page_id=page.id) == []


def test_update_keeps_lifecycle_state(store, make_page, maker, checker):
    page = make_page()
    page_service.submit_for_approval(store, page_id=page.id, actor=maker)
    page_service.approve_page(store, page_id=page.id, actor=checker)

    updated = page_service.update_page(store, page_id=page.id, actor=maker, data={"name": "Home"})

    assert updated.state is PageState.APPROVED
    assert page_service.list_versions(store, page_id=page.id)[0].state is PageState.APPROVED


def test_saving_unchanged_content_returns_page_without_new_version(store, make_page, maker):
    page = make_page(html="<p>same</p>")

    same = page_service.update_page(
        store, page_id=page.id, actor=maker, data={"name": page.name, "html": "<p>same</p>"}
    )
    assert same == page
    assert page_service.update_page(store, page_id=page.id, actor=maker, data={}) == page

    assert page_service.list_versions(store, page_id=page.id) == []
    assert store.list_audit_entries(action="page.update") == []


def test_update_strips_name(store, make_page, maker):
    page = make_page(name="Landing")

    updated = page_service.update_page(store, page_id=page.id, actor=maker, data={"name": "  Home  "})
    assert updated.name == "Home"

    # padding around the current name is not a change
    again = page_service.update_page(store, page_id=page.id, actor=maker, data={"name": " Home "})
    assert again == updated
    assert len(page_service.list_versions(store, page_id=page.id)) == 1


def test_state_cannot_be_written_through_update(store, make_page, maker):
    page = make_page()

    with pytest.raises(ValidationError):
        page_service.update_page(store, page_id=page.id, actor=maker, data={"state": "Live"})

    assert store.get_page(page.id).state is PageState.DRAFT


def test_update_of_missing_page(store, maker):
    with pytest.raises(NotFound):
        page_service.update_page(store, page_id="nope", actor=maker, data={"html": "<p/>"})


def test_get_version(store, make_page, maker):
    page = make_page()
    page_service.update_page(store, page_id=page.id, actor=maker, data={"js": "init();"})
    version = page_service.list_versions(store, page_id=page.id)[0]

    assert page_service.get_version(store, version_id=version.id) == version

    with pytest.raises(NotFound):
        page_service.get_version(store, version_id="missing")


def test_list_versions_of_unknown_page(store):
    with pytest.raises(NotFound):
        page_service.list_versions(store, page_id="never-existed")


def test_gap_in_version_log_aborts_the_update(store, make_page, maker, monkeypatch):
    page = make_page(html="<p>v1</p>")
    monkeypatch.setattr(store, "version_numbers", lambda page_id: [1, 3])

    with pytest.raises(InvariantViolation):
        page_service.update_page(store, page_id=page.id, actor=maker, data={"html": "<p>v2</p>"})

    assert store.get_page(page.id).html == "<p>v1</p>"
    assert store.list_audit_entries(action="page.update") == []


def test_edit_review_publish_rework_rollback(store, make_page, maker, checker):
    page = make_page(name="Promo", html="<h1>Sale</h1>")

    page_service.submit_for_approval(store, page_id=page.id, actor=maker)
    page_service.approve_page(store, page_id=page.id, actor=checker)
    page_service.publish_page(store, page_id=page.id, actor=maker)

    page_service.update_page(store, page_id=page.id, actor=maker, data={"html": "<h1>Big sale</h1>"})
    page_service.update_page(store, page_id=page.id, actor=maker, data={"html": "<h1>Huge sale</h1>"})

    versions = page_service.list_versions(store, page_id=page.id)
    assert [v.html for v in versions] == ["<h1>Big sale</h1>", "<h1>Sale</h1>"]
    assert all(v.state is PageState.LIVE for v in versions)

    original = versions[-1]
    restored = page_service.rollback_page(
        store, page_id=page.id, version_id=original.id, actor=maker
    )

    assert restored.html == "<h1>Sale</h1>"
    assert restored.state is PageState.DRAFT

    versions = page_service.list_versions(store, page_id=page.id)
    assert [v.version_number for v in versions] == [3, 2, 1]
    assert versions[0].html == "<h1>Huge sale</h1>"
    assert versions[0].change_description == "Rollback to version 1"
