import pytest

from pageflow.application import pages as page_service
from pageflow.domain.exceptions import AuthorizationError, NotFound
from pageflow.domain.lifecycle.page import PageState
from pageflow.storage.memory import InMemoryStorage


def _edit(store, page, actor, html):
    return page_service.update_page(store, page_id=page.id, actor=actor, data={"html": html})


def test_rollback_restores_content_and_returns_to_draft(store, make_page, maker, checker):
    page = make_page(name="About", html="<p>one</p>", css="a{}", js="x();")
    _edit(store, page, maker, "<p>two</p>")
    page_service.submit_for_approval(store, page_id=page.id, actor=maker)
    page_service.approve_page(store, page_id=page.id, actor=checker)
    live = page_service.publish_page(store, page_id=page.id, actor=maker)
    version = page_service.list_versions(store, page_id=page.id)[0]

    restored = page_service.rollback_page(store, page_id=page.id, version_id=version.id, actor=maker)

    assert restored.content() == version.content()
    assert restored.state is PageState.DRAFT
    assert restored.rejection_reason is None
    # workflow stamps describe history, they are not content
    assert restored.publish_at == live.publish_at
    assert store.get_page(page.id) == restored

    assert store.list_audit_entries(entity_id=page.id)[0].action == "page.rollback"


def test_rollback_to_a_version_of_another_page_is_refused(store, make_page, maker):
    first = make_page(name="First", html="<p>a</p>")
    second = make_page(name="Second", html="<p>b</p>")
    _edit(store, first, maker, "<p>a2</p>")
    foreign = page_service.list_versions(store, page_id=first.id)[0]

    with pytest.raises(NotFound):
        page_service.rollback_page(store, page_id=second.id, version_id=foreign.id, actor=maker)

    assert store.get_page(second.id) == second
    assert page_service.list_versions(store, page_id=second.id) == []


def test_rollback_to_unknown_version(store, make_page, maker):
    page = make_page()

    with pytest.raises(NotFound):
        page_service.rollback_page(store, page_id=page.id, version_id="missing", actor=maker)


def test_rollback_requires_capability(store, make_page, maker):
    page = make_page()
    _edit(store, page, maker, "<p>v2</p>")
    version = page_service.list_versions(store, page_id=page.id)[0]

    with pytest.raises(AuthorizationError):
        page_service.rollback_page(store, page_id=page.id, version_id=version.id, actor=None)


class FailingSaveStorage(InMemoryStorage):
    fail = False

    def save_page(self, page):
        if self.fail:
            raise RuntimeError("disk full")
        super().save_page(page)


def test_failed_rollback_leaves_page_and_versions_untouched(maker):
    store = FailingSaveStorage()
    page = page_service.create_page(store, actor=maker, data={"name": "P", "html": "<p>1</p>"})
    page = _edit(store, page, maker, "<p>2</p>")
    version = page_service.list_versions(store, page_id=page.id)[0]
    audit_before = store.list_audit_entries()

    store.fail = True
    with pytest.raises(RuntimeError):
        page_service.rollback_page(store, page_id=page.id, version_id=version.id, actor=maker)

    assert store.get_page(page.id) == page
    assert [v.version_number for v in page_service.list_versions(store, page_id=page.id)] == [1]
    assert store.list_audit_entries() == audit_before


def test_versions_survive_page_deletion(store, make_page, maker):
    page = make_page()
    _edit(store, page, maker, "<p>v2</p>")

    assert page_service.delete_page(store, page_id=page.id, actor=maker) is True

    versions = page_service.list_versions(store, page_id=page.id)
    assert len(versions) == 1
    with pytest.raises(NotFound):
        page_service.rollback_page(store, page_id=page.id, version_id=versions[0].id, actor=maker)
