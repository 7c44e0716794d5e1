import copy
import itertools

import pytest

from sitebuilder.application.lookups import list_sections
from sitebuilder.domain.errors import (
    ContentValidationError,
    ImmediateWriteFailed,
    UnsavedChangesError,
)
from sitebuilder.domain.section_types import default_content
from sitebuilder.domain.templates import get_template, instantiate
from sitebuilder.editor.commands import (
    AddSection,
    Commit,
    DeleteSection,
    EditSectionContent,
    EditSiteFields,
    MoveSection,
    ReorderSections,
    TogglePublish,
    ToggleVisibility,
)
from sitebuilder.editor.session import EditorSession
from sitebuilder.editor.store import SqlCompositionStore


class StoreDown(RuntimeError):
    pass


class MemoryStore:
    """In-memory CompositionStore that records writes and can be told to fail."""

    def __init__(self, template_id="modern-simple"):
        self._ids = (f"s{n}" for n in itertools.count(1))
        self.site = {
            "id": "site-1",
            "name": "Sunrise Academy",
            "slug": "sunrise",
            "theme_id": "default",
            "primary_color": "#3b82f6",
            "secondary_color": "#f97316",
            "is_published": False,
        }
        self.sections = [
            {
                "id": next(self._ids),
                "type": seed.type.value,
                "order": seed.order,
                "is_visible": seed.is_visible,
                "content": seed.content,
            }
            for seed in instantiate(get_template(template_id))
        ]
        self.writes = []
        self.failing = set()

    def _check(self, operation, key=None):
        if operation in self.failing or (operation, key) in self.failing:
            raise StoreDown(f"{operation} unavailable")
        self.writes.append((operation, key))

    def _find(self, section_id):
        return next(s for s in self.sections if s["id"] == section_id)

    def load_site(self, site_id):
        return copy.deepcopy(self.site)

    def load_sections(self, site_id):
        return copy.deepcopy(sorted(self.sections, key=lambda s: s["order"]))

    def reorder_sections(self, site_id, ordered_ids):
        self._check("reorder")
        for index, section_id in enumerate(ordered_ids, start=1):
            self._find(section_id)["order"] = index

    def add_section(self, site_id, section_type, content):
        self._check("add")
        section = {
            "id": next(self._ids),
            "type": section_type,
            "order": max((s["order"] for s in self.sections), default=0) + 1,
            "is_visible": True,
            "content": copy.deepcopy(content),
        }
        self.sections.append(section)
        return copy.deepcopy(section)

    def delete_section(self, section_id):
        self._check("delete", section_id)
        self.sections = [s for s in self.sections if s["id"] != section_id]
        for index, section in enumerate(sorted(self.sections, key=lambda s: s["order"]), start=1):
            section["order"] = index

    def set_section_visibility(self, section_id, visible):
        self._check("visibility", section_id)
        self._find(section_id)["is_visible"] = visible

    def set_site_published(self, site_id, published):
        self._check("publish")
        self.site["is_published"] = published

    def update_site(self, site_id, fields):
        self._check("site")
        self.site.update(fields)

    def update_section_content(self, section_id, content):
        self._check("section", section_id)
        self._find(section_id)["content"] = copy.deepcopy(content)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def session(store):
    return EditorSession(store, "site-1")


def _ids(session):
    return [s.id for s in session.sections]


def test_session_loads_sections_in_order(session) -> None:
    assert [s.type for s in session.sections] == ["hero", "features", "pricing", "contact"]
    assert session.dirty is False


def test_content_edits_are_staged_not_written(session, store) -> None:
    session.dispatch(EditSectionContent("s1", {"title": "Now enrolling"}))

    assert session.dirty is True
    assert session.section("s1").content["title"] == "Now enrolling"
    assert session.pending_sections["s1"]["subtitle"] == default_content("hero")["subtitle"]
    assert store.writes == []
    assert store.sections[0]["content"]["title"] == default_content("hero")["title"]


def test_repeated_edits_merge(session) -> None:
    session.edit_section("s1", {"title": "One"})
    session.edit_section("s1", {"subtitle": "Two"})

    assert session.pending_sections["s1"]["title"] == "One"
    assert session.pending_sections["s1"]["subtitle"] == "Two"


def test_immediate_commands_write_through_without_dirtying(session, store) -> None:
    session.dispatch(MoveSection("s2", "up"))
    session.dispatch(ToggleVisibility("s3"))
    session.dispatch(TogglePublish())
    added = session.dispatch(AddSection("gallery"))

    assert _ids(session) == ["s2", "s1", "s3", "s4", added.id]
    assert [s.order for s in session.sections] == [1, 2, 3, 4, 5]
    assert session.section("s3").is_visible is False
    assert session.site["is_published"] is True
    assert [op for op, _ in store.writes] == ["reorder", "visibility", "publish", "add"]
    assert session.dirty is False


def test_move_at_the_edge_is_a_no_op(session, store) -> None:
    session.move_section("s1", "up")
    session.move_section("s4", "down")

    assert _ids(session) == ["s1", "s2", "s3", "s4"]
    assert store.writes == []


def test_reorder_rejects_partial_lists(session, store) -> None:
    with pytest.raises(ContentValidationError):
        session.dispatch(ReorderSections(("s1", "s2")))
    assert store.writes == []


def test_failed_immediate_write_is_rolled_back(session, store) -> None:
    store.failing.add("reorder")

    with pytest.raises(ImmediateWriteFailed):
        session.reorder(["s4", "s3", "s2", "s1"])

    assert _ids(session) == ["s1", "s2", "s3", "s4"]
    assert [s.order for s in session.sections] == [1, 2, 3, 4]
    assert session.notifications


def test_failed_delete_restores_section_and_pending_edit(session, store) -> None:
    session.edit_section("s2", {"title": "Edited"})
    store.failing.add("delete")

    with pytest.raises(ImmediateWriteFailed):
        session.delete_section("s2")

    assert "s2" in _ids(session)
    assert session.pending_sections["s2"]["title"] == "Edited"


def test_failed_publish_toggle_is_rolled_back(session, store) -> None:
    store.failing.add("publish")

    with pytest.raises(ImmediateWriteFailed):
        session.dispatch(TogglePublish())
    assert session.site["is_published"] is False


def test_add_then_delete_leaves_no_trace(session, store) -> None:
    gallery = session.add_section("gallery")
    session.edit_section(gallery.id, {"title": "Photos"})
    session.delete_section(gallery.id)

    assert all(s.type != "gallery" for s in session.sections)
    assert gallery.id not in session.pending_sections
    assert all(s["type"] != "gallery" for s in store.sections)

    result = session.commit()
    assert result.sections_written == []


def test_delete_drops_pending_edit(session, store) -> None:
    session.edit_section("s3", {"title": "Cheaper"})
    session.dispatch(DeleteSection("s3"))

    assert "s3" not in session.pending_sections
    assert session.dirty is False
    assert [s.order for s in session.sections] == [1, 2, 3]


def test_commit_writes_sections_only_when_site_is_clean(session, store) -> None:
    session.edit_section("s1", {"title": "New"})

    result = session.dispatch(Commit())

    assert result.ok
    assert result.site_written is False
    assert result.sections_written == ["s1"]
    assert [op for op, _ in store.writes] == ["section"]
    assert session.dirty is False


def test_commit_writes_site_fields_as_one_update(session, store) -> None:
    session.dispatch(EditSiteFields({"tagline": "Since 2004"}))
    session.dispatch(EditSiteFields({"phone": "03-0000-1111"}))

    assert session.site["tagline"] == "Since 2004"
    result = session.commit()

    assert result.site_written is True
    assert store.writes == [("site", None)]
    assert store.site["phone"] == "03-0000-1111"


def test_invalid_pending_entry_blocks_the_whole_commit(session, store) -> None:
    session.edit_site({"tagline": "Fine"})
    session.edit_section("s1", {"title": "Fine"})
    session.edit_section("s2", {"title": ""})

    with pytest.raises(ContentValidationError) as exc:
        session.commit()

    assert [e.field for e in exc.value.errors] == ["sections.s2.title"]
    assert store.writes == []
    assert session.dirty is True


def test_partial_commit_failure_keeps_failed_entries(session, store) -> None:
    session.edit_section("s1", {"title": "Saved"})
    session.edit_section("s2", {"title": "Not saved"})
    store.failing.add(("section", "s2"))

    result = session.commit()

    assert not result.ok
    assert result.sections_written == ["s1"]
    assert set(result.failures) == {"s2"}
    assert set(session.pending_sections) == {"s2"}
    assert session.dirty is True

    store.failing.clear()
    retry = session.commit()
    assert retry.ok and retry.sections_written == ["s2"]
    assert session.dirty is False


def test_second_commit_with_nothing_pending_writes_nothing(session, store) -> None:
    session.edit_section("s1", {"title": "Once"})
    session.commit()
    writes = list(store.writes)

    result = session.commit()

    assert result.ok and not result.site_written and result.sections_written == []
    assert store.writes == writes


def test_reload_discards_staged_edits(session, store) -> None:
    session.edit_section("s1", {"title": "Unsaved"})
    session.reload()

    assert session.section("s1").content["title"] == default_content("hero")["title"]
    assert session.dirty is False


def test_close_guards_unsaved_changes(session) -> None:
    session.edit_site({"tagline": "Pending"})

    with pytest.raises(UnsavedChangesError):
        session.close()

    session.close(discard=True)
    assert session.dirty is False


def test_preview_shows_staged_edits(session) -> None:
    session.edit_section("s1", {"title": "Preview headline"})
    session.toggle_visibility("s3")

    html = session.preview()
    assert "Preview headline" in html
    assert 'id="pricing"' not in html


def test_dispatch_rejects_unknown_commands(session) -> None:
    with pytest.raises(TypeError):
        session.dispatch(object())


def test_sql_store_backs_a_session(owner, site) -> None:
    session = EditorSession(SqlCompositionStore(owner.id), site.id)
    hero_id = session.sections[0].id

    session.edit_section(hero_id, {"title": "From the editor"})
    session.move_section(hero_id, "down")
    gallery = session.add_section("gallery")
    result = session.commit()

    assert result.ok
    stored = list_sections(owner_id=owner.id, site_id=site.id)
    assert [s.id for s in stored][:2] == [session.sections[0].id, hero_id]
    assert stored[1].content["title"] == "From the editor"
    assert stored[-1].id == gallery.id
