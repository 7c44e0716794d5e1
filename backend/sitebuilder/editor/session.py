"""
Editing session for one site.

The session mirrors the stored site and its sections, and keeps two staging
maps for edits that have not been saved yet:

- ``pending_site``: site field -> proposed value
- ``pending_sections``: section id -> proposed content

``dirty`` is true while either map is non-empty. Structural changes
(reorder, add, delete, visibility, publish) bypass staging: they are applied
locally, written to the store straight away, and undone locally if the store
write fails. They never change ``dirty``.

Clean --edit--> Dirty --commit ok--> Clean
                Dirty --commit with failures--> Dirty (failed entries kept)
"""
import copy
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from sitebuilder.domain.errors import (
    ContentValidationError,
    FieldError,
    ImmediateWriteFailed,
    NotFoundError,
    UnsavedChangesError,
)
from sitebuilder.domain.section_types import default_content, parse_kind, validate
from sitebuilder.domain.site_fields import validate_site_fields
from sitebuilder.rendering.page import render_site

from .commands import (
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
from .store import CompositionStore

logger = logging.getLogger(__name__)


@dataclass
class SectionState:
    id: str
    type: str
    order: int
    is_visible: bool
    content: Dict[str, Any]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SectionState":
        return cls(
            id=data["id"],
            type=data["type"],
            order=data["order"],
            is_visible=bool(data.get("is_visible", True)),
            content=copy.deepcopy(data.get("content") or {}),
        )


@dataclass
class CommitResult:
    site_written: bool = False
    sections_written: List[str] = field(default_factory=list)
    failures: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures


class EditorSession:
    def __init__(self, store: CompositionStore, site_id: str):
        self.store = store
        self.site_id = site_id
        self.notifications: List[str] = []
        self._lock = threading.Lock()
        self.site: Dict[str, Any] = {}
        self.sections: List[SectionState] = []
        self.pending_site: Dict[str, Any] = {}
        self.pending_sections: Dict[str, Dict[str, Any]] = {}
        self.reload()

    @property
    def dirty(self) -> bool:
        return bool(self.pending_site or self.pending_sections)

    def section(self, section_id: str) -> SectionState:
        for section in self.sections:
            if section.id == section_id:
                return section
        raise NotFoundError("Section not found")

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, command):
        handlers = {
            MoveSection: lambda c: self.move_section(c.section_id, c.direction),
            ReorderSections: lambda c: self.reorder(list(c.ordered_ids)),
            AddSection: lambda c: self.add_section(c.section_type, c.content),
            DeleteSection: lambda c: self.delete_section(c.section_id),
            ToggleVisibility: lambda c: self.toggle_visibility(c.section_id),
            TogglePublish: lambda c: self.toggle_publish(),
            EditSectionContent: lambda c: self.edit_section(c.section_id, c.updates),
            EditSiteFields: lambda c: self.edit_site(c.updates),
            Commit: lambda c: self.commit(),
        }
        handler = handlers.get(type(command))
        if handler is None:
            raise TypeError(f"Unsupported editor command: {command!r}")
        return handler(command)

    # ------------------------------------------------------------------
    # Immediate writes
    # ------------------------------------------------------------------

    def _snapshot(self):
        return (
            copy.deepcopy(self.sections),
            copy.deepcopy(self.site),
            copy.deepcopy(self.pending_sections),
        )

    def _restore(self, snapshot):
        self.sections, self.site, self.pending_sections = snapshot

    def _write_through(self, description: str, apply, persist):
        """
        Apply a change locally, then persist it.

        Writes are serialized per session. On failure the local change is
        undone, a notification is recorded and ImmediateWriteFailed raised.
        """
        with self._lock:
            snapshot = self._snapshot()
            apply()
            try:
                return persist()
            except Exception as exc:
                self._restore(snapshot)
                message = f"Could not {description}: {exc}"
                self.notifications.append(message)
                logger.warning("Site %s: %s (rolled back)", self.site_id, message)
                raise ImmediateWriteFailed(message) from exc

    def _renumber(self):
        for index, section in enumerate(self.sections, start=1):
            section.order = index

    def reorder(self, ordered_ids: List[str]) -> None:
        current = [s.id for s in self.sections]
        if sorted(ordered_ids) != sorted(current):
            raise ContentValidationError(
                [FieldError("order", "Must list every section of the site exactly once")]
            )
        if ordered_ids == current:
            return

        def apply():
            by_id = {s.id: s for s in self.sections}
            self.sections = [by_id[section_id] for section_id in ordered_ids]
            self._renumber()

        self._write_through(
            "reorder sections",
            apply,
            lambda: self.store.reorder_sections(self.site_id, list(ordered_ids)),
        )

    def move_section(self, section_id: str, direction: str) -> None:
        if direction not in ("up", "down"):
            raise ContentValidationError([FieldError("direction", "must be 'up' or 'down'")])

        ids = [s.id for s in self.sections]
        index = ids.index(self.section(section_id).id)
        target = index - 1 if direction == "up" else index + 1
        if target < 0 or target >= len(ids):
            return

        ids[index], ids[target] = ids[target], ids[index]
        self.reorder(ids)

    def add_section(self, section_type: str, content: Optional[Dict[str, Any]] = None) -> SectionState:
        kind = parse_kind(section_type)
        payload = default_content(kind) if content is None else content

        errors = validate(kind, payload)
        if errors:
            raise ContentValidationError(errors)

        def persist():
            created = SectionState.from_dict(self.store.add_section(self.site_id, kind.value, payload))
            self.sections.append(created)
            return created

        return self._write_through(f"add a {kind.value} section", lambda: None, persist)

    def delete_section(self, section_id: str) -> None:
        section = self.section(section_id)

        def apply():
            self.sections = [s for s in self.sections if s.id != section_id]
            self.pending_sections.pop(section_id, None)
            self._renumber()

        self._write_through(
            f"delete the {section.type} section",
            apply,
            lambda: self.store.delete_section(section_id),
        )

    def toggle_visibility(self, section_id: str) -> bool:
        section = self.section(section_id)
        visible = not section.is_visible

        def apply():
            self.section(section_id).is_visible = visible

        self._write_through(
            "hide the section" if not visible else "show the section",
            apply,
            lambda: self.store.set_section_visibility(section_id, visible),
        )
        return visible

    def toggle_publish(self) -> bool:
        published = not self.site.get("is_published", False)

        def apply():
            self.site["is_published"] = published

        self._write_through(
            "publish the site" if published else "unpublish the site",
            apply,
            lambda: self.store.set_site_published(self.site_id, published),
        )
        return published

    # ------------------------------------------------------------------
    # Staged edits
    # ------------------------------------------------------------------

    def edit_section(self, section_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        """Merge ``updates`` into the section's staged content and the live preview."""
        section = self.section(section_id)
        base = self.pending_sections.get(section_id, section.content)
        merged = {**copy.deepcopy(base), **copy.deepcopy(updates)}

        self.pending_sections[section_id] = merged
        section.content = copy.deepcopy(merged)
        return merged

    def edit_site(self, updates: Dict[str, Any]) -> Dict[str, Any]:
        self.pending_site.update(copy.deepcopy(updates))
        self.site.update(copy.deepcopy(updates))
        return dict(self.pending_site)

    # ------------------------------------------------------------------
    # Commit / lifecycle
    # ------------------------------------------------------------------

    def _validate_pending(self) -> List[FieldError]:
        errors: List[FieldError] = []

        if self.pending_site:
            for error in validate_site_fields(self.pending_site):
                errors.append(FieldError(f"site.{error.field}", error.message))

        for section_id, content in self.pending_sections.items():
            section = self.section(section_id)
            for error in validate(section.type, content):
                errors.append(FieldError(f"sections.{section_id}.{error.field}", error.message))

        return errors

    def commit(self) -> CommitResult:
        """
        Save staged edits.

        Nothing is written while any staged entry is invalid. Otherwise site
        fields go out as one update and each section as its own update;
        entries that fail stay staged and are listed in ``failures``.
        """
        with self._lock:
            errors = self._validate_pending()
            if errors:
                raise ContentValidationError(errors)

            result = CommitResult()

            if self.pending_site:
                fields = dict(self.pending_site)
                try:
                    self.store.update_site(self.site_id, fields)
                except Exception as exc:
                    result.failures["site"] = str(exc)
                else:
                    result.site_written = True
                    self.pending_site.clear()

            for section_id, content in list(self.pending_sections.items()):
                try:
                    self.store.update_section_content(section_id, content)
                except Exception as exc:
                    result.failures[section_id] = str(exc)
                else:
                    result.sections_written.append(section_id)
                    del self.pending_sections[section_id]

            if result.failures:
                message = f"{len(result.failures)} change(s) could not be saved"
                self.notifications.append(message)
                logger.warning("Site %s: commit failures %s", self.site_id, result.failures)

            return result

    def preview(self, recent_posts=()) -> str:
        """The public page as it would look with staged edits applied."""
        return render_site(self.site, self.sections, recent_posts=recent_posts)

    def reload(self) -> None:
        """Re-read from the store, dropping anything staged."""
        with self._lock:
            self.site = dict(self.store.load_site(self.site_id))
            self.sections = sorted(
                (SectionState.from_dict(s) for s in self.store.load_sections(self.site_id)),
                key=lambda s: s.order,
            )
            self.pending_site = {}
            self.pending_sections = {}

    def close(self, discard: bool = False) -> None:
        if self.dirty and not discard:
            raise UnsavedChangesError(
                f"{len(self.pending_site) + len(self.pending_sections)} unsaved change(s)"
            )
        self.pending_site = {}
        self.pending_sections = {}
