"""
Editor commands.

Each owner action in the editor becomes one of these values and is handed to
``EditorSession.dispatch``. Reorder, add, delete, visibility and publish are
written through immediately; content and site-field edits are staged until
``Commit``.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional, Tuple


@dataclass(frozen=True)
class MoveSection:
    section_id: str
    direction: Literal["up", "down"]


@dataclass(frozen=True)
class ReorderSections:
    ordered_ids: Tuple[str, ...]


@dataclass(frozen=True)
class AddSection:
    section_type: str
    content: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class DeleteSection:
    section_id: str


@dataclass(frozen=True)
class ToggleVisibility:
    section_id: str


@dataclass(frozen=True)
class TogglePublish:
    pass


@dataclass(frozen=True)
class EditSectionContent:
    section_id: str
    updates: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class EditSiteFields:
    updates: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Commit:
    pass

