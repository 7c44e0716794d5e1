"""Persistence seam for the editor."""
from typing import Any, Dict, List, Protocol

from sitebuilder.application.lookups import get_owned_site, list_sections
from sitebuilder.application.sections.add_section import add_section
from sitebuilder.application.sections.delete_section import delete_section
from sitebuilder.application.sections.reorder_sections import reorder_sections
from sitebuilder.application.sections.set_visibility import set_section_visibility
from sitebuilder.application.sections.update_section import update_section_content
from sitebuilder.application.sites.publish_site import set_site_published
from sitebuilder.application.sites.update_site import update_site
from sitebuilder.normalizers.section import normalize_section
from sitebuilder.normalizers.site import normalize_site


class CompositionStore(Protocol):
    def load_site(self, site_id: str) -> Dict[str, Any]: ...

    def load_sections(self, site_id: str) -> List[Dict[str, Any]]: ...

    def reorder_sections(self, site_id: str, ordered_ids: List[str]) -> None: ...

    def add_section(self, site_id: str, section_type: str, content: Dict[str, Any]) -> Dict[str, Any]: ...

    def delete_section(self, section_id: str) -> None: ...

    def set_section_visibility(self, section_id: str, visible: bool) -> None: ...

    def set_site_published(self, site_id: str, published: bool) -> None: ...

    def update_site(self, site_id: str, fields: Dict[str, Any]) -> None: ...

    def update_section_content(self, section_id: str, content: Dict[str, Any]) -> None: ...


class SqlCompositionStore:
    """CompositionStore over the database, scoped to one owner. Needs an app context."""

    def __init__(self, owner_id: str):
        self.owner_id = owner_id

    def load_site(self, site_id):
        return normalize_site(get_owned_site(owner_id=self.owner_id, site_id=site_id))

    def load_sections(self, site_id):
        return [
            normalize_section(section)
            for section in list_sections(owner_id=self.owner_id, site_id=site_id)
        ]

    def reorder_sections(self, site_id, ordered_ids):
        reorder_sections(owner_id=self.owner_id, site_id=site_id, ordered_ids=list(ordered_ids))

    def add_section(self, site_id, section_type, content):
        section = add_section(
            owner_id=self.owner_id,
            site_id=site_id,
            section_type=section_type,
            content=content,
        )
        return normalize_section(section)

    def delete_section(self, section_id):
        delete_section(owner_id=self.owner_id, section_id=section_id)

    def set_section_visibility(self, section_id, visible):
        set_section_visibility(owner_id=self.owner_id, section_id=section_id, visible=visible)

    def set_site_published(self, site_id, published):
        set_site_published(owner_id=self.owner_id, site_id=site_id, published=published)

    def update_site(self, site_id, fields):
        update_site(owner_id=self.owner_id, site_id=site_id, data=fields)

    def update_section_content(self, section_id, content):
        update_section_content(owner_id=self.owner_id, section_id=section_id, content=content)
