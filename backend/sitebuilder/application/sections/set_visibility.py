from sitebuilder.models.section import Section
from sitebuilder.application.lookups import get_owned_section
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional


def set_section_visibility(
    *,
    owner_id: str,
    section_id: str,
    visible: bool,
) -> Section:
    """Show or hide a section without touching its order or content."""
    section = get_owned_section(owner_id=owner_id, section_id=section_id)

    with transactional():
        section.is_visible = bool(visible)

        log_action(
            owner_id=owner_id,
            action="section.show" if visible else "section.hide",
            entity_type="section",
            entity_id=section.id,
            payload={"site_id": section.site_id},
        )

    return section
