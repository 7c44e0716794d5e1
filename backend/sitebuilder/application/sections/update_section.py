from typing import Any, Dict
from sitebuilder.models.base import utcnow
from sitebuilder.models.section import Section
from sitebuilder.application.lookups import get_owned_section
from sitebuilder.domain.invariants.section import assert_section
from sitebuilder.domain.section_types import validate_or_raise
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional


def update_section_content(
    *,
    owner_id: str,
    section_id: str,
    content: Dict[str, Any],
    section: Section | None = None,
) -> Section:
    """
    Replace a section's content after validating it against its kind.
    """
    section = section or get_owned_section(owner_id=owner_id, section_id=section_id)

    payload = validate_or_raise(section.type, content)

    with transactional():
        section.content = payload
        section.updated_at = utcnow()
        assert_section(section)

        log_action(
            owner_id=owner_id,
            action="section.update",
            entity_type="section",
            entity_id=section.id,
            payload={"site_id": section.site_id},
        )

    return section
