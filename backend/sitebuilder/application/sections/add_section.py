from typing import Any, Dict, Optional
from sitebuilder.extensions import db
from sitebuilder.models.section import Section
from sitebuilder.application.lookups import get_owned_site
from sitebuilder.domain.invariants.section import assert_section, assert_section_orders
from sitebuilder.domain.section_types import default_content, parse_kind, validate_or_raise
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional


def add_section(
    *,
    owner_id: str,
    site_id: str,
    section_type: str,
    content: Optional[Dict[str, Any]] = None,
) -> Section:
    """
    Append a visible section at the end of the site.

    Content defaults to the kind's registered default and is validated
    before it is written.
    """
    site = get_owned_site(owner_id=owner_id, site_id=site_id)
    kind = parse_kind(section_type)

    payload = validate_or_raise(kind, default_content(kind) if content is None else content)

    # Determine the current max order for this site
    max_order = db.session.query(db.func.max(Section.order))\
        .filter_by(site_id=site.id, owner_id=owner_id)\
        .scalar() or 0

    section = Section()
    section.site_id = site.id
    section.owner_id = owner_id
    section.type = kind.value
    section.order = max_order + 1
    section.is_visible = True
    section.content = payload

    with transactional():
        db.session.add(section)
        db.session.flush()

        assert_section(section)
        assert_section_orders(
            Section.query.filter_by(site_id=site.id, owner_id=owner_id).all()
        )

        log_action(
            owner_id=owner_id,
            action="section.create",
            entity_type="section",
            entity_id=section.id,
            payload={
                "site_id": site.id,
                "type": section.type,
                "order": section.order,
            },
        )

    return section
