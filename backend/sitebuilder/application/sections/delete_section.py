from sitebuilder.extensions import db
from sitebuilder.models.section import Section
from sitebuilder.application.lookups import get_owned_section
from sitebuilder.domain.invariants.section import assert_section_orders
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.order import compact_order
from sitebuilder.utils.transaction import transactional


def delete_section(
    *,
    owner_id: str,
    section_id: str,
) -> str:
    """
    Delete a section; the remaining sections keep their relative order
    and are re-compacted to 1..N.
    """
    section = get_owned_section(owner_id=owner_id, section_id=section_id)
    site_id = section.site_id

    with transactional():
        db.session.delete(section)
        db.session.flush()

        remaining = compact_order(
            Section.query
            .filter_by(site_id=site_id, owner_id=owner_id)
            .order_by(Section.order.asc())
            .all()
        )
        assert_section_orders(remaining)

        log_action(
            owner_id=owner_id,
            action="section.delete",
            entity_type="section",
            entity_id=section_id,
            payload={"site_id": site_id, "type": section.type},
        )

    return site_id
