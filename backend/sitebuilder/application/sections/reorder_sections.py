from typing import List
from sitebuilder.models.section import Section
from sitebuilder.application.lookups import get_owned_site
from sitebuilder.domain.errors import ContentValidationError, FieldError
from sitebuilder.domain.invariants.section import assert_section_orders
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.order import compact_order
from sitebuilder.utils.transaction import transactional


def reorder_sections(
    *,
    owner_id: str,
    site_id: str,
    ordered_ids: List[str],
) -> List[Section]:
    """
    Persist a new section order.

    ``ordered_ids`` must list every section of the site exactly once.
    """
    site = get_owned_site(owner_id=owner_id, site_id=site_id)

    sections = Section.query.filter_by(site_id=site.id, owner_id=owner_id).all()
    section_map = {s.id: s for s in sections}

    if not isinstance(ordered_ids, list) or sorted(map(str, ordered_ids)) != sorted(section_map):
        raise ContentValidationError(
            [FieldError("order", "Must list every section of the site exactly once")]
        )

    with transactional():
        ordered = compact_order([section_map[section_id] for section_id in ordered_ids])
        assert_section_orders(ordered)

        log_action(
            owner_id=owner_id,
            action="section.reorder",
            entity_type="site",
            entity_id=site.id,
            payload={"count": len(ordered)},
        )

    return ordered
