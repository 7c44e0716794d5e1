from sitebuilder.models.base import utcnow
from sitebuilder.models.site import Site
from sitebuilder.application.lookups import get_owned_site
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional


def set_site_published(
    *,
    owner_id: str,
    site_id: str,
    published: bool,
) -> Site:
    """
    Publish or unpublish a site.

    Operational toggle written immediately; it never touches staged edits.
    """
    site = get_owned_site(owner_id=owner_id, site_id=site_id)

    with transactional():
        site.is_published = bool(published)
        site.updated_at = utcnow()

        log_action(
            owner_id=owner_id,
            action="site.publish" if published else "site.unpublish",
            entity_type="site",
            entity_id=site.id,
        )

    return site
