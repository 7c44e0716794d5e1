from typing import Any, Dict
from sqlalchemy.exc import IntegrityError
from sitebuilder.extensions import db
from sitebuilder.models.base import utcnow
from sitebuilder.models.site import Site
from sitebuilder.application.lookups import get_owned_site
from sitebuilder.domain.errors import ConflictError, ContentValidationError, FieldError
from sitebuilder.domain.site_fields import clean_site_fields
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional


def update_site(
    *,
    owner_id: str,
    site_id: str,
    data: Dict[str, Any],
    site: Site | None = None,
) -> Site:
    """
    Update editable site fields as a single write.

    Design rules:
    - Only whitelisted fields are mutable (publish state has its own operation)
    - No silent no-op updates
    - Slug and custom domain stay globally unique
    """
    site = site or get_owned_site(owner_id=owner_id, site_id=site_id)

    if not data:
        raise ContentValidationError([FieldError("site", "No fields provided for update")])

    fields = clean_site_fields(data)

    if "slug" in fields and fields["slug"] != site.slug:
        if Site.query.filter(Site.slug == fields["slug"], Site.id != site.id).first():
            raise ConflictError("This URL is already taken. Please choose another one.")

    if fields.get("custom_domain") and fields["custom_domain"] != site.custom_domain:
        taken = Site.query.filter(
            Site.custom_domain == fields["custom_domain"], Site.id != site.id
        ).first()
        if taken:
            raise ConflictError("This domain is already connected to another site.")

    changed_fields: list[str] = []

    try:
        with transactional():
            for field, value in fields.items():
                if getattr(site, field) != value:
                    setattr(site, field, value)
                    changed_fields.append(field)

            site.updated_at = utcnow()

            if changed_fields:
                log_action(
                    owner_id=owner_id,
                    action="site.update",
                    entity_type="site",
                    entity_id=site.id,
                    payload={"fields": sorted(changed_fields)},
                )
    except IntegrityError as exc:
        db.session.rollback()
        raise ConflictError("Slug or domain is already in use.") from exc

    return site
