from typing import Optional
from sqlalchemy.exc import IntegrityError
from sitebuilder.extensions import db
from sitebuilder.models.site import Site
from sitebuilder.models.section import Section
from sitebuilder.domain.errors import ConflictError, ContentValidationError, FieldError
from sitebuilder.domain.invariants.section import assert_section_orders
from sitebuilder.domain.site_fields import RESERVED_SLUGS, clean_site_fields, fallback_slug, slugify
from sitebuilder.domain.templates import UnknownTemplateError, get_template, instantiate
from sitebuilder.domain.themes import get_theme
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional


def create_site(
    *,
    owner_id: str,
    template_id: str,
    name: str,
    slug: Optional[str] = None,
    theme_id: Optional[str] = None,
    primary_color: Optional[str] = None,
    secondary_color: Optional[str] = None,
) -> Site:
    """
    Create an unpublished site seeded from a template.

    Edge cases handled:
    - Unknown template
    - Missing name
    - Slug defaulting (name, then a timestamped fallback)
    - Duplicate slug
    """
    try:
        template = get_template(template_id)
    except UnknownTemplateError:
        raise ContentValidationError(
            [FieldError("template_id", f"Unknown template: {template_id!r}")]
        ) from None

    if not name or not name.strip():
        raise ContentValidationError([FieldError("name", "is required")])

    final_slug = slug
    if not final_slug:
        final_slug = slugify(name)[:100].strip("-")
        if not final_slug or final_slug in RESERVED_SLUGS:
            final_slug = fallback_slug("site")

    fields = clean_site_fields({
        "name": name.strip(),
        "slug": final_slug,
        "theme_id": theme_id or template.theme_id,
        "primary_color": primary_color or template.primary_color,
        "secondary_color": secondary_color or template.secondary_color,
    })

    if Site.query.filter_by(slug=fields["slug"]).first():
        raise ConflictError("This URL is already taken. Please choose another one.")

    site = Site()
    site.owner_id = owner_id
    site.font_family = get_theme(fields["theme_id"]).styles.font_family
    for field, value in fields.items():
        setattr(site, field, value)

    try:
        with transactional():
            db.session.add(site)
            db.session.flush()  # ensures site.id exists

            for seed in instantiate(template):
                section = Section()
                section.owner_id = owner_id
                section.type = seed.type.value
                section.order = seed.order
                section.is_visible = seed.is_visible
                section.content = seed.content
                site.sections.append(section)

            db.session.flush()
            assert_section_orders(site.sections)

            log_action(
                owner_id=owner_id,
                action="site.create",
                entity_type="site",
                entity_id=site.id,
                payload={
                    "slug": site.slug,
                    "template_id": template.id,
                    "sections": len(template.sections),
                },
            )

        return site

    except IntegrityError as exc:
        # Unique slug raced with another signup
        raise ConflictError("This URL is already taken. Please choose another one.") from exc
