from typing import Any, Dict
from .section import normalize_section

SITE_FIELDS = (
    "name", "slug", "custom_domain", "theme_id", "primary_color", "secondary_color",
    "font_family", "logo_url", "favicon_url", "tagline", "phone", "email", "address",
    "business_hours", "google_map_embed", "line_url", "instagram_url", "twitter_url",
)


def _iso(value):
    return value.isoformat() if value else None


def normalize_site(site, include_sections=False) -> Dict[str, Any]:
    data = {"id": site.id}
    data.update({field: getattr(site, field) for field in SITE_FIELDS})
    data["is_published"] = bool(site.is_published)
    data["created_at"] = _iso(site.created_at)
    data["updated_at"] = _iso(site.updated_at)

    if include_sections:
        sections = sorted(site.sections, key=lambda s: s.order)
        data["sections"] = [normalize_section(s) for s in sections]

    return data
