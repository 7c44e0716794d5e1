"""
One view per section kind.

A view receives the section's content (already normalized when it passed
validation, raw otherwise) and the page's SectionContext and returns HTML.
Templates tolerate missing fields: partial content renders with the missing
parts left out.
"""
import re
from typing import Any, Callable, Dict, Optional

from markupsafe import Markup

from sitebuilder.domain.section_types import SectionType

from .context import SectionContext, get_env

FORM_FIELD_LABELS = {
    "name": "Name",
    "email": "E-mail",
    "phone": "Phone",
    "grade": "Grade",
    "message": "Message",
}
GALLERY_LAYOUTS = ("grid", "masonry", "slider")
DEFAULT_BLOG_COUNT = 3

_IFRAME_SRC_RE = re.compile(r"""<iframe[^>]*\ssrc=["'](https://[^"']+)["']""", re.IGNORECASE)


def map_embed_src(value) -> Optional[str]:
    """Accept an https URL or an iframe snippet; return the URL to embed."""
    if not isinstance(value, str) or not value.strip():
        return None
    value = value.strip()
    if value.startswith("https://"):
        return value
    match = _IFRAME_SRC_RE.search(value)
    return match.group(1) if match else None


def _render(kind: SectionType, content: Dict[str, Any], ctx: SectionContext, **extra) -> Markup:
    template = get_env().get_template(f"sections/{kind.value}.html")
    return Markup(template.render(content=content, ctx=ctx, **extra))


def hero_view(content, ctx):
    return _render(SectionType.HERO, content, ctx, layout=ctx.theme.styles.hero.layout)


def features_view(content, ctx):
    return _render(SectionType.FEATURES, content, ctx)


def pricing_view(content, ctx):
    return _render(SectionType.PRICING, content, ctx)


def teachers_view(content, ctx):
    return _render(SectionType.TEACHERS, content, ctx)


def results_view(content, ctx):
    return _render(SectionType.RESULTS, content, ctx)


def access_view(content, ctx):
    return _render(SectionType.ACCESS, content, ctx, map_src=map_embed_src(content.get("mapEmbed")))


def contact_view(content, ctx):
    requested = content.get("formFields")
    fields = [f for f in requested if f in FORM_FIELD_LABELS] if isinstance(requested, list) else []
    if "name" not in fields:
        fields.insert(0, "name")
    return _render(
        SectionType.CONTACT,
        content,
        ctx,
        fields=[(name, FORM_FIELD_LABELS[name]) for name in fields],
    )


def blog_view(content, ctx):
    count = content.get("showCount")
    if not isinstance(count, int) or count < 1:
        count = DEFAULT_BLOG_COUNT
    return _render(SectionType.BLOG, content, ctx, posts=list(ctx.recent_posts)[:count])


def schedule_view(content, ctx):
    return _render(SectionType.SCHEDULE, content, ctx)


def faq_view(content, ctx):
    return _render(SectionType.FAQ, content, ctx)


def gallery_view(content, ctx):
    layout = content.get("layout")
    return _render(SectionType.GALLERY, content, ctx, layout=layout if layout in GALLERY_LAYOUTS else "grid")


SECTION_VIEWS: Dict[SectionType, Callable[[Dict[str, Any], SectionContext], Markup]] = {
    SectionType.HERO: hero_view,
    SectionType.FEATURES: features_view,
    SectionType.PRICING: pricing_view,
    SectionType.TEACHERS: teachers_view,
    SectionType.RESULTS: results_view,
    SectionType.ACCESS: access_view,
    SectionType.CONTACT: contact_view,
    SectionType.BLOG: blog_view,
    SectionType.SCHEDULE: schedule_view,
    SectionType.FAQ: faq_view,
    SectionType.GALLERY: gallery_view,
}

if set(SECTION_VIEWS) != set(SectionType):
    raise RuntimeError("every section type needs a view")
