"""Public site page: header, visible sections in order, footer."""
import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional

from markupsafe import Markup
from pydantic import ValidationError

from sitebuilder.domain.section_types import SectionType, content_model, default_content, is_known_kind

from .context import SectionContext, get_env, value_of
from .views import SECTION_VIEWS

logger = logging.getLogger(__name__)


def visible_sections(sections: Iterable[Any]) -> List[Any]:
    shown = [s for s in sections if value_of(s, "is_visible", True)]
    return sorted(shown, key=lambda s: value_of(s, "order", 0) or 0)


def _with_list_fallbacks(kind: SectionType, content: Dict[str, Any]) -> Dict[str, Any]:
    # List fields the kind defines are always lists, so templates can loop over them
    for key, value in default_content(kind).items():
        if isinstance(value, list) and not isinstance(content.get(key), list):
            content[key] = []
    return content


def prepare_content(kind: SectionType, raw, section_id=None) -> Dict[str, Any]:
    """Normalized content when valid; otherwise whatever usable raw content there is."""
    if not isinstance(raw, Mapping):
        logger.warning("Section %s (%s) has no usable content", section_id, kind.value)
        return _with_list_fallbacks(kind, {})

    try:
        return content_model(kind).model_validate(dict(raw)).to_payload()
    except ValidationError as exc:
        logger.warning(
            "Section %s (%s) content is incomplete, rendering with fallbacks: %s",
            section_id, kind.value, exc.error_count(),
        )
        return _with_list_fallbacks(kind, dict(raw))


def render_section(section, ctx: SectionContext) -> Markup:
    section_id = value_of(section, "id")
    section_type = value_of(section, "type")

    if not is_known_kind(section_type):
        logger.warning("Section %s has unknown type %r; skipped", section_id, section_type)
        return Markup("")

    kind = SectionType(section_type)
    content = prepare_content(kind, value_of(section, "content"), section_id)

    try:
        return SECTION_VIEWS[kind](content, ctx)
    except Exception:
        logger.exception("Section %s (%s) failed to render; omitted", section_id, kind.value)
        return Markup("")


def render_site(
    site,
    sections,
    recent_posts=(),
    blog_url: Optional[str] = None,
    contact_url: Optional[str] = None,
) -> str:
    ctx = SectionContext.for_site(
        site,
        recent_posts=recent_posts,
        blog_url=blog_url,
        contact_url=contact_url,
    )
    rendered = [
        (value_of(section, "id"), render_section(section, ctx))
        for section in visible_sections(sections)
    ]

    return get_env().get_template("site.html").render(
        ctx=ctx,
        site=ctx.site,
        sections=[(section_id, html) for section_id, html in rendered if html],
        page_title=ctx.site_name,
    )


def render_not_found(site=None) -> str:
    ctx = SectionContext.for_site(site) if site is not None else None
    return get_env().get_template("not_found.html").render(
        ctx=ctx,
        site=ctx.site if ctx else None,
        page_title="Page not found",
    )
