"""Blog list and single post pages."""
import logging
from typing import Any, Dict, Optional

from markupsafe import Markup

from sitebuilder.domain.blog_blocks import BLOCK_TYPES, parse_block

from .context import SectionContext, get_env, value_of

logger = logging.getLogger(__name__)


def render_block(raw) -> Markup:
    block = parse_block(raw)
    if block is None:
        block_type = raw.get("type") if isinstance(raw, dict) else None
        if block_type in BLOCK_TYPES:
            logger.warning("Skipping malformed %s block", block_type)
        else:
            logger.warning("Skipping block of unknown type %r", block_type)
        return Markup("")

    template = get_env().get_template(f"blocks/{block.type}.html")
    return Markup(template.render(data=block.data))


def render_blocks(blocks) -> Markup:
    if not isinstance(blocks, list):
        return Markup("")
    return Markup("").join(render_block(raw) for raw in blocks)


def _post_view(post) -> Dict[str, Any]:
    return {
        "title": value_of(post, "title") or "",
        "slug": value_of(post, "slug") or "",
        "featured_image": value_of(post, "featured_image"),
        "published_at": value_of(post, "published_at"),
        "excerpt": _excerpt(value_of(post, "content")),
    }


def _excerpt(blocks, length: int = 120) -> str:
    if not isinstance(blocks, list):
        return ""
    for raw in blocks:
        block = parse_block(raw)
        if block is not None and block.type == "paragraph" and block.data.text:
            text = block.data.text
            return text if len(text) <= length else text[:length].rstrip() + "..."
    return ""


def render_post_list(site, posts, blog_url: Optional[str] = None, site_url: Optional[str] = None) -> str:
    ctx = SectionContext.for_site(site, blog_url=blog_url)
    return get_env().get_template("blog_list.html").render(
        ctx=ctx,
        site=ctx.site,
        posts=[_post_view(post) for post in posts],
        site_url=site_url,
        page_title=f"Blog | {ctx.site_name}",
    )


def render_post(site, post, blog_url: Optional[str] = None, site_url: Optional[str] = None) -> str:
    ctx = SectionContext.for_site(site, blog_url=blog_url)
    view = _post_view(post)
    return get_env().get_template("blog_post.html").render(
        ctx=ctx,
        site=ctx.site,
        post=view,
        body=render_blocks(value_of(post, "content")),
        site_url=site_url,
        page_title=f"{view['title']} | {ctx.site_name}",
    )
