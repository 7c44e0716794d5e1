from typing import Any, Dict, List, Optional
from sqlalchemy.exc import IntegrityError
from sitebuilder.extensions import db
from sitebuilder.models.blog_post import BlogPost
from sitebuilder.application.lookups import get_owned_site
from sitebuilder.application.blog.post_fields import clean_post_fields
from sitebuilder.domain.errors import ConflictError
from sitebuilder.domain.invariants.post import assert_post_publish_state
from sitebuilder.domain.site_fields import fallback_slug, slugify
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional

DEFAULT_TITLE = "Untitled"


def create_post(
    *,
    owner_id: str,
    site_id: str,
    title: Optional[str] = None,
    slug: Optional[str] = None,
    content: Optional[List[Dict[str, Any]]] = None,
    featured_image: Optional[str] = None,
) -> BlogPost:
    """
    Create a draft post for a site.

    Title defaults to "Untitled"; slug defaults to the slugified title,
    then a timestamped fallback.
    """
    site = get_owned_site(owner_id=owner_id, site_id=site_id)

    title = (title or "").strip() or DEFAULT_TITLE
    fields = clean_post_fields({
        "title": title,
        "slug": slug or slugify(title) or fallback_slug("post"),
        "content": content if content is not None else [],
        "featured_image": featured_image,
    })

    if BlogPost.query.filter_by(site_id=site.id, slug=fields["slug"]).first():
        raise ConflictError("A post with this slug already exists.")

    post = BlogPost()
    post.site_id = site.id
    post.owner_id = owner_id
    post.is_published = False
    post.published_at = None
    for field, value in fields.items():
        setattr(post, field, value)

    try:
        with transactional():
            db.session.add(post)
            db.session.flush()
            assert_post_publish_state(post)

            log_action(
                owner_id=owner_id,
                action="post.create",
                entity_type="post",
                entity_id=post.id,
                payload={"site_id": site.id, "slug": post.slug},
            )
    except IntegrityError as exc:
        raise ConflictError("A post with this slug already exists.") from exc

    return post
