from typing import Any, Dict
from sqlalchemy.exc import IntegrityError
from sitebuilder.models.base import utcnow
from sitebuilder.models.blog_post import BlogPost
from sitebuilder.application.lookups import get_owned_post
from sitebuilder.application.blog.post_fields import clean_post_fields
from sitebuilder.domain.errors import ConflictError, ContentValidationError, FieldError
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional


def update_post(
    *,
    owner_id: str,
    post_id: str,
    data: Dict[str, Any],
) -> BlogPost:
    """Update title, slug, content or featured image. Publish state is separate."""
    post = get_owned_post(owner_id=owner_id, post_id=post_id)

    if not data:
        raise ContentValidationError([FieldError("post", "No fields provided for update")])

    fields = clean_post_fields(data)

    if "slug" in fields and fields["slug"] != post.slug:
        taken = BlogPost.query.filter(
            BlogPost.site_id == post.site_id,
            BlogPost.slug == fields["slug"],
            BlogPost.id != post.id,
        ).first()
        if taken:
            raise ConflictError("A post with this slug already exists.")

    try:
        with transactional():
            for field, value in fields.items():
                setattr(post, field, value)
            post.updated_at = utcnow()

            log_action(
                owner_id=owner_id,
                action="post.update",
                entity_type="post",
                entity_id=post.id,
                payload={"fields": sorted(fields)},
            )
    except IntegrityError as exc:
        raise ConflictError("A post with this slug already exists.") from exc

    return post
