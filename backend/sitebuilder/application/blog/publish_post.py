from sitebuilder.models.base import utcnow
from sitebuilder.models.blog_post import BlogPost
from sitebuilder.application.lookups import get_owned_post
from sitebuilder.domain.invariants.post import assert_post_publish_state
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional


def set_post_published(*, owner_id: str, post_id: str, published: bool) -> BlogPost:
    """
    Publish or unpublish a post.

    Publishing stamps ``published_at``; unpublishing clears it.
    Re-publishing an already published post keeps its original timestamp.
    """
    post = get_owned_post(owner_id=owner_id, post_id=post_id)

    with transactional():
        if published:
            if not post.is_published:
                post.published_at = utcnow()
            post.is_published = True
        else:
            post.is_published = False
            post.published_at = None

        post.updated_at = utcnow()
        assert_post_publish_state(post)

        log_action(
            owner_id=owner_id,
            action="post.publish" if published else "post.unpublish",
            entity_type="post",
            entity_id=post.id,
            payload={"site_id": post.site_id},
        )

    return post
