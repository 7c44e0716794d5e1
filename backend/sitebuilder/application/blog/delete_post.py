from sitebuilder.extensions import db
from sitebuilder.application.lookups import get_owned_post
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.media import delete_file
from sitebuilder.utils.transaction import transactional


def delete_post(*, owner_id: str, post_id: str) -> None:
    """Hard delete a post; its uploaded featured image goes with it."""
    post = get_owned_post(owner_id=owner_id, post_id=post_id)
    featured_image = post.featured_image

    with transactional():
        db.session.delete(post)
        log_action(
            owner_id=owner_id,
            action="post.delete",
            entity_type="post",
            entity_id=post_id,
            payload={"site_id": post.site_id, "slug": post.slug},
        )

    if featured_image:
        delete_file(featured_image)
