from sitebuilder.domain.errors import InvariantViolation


def assert_post_publish_state(post):
    if post.is_published and post.published_at is None:
        raise InvariantViolation("Published posts must have a publish timestamp.")
    if not post.is_published and post.published_at is not None:
        raise InvariantViolation("Draft posts must not carry a publish timestamp.")
