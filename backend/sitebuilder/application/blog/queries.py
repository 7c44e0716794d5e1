from sitebuilder.models.blog_post import BlogPost
from sitebuilder.models.site import Site
from sitebuilder.application.lookups import get_owned_site
from sitebuilder.domain.errors import NotFoundError


def list_posts(*, owner_id: str, site_id: str):
    """All posts of an owned site, drafts included, newest created first."""
    site = get_owned_site(owner_id=owner_id, site_id=site_id)
    return (
        BlogPost.query
        .filter_by(site_id=site.id, owner_id=owner_id)
        .order_by(BlogPost.created_at.desc(), BlogPost.id.desc())
        .all()
    )


def _public_posts(site: Site):
    return BlogPost.query.filter(
        BlogPost.site_id == site.id,
        BlogPost.is_published.is_(True),
        BlogPost.published_at.isnot(None),
    )


def list_public_posts(site: Site, limit: int | None = None):
    query = _public_posts(site).order_by(BlogPost.published_at.desc(), BlogPost.id.desc())
    if limit is not None:
        query = query.limit(limit)
    return query.all()


def get_public_post(site: Site, post_slug: str) -> BlogPost:
    post = _public_posts(site).filter(BlogPost.slug == post_slug).first()
    if not post:
        raise NotFoundError("Post not found")
    return post
