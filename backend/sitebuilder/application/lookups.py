"""
Owner-scoped row lookups.

Every read goes through (resource id, owner id). A row owned by somebody
else is reported exactly like a missing one.
"""
from sitebuilder.domain.errors import NotFoundError
from sitebuilder.models.blog_post import BlogPost
from sitebuilder.models.section import Section
from sitebuilder.models.site import Site


def get_owned_site(*, owner_id: str, site_id: str) -> Site:
    site = Site.query.filter_by(id=site_id, owner_id=owner_id).first()
    if not site:
        raise NotFoundError("Site not found")
    return site


def get_owned_section(*, owner_id: str, section_id: str) -> Section:
    section = Section.query.filter_by(id=section_id, owner_id=owner_id).first()
    if not section:
        raise NotFoundError("Section not found")
    return section


def get_owned_post(*, owner_id: str, post_id: str) -> BlogPost:
    post = BlogPost.query.filter_by(id=post_id, owner_id=owner_id).first()
    if not post:
        raise NotFoundError("Post not found")
    return post


def list_sites(*, owner_id: str):
    return (
        Site.query
        .filter_by(owner_id=owner_id)
        .order_by(Site.created_at.desc())
        .all()
    )


def list_sections(*, owner_id: str, site_id: str):
    site = get_owned_site(owner_id=owner_id, site_id=site_id)
    return (
        Section.query
        .filter_by(site_id=site.id, owner_id=owner_id)
        .order_by(Section.order.asc())
        .all()
    )
