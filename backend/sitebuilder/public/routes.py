"""
Visitor-facing pages.

Sites are served at /<slug>/..., or at the root of their custom domain when
the site middleware matched the Host header. Anything missing or unpublished
is a plain 404 page.
"""
from flask import Blueprint, current_app, g, jsonify, request, send_from_directory
from sitebuilder.application.blog.queries import get_public_post, list_public_posts
from sitebuilder.application.leads.submit_contact import submit_contact
from sitebuilder.domain.errors import NotFoundError
from sitebuilder.domain.section_types import SectionType
from sitebuilder.models.site import Site
from sitebuilder.rendering.blog import render_post, render_post_list
from sitebuilder.rendering.page import render_not_found, render_site, visible_sections
from sitebuilder.utils.media import upload_root

public_bp = Blueprint("public", __name__)

HTML = {"Content-Type": "text/html; charset=utf-8"}


def _not_found(site=None):
    return render_not_found(site), 404, HTML


def _published_site(slug):
    return Site.query.filter_by(slug=slug, is_published=True).first()


def _site_urls(site, on_custom_domain):
    base = "" if on_custom_domain else f"/{site.slug}"
    return {
        "site_url": base or "/",
        "blog_url": f"{base}/blog",
        "contact_url": f"{base}/contact",
    }


def _blog_count(sections):
    counts = [
        (s.content or {}).get("showCount", 3)
        for s in sections
        if s.type == SectionType.BLOG.value
    ]
    counts = [c for c in counts if isinstance(c, int) and c > 0]
    return max(counts) if counts else 0


def _site_page(site, on_custom_domain=False):
    urls = _site_urls(site, on_custom_domain)
    sections = visible_sections(site.sections)

    count = _blog_count(sections)
    recent_posts = list_public_posts(site, limit=count) if count else []

    html = render_site(
        site,
        sections,
        recent_posts=recent_posts,
        blog_url=urls["blog_url"],
        contact_url=urls["contact_url"],
    )
    return html, 200, HTML


def _blog_page(site, on_custom_domain=False):
    urls = _site_urls(site, on_custom_domain)
    html = render_post_list(
        site,
        list_public_posts(site),
        blog_url=urls["blog_url"],
        site_url=urls["site_url"],
    )
    return html, 200, HTML


def _post_page(site, post_slug, on_custom_domain=False):
    urls = _site_urls(site, on_custom_domain)
    try:
        post = get_public_post(site, post_slug)
    except NotFoundError:
        return _not_found(site)

    html = render_post(site, post, blog_url=urls["blog_url"], site_url=urls["site_url"])
    return html, 200, HTML


def _contact(site):
    data = request.get_json(silent=True)
    if data is None:
        data = request.form.to_dict()

    submission = submit_contact(site=site, data=data)
    return jsonify({"id": submission.id, "message": "Thank you. We will be in touch shortly."}), 201


# -------------------------------------------------
# Custom domain (Host header resolved by middleware)
# -------------------------------------------------

@public_bp.route("/", methods=["GET"])
def custom_domain_home():
    if not g.get("current_site"):
        return jsonify({"status": "ok", "service": "sitebuilder"}), 200
    return _site_page(g.current_site, on_custom_domain=True)


@public_bp.route("/blog", methods=["GET"])
def custom_domain_blog():
    if not g.get("current_site"):
        return _not_found()
    return _blog_page(g.current_site, on_custom_domain=True)


@public_bp.route("/blog/<post_slug>", methods=["GET"])
def custom_domain_post(post_slug):
    if not g.get("current_site"):
        return _not_found()
    return _post_page(g.current_site, post_slug, on_custom_domain=True)


@public_bp.route("/contact", methods=["POST"])
def custom_domain_contact():
    if not g.get("current_site"):
        return jsonify({"error": "NotFound", "message": "Site not found"}), 404
    return _contact(g.current_site)


# -------------------------------------------------
# Uploaded files
# -------------------------------------------------

@public_bp.route("/uploads/<path:filename>", methods=["GET"])
def uploaded_file(filename):
    response = send_from_directory(upload_root(), filename)
    response.headers["X-Content-Type-Options"] = "nosniff"
    return response


# -------------------------------------------------
# Slug routes
# -------------------------------------------------

@public_bp.route("/<slug>", methods=["GET"])
def site_home(slug):
    site = _published_site(slug)
    if not site:
        return _not_found()
    return _site_page(site)


@public_bp.route("/<slug>/blog", methods=["GET"])
def site_blog(slug):
    site = _published_site(slug)
    if not site:
        return _not_found()
    return _blog_page(site)


@public_bp.route("/<slug>/blog/<post_slug>", methods=["GET"])
def site_post(slug, post_slug):
    site = _published_site(slug)
    if not site:
        return _not_found()
    return _post_page(site, post_slug)


@public_bp.route("/<slug>/contact", methods=["POST"])
def site_contact(slug):
    site = _published_site(slug)
    if not site:
        current_app.logger.info("Contact submission for unknown or unpublished site %r", slug)
        return jsonify({"error": "NotFound", "message": "Site not found"}), 404
    return _contact(site)
