from flask import g, request, jsonify
from sitebuilder.application.lookups import get_owned_site, list_sites
from sitebuilder.application.sites.commit_draft import commit_draft
from sitebuilder.application.sites.create_site import create_site
from sitebuilder.application.sites.publish_site import set_site_published
from sitebuilder.application.sites.update_site import update_site
from sitebuilder.normalizers.site import normalize_site
from sitebuilder.utils.decorators import owner_required
from sitebuilder.utils.optimistic_lock import enforce_optimistic_lock
from . import v1_bp


@v1_bp.route("/sites", methods=["GET"])
@owner_required
def get_sites():
    sites = list_sites(owner_id=g.current_user.id)
    return jsonify({"items": [normalize_site(s) for s in sites]}), 200


@v1_bp.route("/sites", methods=["POST"])
@owner_required
def post_site():
    data = request.get_json(silent=True) or {}

    site = create_site(
        owner_id=g.current_user.id,
        template_id=data.get("template_id") or "standard",
        name=data.get("name") or "",
        slug=data.get("slug"),
        theme_id=data.get("theme_id"),
        primary_color=data.get("primary_color"),
        secondary_color=data.get("secondary_color"),
    )

    return jsonify(normalize_site(site, include_sections=True)), 201


@v1_bp.route("/sites/<site_id>", methods=["GET"])
@owner_required
def get_site(site_id):
    site = get_owned_site(owner_id=g.current_user.id, site_id=site_id)
    return jsonify(normalize_site(site, include_sections=True)), 200


@v1_bp.route("/sites/<site_id>", methods=["PUT"])
@owner_required
def put_site(site_id):
    owner_id = g.current_user.id
    site = get_owned_site(owner_id=owner_id, site_id=site_id)

    # -----------------------
    # Optimistic Locking Check
    # -----------------------
    enforce_optimistic_lock(site)

    site = update_site(
        owner_id=owner_id,
        site_id=site.id,
        data=request.get_json(silent=True) or {},
        site=site,
    )
    return jsonify(normalize_site(site)), 200


@v1_bp.route("/sites/<site_id>/publish", methods=["POST"])
@owner_required
def publish_site(site_id):
    site = set_site_published(owner_id=g.current_user.id, site_id=site_id, published=True)
    return jsonify(normalize_site(site)), 200


@v1_bp.route("/sites/<site_id>/unpublish", methods=["POST"])
@owner_required
def unpublish_site(site_id):
    site = set_site_published(owner_id=g.current_user.id, site_id=site_id, published=False)
    return jsonify(normalize_site(site)), 200


@v1_bp.route("/sites/<site_id>/draft", methods=["PUT"])
@owner_required
def put_draft(site_id):
    """
    Save staged editor changes.

    Body: {"site": {...fields}, "sections": {"<section id>": {...content}}}
    Returns 200 when everything was written, 207 when some entries failed.
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "BadRequest", "message": "Invalid request body"}), 400

    result = commit_draft(
        owner_id=g.current_user.id,
        site_id=site_id,
        site_fields=data.get("site"),
        sections=data.get("sections"),
    )

    return jsonify({
        "ok": result.ok,
        "site_written": result.site_written,
        "sections_written": result.sections_written,
        "failures": result.failures,
    }), 200 if result.ok else 207
