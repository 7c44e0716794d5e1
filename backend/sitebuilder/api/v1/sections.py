from flask import g, request, jsonify
from sitebuilder.application.lookups import get_owned_section, list_sections
from sitebuilder.application.sections.add_section import add_section
from sitebuilder.application.sections.delete_section import delete_section
from sitebuilder.application.sections.reorder_sections import reorder_sections
from sitebuilder.application.sections.set_visibility import set_section_visibility
from sitebuilder.application.sections.update_section import update_section_content
from sitebuilder.normalizers.section import normalize_section
from sitebuilder.utils.decorators import owner_required
from sitebuilder.utils.optimistic_lock import enforce_optimistic_lock
from . import v1_bp


@v1_bp.route("/sites/<site_id>/sections", methods=["GET"])
@owner_required
def get_sections(site_id):
    sections = list_sections(owner_id=g.current_user.id, site_id=site_id)
    return jsonify({"items": [normalize_section(s) for s in sections]}), 200


@v1_bp.route("/sites/<site_id>/sections", methods=["POST"])
@owner_required
def post_section(site_id):
    data = request.get_json(silent=True) or {}

    section = add_section(
        owner_id=g.current_user.id,
        site_id=site_id,
        section_type=data.get("type"),
        content=data.get("content"),
    )
    return jsonify(normalize_section(section)), 201


@v1_bp.route("/sites/<site_id>/sections/reorder", methods=["POST"])
@owner_required
def post_reorder(site_id):
    """
    Body: {"order": ["<section id>", ...]} listing every section of the site.
    """
    data = request.get_json(silent=True) or {}

    sections = reorder_sections(
        owner_id=g.current_user.id,
        site_id=site_id,
        ordered_ids=data.get("order"),
    )
    return jsonify({"items": [normalize_section(s) for s in sections]}), 200


@v1_bp.route("/sections/<section_id>", methods=["PUT"])
@owner_required
def put_section(section_id):
    owner_id = g.current_user.id
    section = get_owned_section(owner_id=owner_id, section_id=section_id)

    # -----------------------
    # Optimistic Locking Check
    # -----------------------
    enforce_optimistic_lock(section)

    data = request.get_json(silent=True) or {}
    section = update_section_content(
        owner_id=owner_id,
        section_id=section.id,
        content=data.get("content"),
        section=section,
    )
    return jsonify(normalize_section(section)), 200


@v1_bp.route("/sections/<section_id>", methods=["DELETE"])
@owner_required
def remove_section(section_id):
    delete_section(owner_id=g.current_user.id, section_id=section_id)
    return jsonify({"message": "Section deleted"}), 200


@v1_bp.route("/sections/<section_id>/visibility", methods=["POST"])
@owner_required
def post_visibility(section_id):
    data = request.get_json(silent=True) or {}
    if not isinstance(data.get("is_visible"), bool):
        return jsonify({"error": "BadRequest", "message": "is_visible must be a boolean"}), 400

    section = set_section_visibility(
        owner_id=g.current_user.id,
        section_id=section_id,
        visible=data["is_visible"],
    )
    return jsonify(normalize_section(section)), 200
