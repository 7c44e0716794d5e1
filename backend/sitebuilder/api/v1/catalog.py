from flask import jsonify, request
from sitebuilder.domain.section_types import list_kinds
from sitebuilder.domain.templates import list_templates
from sitebuilder.domain.themes import THEMES, list_themes
from sitebuilder.normalizers.catalog import normalize_section_kind, normalize_template, normalize_theme
from . import v1_bp


@v1_bp.route("/themes", methods=["GET"])
def get_themes():
    return jsonify({"items": [normalize_theme(theme) for theme in list_themes()]}), 200


@v1_bp.route("/section-types", methods=["GET"])
def get_section_types():
    return jsonify({"items": [normalize_section_kind(kind) for kind in list_kinds()]}), 200


@v1_bp.route("/templates", methods=["GET"])
def get_templates():
    theme_id = request.args.get("theme")
    if theme_id is not None and theme_id not in THEMES:
        return jsonify({"error": "BadRequest", "message": f"Unknown theme: {theme_id}"}), 400

    return jsonify({
        "items": [normalize_template(t) for t in list_templates(theme_id)]
    }), 200
