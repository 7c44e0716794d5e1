from flask import g, request, jsonify
from sitebuilder.application.lookups import get_owned_site
from sitebuilder.utils.decorators import owner_required
from sitebuilder.utils.media import save_image
from . import v1_bp


@v1_bp.route("/sites/<site_id>/uploads", methods=["POST"])
@owner_required
def upload_image(site_id):
    site = get_owned_site(owner_id=g.current_user.id, site_id=site_id)

    if "file" not in request.files:
        return jsonify({"error": "BadRequest", "message": "No file provided"}), 400

    url = save_image(request.files["file"], site.id)
    return jsonify({"url": url}), 201
