from flask import g, request, jsonify
from sitebuilder.application.blog.create_post import create_post
from sitebuilder.application.blog.delete_post import delete_post
from sitebuilder.application.blog.publish_post import set_post_published
from sitebuilder.application.blog.queries import list_posts
from sitebuilder.application.blog.update_post import update_post
from sitebuilder.application.lookups import get_owned_post
from sitebuilder.normalizers.post import normalize_post
from sitebuilder.utils.decorators import owner_required
from . import v1_bp


@v1_bp.route("/sites/<site_id>/posts", methods=["GET"])
@owner_required
def get_posts(site_id):
    posts = list_posts(owner_id=g.current_user.id, site_id=site_id)
    return jsonify({"items": [normalize_post(p, include_content=False) for p in posts]}), 200


@v1_bp.route("/sites/<site_id>/posts", methods=["POST"])
@owner_required
def post_post(site_id):
    data = request.get_json(silent=True) or {}

    post = create_post(
        owner_id=g.current_user.id,
        site_id=site_id,
        title=data.get("title"),
        slug=data.get("slug"),
        content=data.get("content"),
        featured_image=data.get("featured_image"),
    )
    return jsonify(normalize_post(post)), 201


@v1_bp.route("/posts/<post_id>", methods=["GET"])
@owner_required
def get_post(post_id):
    post = get_owned_post(owner_id=g.current_user.id, post_id=post_id)
    return jsonify(normalize_post(post)), 200


@v1_bp.route("/posts/<post_id>", methods=["PUT"])
@owner_required
def put_post(post_id):
    post = update_post(
        owner_id=g.current_user.id,
        post_id=post_id,
        data=request.get_json(silent=True) or {},
    )
    return jsonify(normalize_post(post)), 200


@v1_bp.route("/posts/<post_id>", methods=["DELETE"])
@owner_required
def remove_post(post_id):
    delete_post(owner_id=g.current_user.id, post_id=post_id)
    return jsonify({"message": "Post deleted"}), 200


@v1_bp.route("/posts/<post_id>/publish", methods=["POST"])
@owner_required
def publish_post(post_id):
    post = set_post_published(owner_id=g.current_user.id, post_id=post_id, published=True)
    return jsonify(normalize_post(post)), 200


@v1_bp.route("/posts/<post_id>/unpublish", methods=["POST"])
@owner_required
def unpublish_post(post_id):
    post = set_post_published(owner_id=g.current_user.id, post_id=post_id, published=False)
    return jsonify(normalize_post(post)), 200
