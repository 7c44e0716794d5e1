from flask import request, jsonify
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token
)
from sitebuilder.application.accounts.authenticate import authenticate
from sitebuilder.application.accounts.register_owner import register_owner
from . import v1_bp


def _tokens(user):
    claims = {"role": user.role}
    return {
        "access_token": create_access_token(identity=user.id, additional_claims=claims),
        "refresh_token": create_refresh_token(identity=user.id, additional_claims=claims),
        "user": {
            "id": user.id,
            "email": user.email,
            "display_name": user.display_name,
        },
    }


@v1_bp.route("/auth/signup", methods=["POST"])
def signup():
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "BadRequest", "message": "Invalid request body"}), 400

    user = register_owner(
        email=data.get("email"),
        password=data.get("password"),
        display_name=data.get("display_name"),
    )

    return jsonify(_tokens(user)), 201


@v1_bp.route("/auth/login", methods=["POST"])
def login():
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "BadRequest", "message": "Invalid request body"}), 400

    email = data.get("email")
    password = data.get("password")

    if not email or not password:
        return jsonify({"error": "BadRequest", "message": "Email and password required"}), 400

    user = authenticate(email=email, password=password)
    if not user:
        return jsonify({"error": "Unauthorized", "message": "Invalid credentials"}), 401

    if not user.is_active:
        return jsonify({"error": "Forbidden", "message": "User account disabled"}), 403

    return jsonify(_tokens(user)), 200
