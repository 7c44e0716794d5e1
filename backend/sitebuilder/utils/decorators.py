from functools import wraps
from flask import g, jsonify
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from sitebuilder.models.user import User

def owner_required(fn):
    """
    Requires a valid access token for an active owner.
    Loads the owner into g.current_user.
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        verify_jwt_in_request()

        user = User.query.filter_by(id=get_jwt_identity(), is_active=True).first()
        if not user:
            return jsonify({"error": "Unauthorized", "message": "Account not found or disabled"}), 401

        g.current_user = user
        return fn(*args, **kwargs)
    return wrapper
