from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
from sitebuilder.domain.errors import SiteBuilderError
from sitebuilder.extensions import db, jwt


def _error(name, message, status_code):
    response = jsonify({"error": name, "message": message})
    response.status_code = status_code
    return response


def register_error_handlers(app):
    @app.errorhandler(SiteBuilderError)
    def handle_site_builder_error(error):
        response = jsonify(error.to_dict())
        response.status_code = error.status_code
        return response

    @app.errorhandler(SQLAlchemyError)
    def handle_store_error(error):
        db.session.rollback()
        app.logger.exception("Database error: %s", error)
        return _error("StoreUnavailable", "The data store is unavailable. Please retry.", 503)

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return _error(error.name.replace(" ", ""), error.description, error.code)


@jwt.unauthorized_loader
def missing_token(reason):
    return _error("Unauthorized", reason, 401)


@jwt.invalid_token_loader
def invalid_token(reason):
    return _error("Unauthorized", reason, 401)


@jwt.expired_token_loader
def expired_token(jwt_header, jwt_payload):
    return _error("Unauthorized", "Token has expired", 401)
