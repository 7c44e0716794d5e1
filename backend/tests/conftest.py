import pytest
from flask_jwt_extended import create_access_token

from sitebuilder import create_app
from sitebuilder.extensions import db
from sitebuilder.application.accounts.register_owner import register_owner
from sitebuilder.application.sites.create_site import create_site


@pytest.fixture
def app(tmp_path):
    app = create_app("testing")
    app.config["UPLOAD_FOLDER"] = str(tmp_path / "uploads")

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _headers(user):
    token = create_access_token(identity=user.id, additional_claims={"role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def owner(app):
    return register_owner(email="owner@example.com", password="password123", display_name="Owner")


@pytest.fixture
def other_owner(app):
    return register_owner(email="other@example.com", password="password123")


@pytest.fixture
def auth_headers(owner):
    return _headers(owner)


@pytest.fixture
def other_headers(other_owner):
    return _headers(other_owner)


@pytest.fixture
def site(owner):
    return create_site(owner_id=owner.id, template_id="modern-simple", name="Sunrise Academy")
