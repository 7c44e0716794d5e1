import re
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sitebuilder.extensions import db
from sitebuilder.models.user import User
from sitebuilder.domain.errors import ConflictError, ContentValidationError, FieldError
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 8


def register_owner(
    *,
    email: str,
    password: str,
    display_name: Optional[str] = None,
) -> User:
    email = (email or "").strip().lower()

    errors = []
    if not EMAIL_RE.match(email):
        errors.append(FieldError("email", "must be a valid e-mail address"))
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        errors.append(FieldError("password", f"must be at least {MIN_PASSWORD_LENGTH} characters"))
    if errors:
        raise ContentValidationError(errors)

    if User.query.filter_by(email=email).first():
        raise ConflictError("An account with this e-mail already exists.")

    user = User()
    user.email = email
    user.display_name = (display_name or "").strip() or None
    user.set_password(password)

    try:
        with transactional():
            db.session.add(user)
            db.session.flush()

            log_action(
                owner_id=user.id,
                action="owner.signup",
                entity_type="user",
                entity_id=user.id,
            )
    except IntegrityError as exc:
        raise ConflictError("An account with this e-mail already exists.") from exc

    return user
