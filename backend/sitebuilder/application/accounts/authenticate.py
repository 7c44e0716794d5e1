from typing import Optional
from sitebuilder.models.user import User


def authenticate(*, email: str, password: str) -> Optional[User]:
    """Return the user for valid credentials, otherwise ``None``."""
    user = User.query.filter_by(email=(email or "").strip().lower()).first()
    if not user or not user.check_password(password or ""):
        return None
    return user
