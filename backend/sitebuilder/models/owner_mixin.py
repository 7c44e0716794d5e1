from sitebuilder.extensions import db

class OwnerMixin:
    # Every owned row carries its owner so that lookups filter on it directly
    owner_id = db.Column(
        db.String(36),
        db.ForeignKey('users.id'),
        nullable=False,
        index=True
    )
