from sitebuilder.extensions import db
from .base import BaseModel
from .owner_mixin import OwnerMixin

class Section(BaseModel, OwnerMixin):
    __tablename__ = "sections"

    site_id = db.Column(db.String(36), db.ForeignKey("sites.id"), nullable=False, index=True)
    type = db.Column(db.String(50), nullable=False)  # hero, features, pricing, ...
    order = db.Column(db.Integer, nullable=False, default=0)
    is_visible = db.Column(db.Boolean, nullable=False, default=True)
    content = db.Column(db.JSON, nullable=False, default=dict)

    site = db.relationship("Site", back_populates="sections")

    __table_args__ = (
        db.Index("idx_section_site_order", "site_id", "order"),
    )
