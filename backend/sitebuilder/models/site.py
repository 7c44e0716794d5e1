from sitebuilder.extensions import db
from .base import BaseModel
from .owner_mixin import OwnerMixin

class Site(BaseModel, OwnerMixin):
    __tablename__ = "sites"

    # Identity and routing
    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(100), unique=True, nullable=False, index=True)
    custom_domain = db.Column(db.String(255), unique=True, nullable=True, index=True)

    # Theme and branding
    theme_id = db.Column(db.String(50), nullable=False, default="default")
    primary_color = db.Column(db.String(7), nullable=False, default="#10b981")
    secondary_color = db.Column(db.String(7), nullable=False, default="#f59e0b")
    font_family = db.Column(db.String(100), nullable=False, default="Noto Sans JP")
    logo_url = db.Column(db.String(512), nullable=True)
    favicon_url = db.Column(db.String(512), nullable=True)
    tagline = db.Column(db.String(255), nullable=True)

    # Contact
    phone = db.Column(db.String(50), nullable=True)
    email = db.Column(db.String(255), nullable=True)
    address = db.Column(db.String(512), nullable=True)
    business_hours = db.Column(db.String(255), nullable=True)
    google_map_embed = db.Column(db.Text, nullable=True)

    # Social
    line_url = db.Column(db.String(512), nullable=True)
    instagram_url = db.Column(db.String(512), nullable=True)
    twitter_url = db.Column(db.String(512), nullable=True)

    is_published = db.Column(db.Boolean, nullable=False, default=False, index=True)

    owner = db.relationship("User", back_populates="sites")

    # Ordered, cascade deletes
    sections = db.relationship(
        "Section",
        back_populates="site",
        order_by="Section.order",
        cascade="all, delete-orphan"
    )
    posts = db.relationship(
        "BlogPost",
        back_populates="site",
        cascade="all, delete-orphan",
        lazy="dynamic"
    )
