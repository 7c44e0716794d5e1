from sitebuilder.extensions import db
from .base import BaseModel
from .owner_mixin import OwnerMixin

class BlogPost(BaseModel, OwnerMixin):
    __tablename__ = "blog_posts"

    site_id = db.Column(db.String(36), db.ForeignKey("sites.id"), nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(200), nullable=False, index=True)
    content = db.Column(db.JSON, nullable=False, default=list)  # ordered blocks
    featured_image = db.Column(db.String(512), nullable=True)

    is_published = db.Column(db.Boolean, nullable=False, default=False, index=True)
    published_at = db.Column(db.DateTime(timezone=True), nullable=True, index=True)

    site = db.relationship("Site", back_populates="posts")

    __table_args__ = (
        db.UniqueConstraint("site_id", "slug", name="uq_post_slug_per_site"),
    )
