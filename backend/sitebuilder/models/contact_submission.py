from sitebuilder.extensions import db
from .base import BaseModel

class ContactSubmission(BaseModel):
    __tablename__ = "contact_submissions"

    site_id = db.Column(db.String(36), db.ForeignKey("sites.id"), nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=True)
    phone = db.Column(db.String(50), nullable=True)
    grade = db.Column(db.String(50), nullable=True)
    message = db.Column(db.Text, nullable=True)
