from typing import Annotated, Any, Optional
from flask import current_app
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from sitebuilder.extensions import db
from sitebuilder.models.contact_submission import ContactSubmission
from sitebuilder.models.site import Site
from sitebuilder.application.lookups import get_owned_site
from sitebuilder.domain.errors import ContentValidationError, FieldError
from sitebuilder.domain.section_types import field_errors
from sitebuilder.utils.transaction import transactional


class ContactForm(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: Annotated[str, Field(min_length=1, max_length=255)]
    email: Optional[Annotated[str, Field(max_length=255)]] = None
    phone: Optional[Annotated[str, Field(max_length=50)]] = None
    grade: Optional[Annotated[str, Field(max_length=50)]] = None
    message: Optional[Annotated[str, Field(max_length=5000)]] = None


def submit_contact(*, site: Site, data: Any) -> ContactSubmission:
    """Store a visitor's contact form submission for a published site."""
    if not isinstance(data, dict):
        raise ContentValidationError([FieldError("name", "is required")])

    try:
        form = ContactForm.model_validate(data)
    except ValidationError as exc:
        raise ContentValidationError(field_errors(exc)) from None

    submission = ContactSubmission()
    submission.site_id = site.id
    for field, value in form.model_dump().items():
        setattr(submission, field, value or None)

    with transactional():
        db.session.add(submission)

    current_app.logger.info("Contact submission %s stored for site %s", submission.id, site.slug)
    return submission


def list_leads(*, owner_id: str, site_id: str):
    site = get_owned_site(owner_id=owner_id, site_id=site_id)
    return (
        ContactSubmission.query
        .filter_by(site_id=site.id)
        .order_by(ContactSubmission.created_at.desc(), ContactSubmission.id.desc())
        .all()
    )
