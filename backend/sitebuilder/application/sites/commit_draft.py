from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from sitebuilder.application.lookups import get_owned_section, get_owned_site
from sitebuilder.application.sections.update_section import update_section_content
from sitebuilder.application.sites.update_site import update_site
from sitebuilder.domain.errors import ContentValidationError, FieldError, SiteBuilderError
from sitebuilder.domain.section_types import validate
from sitebuilder.domain.site_fields import validate_site_fields


@dataclass
class DraftCommit:
    site_written: bool = False
    sections_written: List[str] = field(default_factory=list)
    failures: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures


def commit_draft(
    *,
    owner_id: str,
    site_id: str,
    site_fields: Optional[Dict[str, Any]] = None,
    sections: Optional[Dict[str, Dict[str, Any]]] = None,
) -> DraftCommit:
    """
    Persist staged edits for one site.

    Everything is validated up front: a single invalid entry rejects the
    whole draft and nothing is written. After that, the site fields and each
    section are written as independent updates; an entry that fails is
    reported in ``failures`` while the others stay committed.
    """
    site = get_owned_site(owner_id=owner_id, site_id=site_id)

    shape_errors = [
        FieldError(name, "must be an object")
        for name, value in (("site", site_fields), ("sections", sections))
        if value is not None and not isinstance(value, dict)
    ]
    if shape_errors:
        raise ContentValidationError(shape_errors)

    site_fields = site_fields or {}
    sections = sections or {}

    owned = {}
    errors: List[FieldError] = []

    for error in validate_site_fields(site_fields) if site_fields else []:
        errors.append(FieldError(f"site.{error.field}", error.message))

    for section_id, content in sections.items():
        section = get_owned_section(owner_id=owner_id, section_id=section_id)
        if section.site_id != site.id:
            raise ContentValidationError(
                [FieldError(f"sections.{section_id}", "Section belongs to another site")]
            )
        owned[section_id] = section
        for error in validate(section.type, content):
            errors.append(FieldError(f"sections.{section_id}.{error.field}", error.message))

    if errors:
        raise ContentValidationError(errors)

    result = DraftCommit()

    if site_fields:
        try:
            update_site(owner_id=owner_id, site_id=site.id, data=site_fields, site=site)
            result.site_written = True
        except (SiteBuilderError, SQLAlchemyError) as exc:
            current_app.logger.warning("Draft commit: site %s fields failed: %s", site.id, exc)
            result.failures["site"] = str(exc)

    for section_id, content in sections.items():
        try:
            update_section_content(
                owner_id=owner_id,
                section_id=section_id,
                content=content,
                section=owned[section_id],
            )
            result.sections_written.append(section_id)
        except (SiteBuilderError, SQLAlchemyError) as exc:
            current_app.logger.warning("Draft commit: section %s failed: %s", section_id, exc)
            result.failures[section_id] = str(exc)

    return result
