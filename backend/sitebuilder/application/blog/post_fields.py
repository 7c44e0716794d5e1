"""Whitelisted, validated blog post fields."""
from typing import Annotated, Any, Dict, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationError

from sitebuilder.domain.blog_blocks import normalize_blocks, validate_blocks
from sitebuilder.domain.errors import ContentValidationError, FieldError
from sitebuilder.domain.section_types import field_errors
from sitebuilder.domain.site_fields import SLUG_RE


def _check_post_slug(value: str) -> str:
    if not SLUG_RE.match(value):
        raise ValueError("may only contain lowercase letters, digits and single hyphens")
    return value


class PostUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: Optional[Annotated[str, Field(min_length=1, max_length=255)]] = None
    slug: Optional[Annotated[str, Field(min_length=1, max_length=200), AfterValidator(_check_post_slug)]] = None
    content: Optional[List[Any]] = None
    featured_image: Optional[Annotated[str, Field(max_length=512)]] = None


def clean_post_fields(fields: Any) -> Dict[str, Any]:
    if not isinstance(fields, dict):
        raise ContentValidationError([FieldError("post", "Post fields must be an object")])

    try:
        cleaned = PostUpdate.model_validate(fields).model_dump(exclude_unset=True)
    except ValidationError as exc:
        raise ContentValidationError(field_errors(exc)) from None

    for name in ("title", "slug", "content"):
        if name in cleaned and cleaned[name] is None:
            raise ContentValidationError([FieldError(name, "is required")])

    if "content" in cleaned:
        errors: List[FieldError] = validate_blocks(cleaned["content"])
        if errors:
            raise ContentValidationError(errors)
        cleaned["content"] = normalize_blocks(cleaned["content"])

    if cleaned.get("featured_image") == "":
        cleaned["featured_image"] = None

    return cleaned
