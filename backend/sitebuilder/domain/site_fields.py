"""Site-level fields an owner may edit, and slug rules."""
import re
import time
from typing import Annotated, Any, Dict, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationError

from .errors import ContentValidationError, FieldError
from .section_types import field_errors
from .themes import THEMES

SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
DOMAIN_RE = re.compile(r"^(?=.{4,253}$)([a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?\.)+[a-z]{2,63}$")
HEX_COLOR_RE = r"^#[0-9a-fA-F]{6}$"

# First path segments the application itself serves
RESERVED_SLUGS = frozenset({"api", "swagger", "openapi", "uploads", "blog", "static", "health", "contact"})


def slugify(text: str) -> str:
    """Keep ASCII letters, digits and hyphens only."""
    text = (text or "").lower()
    text = re.sub(r"[^a-z0-9\s-]", "", text)
    text = re.sub(r"\s+", "-", text)
    text = re.sub(r"-+", "-", text)
    return text.strip("-")


def fallback_slug(prefix: str) -> str:
    return f"{prefix}-{int(time.time() * 1000)}"


def _check_slug(value: str) -> str:
    if not SLUG_RE.match(value):
        raise ValueError("may only contain lowercase letters, digits and single hyphens")
    if value in RESERVED_SLUGS:
        raise ValueError("is reserved")
    return value


def _check_domain(value: Optional[str]) -> Optional[str]:
    if value is None or value == "":
        return None
    value = value.strip().lower()
    if not DOMAIN_RE.match(value):
        raise ValueError("is not a valid domain name")
    return value


def _check_theme(value: str) -> str:
    if value not in THEMES:
        raise ValueError(f"unknown theme {value!r}")
    return value


def _check_url(value: Optional[str]) -> Optional[str]:
    if value and not value.startswith(("http://", "https://", "/")):
        raise ValueError("must be an http(s) URL or an uploaded file path")
    return value or None


Slug = Annotated[str, Field(min_length=1, max_length=100), AfterValidator(_check_slug)]
ThemeId = Annotated[str, AfterValidator(_check_theme)]
Color = Annotated[str, Field(pattern=HEX_COLOR_RE)]
OptionalUrl = Optional[Annotated[str, Field(max_length=512), AfterValidator(_check_url)]]
OptionalText = Optional[Annotated[str, Field(max_length=512)]]


class SiteUpdate(BaseModel):
    """Whitelisted, validated site fields. Only explicitly sent fields are applied."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[Annotated[str, Field(min_length=1, max_length=255)]] = None
    slug: Optional[Slug] = None
    custom_domain: Optional[Annotated[str, AfterValidator(_check_domain)]] = None
    theme_id: Optional[ThemeId] = None
    primary_color: Optional[Color] = None
    secondary_color: Optional[Color] = None
    font_family: Optional[Annotated[str, Field(min_length=1, max_length=100)]] = None
    logo_url: OptionalUrl = None
    favicon_url: OptionalUrl = None
    tagline: Optional[Annotated[str, Field(max_length=255)]] = None
    phone: Optional[Annotated[str, Field(max_length=50)]] = None
    email: Optional[Annotated[str, Field(max_length=255)]] = None
    address: OptionalText = None
    business_hours: Optional[Annotated[str, Field(max_length=255)]] = None
    google_map_embed: Optional[Annotated[str, Field(max_length=4000)]] = None
    line_url: OptionalUrl = None
    instagram_url: OptionalUrl = None
    twitter_url: OptionalUrl = None


# Fields that may not be cleared once set
REQUIRED_SITE_FIELDS = ("name", "slug", "theme_id", "primary_color", "secondary_color", "font_family")


def validate_site_fields(fields: Any) -> List[FieldError]:
    if not isinstance(fields, dict):
        return [FieldError("site", "Site fields must be an object")]

    errors = [
        FieldError(name, "is required")
        for name in REQUIRED_SITE_FIELDS
        if name in fields and fields[name] in (None, "")
    ]
    if errors:
        return errors

    try:
        SiteUpdate.model_validate(fields)
    except ValidationError as exc:
        return field_errors(exc)
    return []


def clean_site_fields(fields: Any) -> Dict[str, Any]:
    errors = validate_site_fields(fields)
    if errors:
        raise ContentValidationError(errors)
    return SiteUpdate.model_validate(fields).model_dump(exclude_unset=True)
