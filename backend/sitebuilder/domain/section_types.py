"""
Section kinds and the registry tying each kind to its content schema.

The registry is the single place that knows, for a kind, its label, its
default content and how to validate a payload. Both the editor and the
store boundary go through :func:`validate` so malformed content is never
persisted.
"""
import copy
import enum
from dataclasses import dataclass
from typing import Any, Dict, List, Type

from pydantic import ValidationError

from .content import (
    AccessContent,
    BlogContent,
    ContactContent,
    ContentModel,
    FAQContent,
    FeaturesContent,
    GalleryContent,
    HeroContent,
    PricingContent,
    ResultsContent,
    ScheduleContent,
    TeachersContent,
)
from .errors import ContentValidationError, FieldError


class SectionType(str, enum.Enum):
    HERO = "hero"
    FEATURES = "features"
    PRICING = "pricing"
    TEACHERS = "teachers"
    RESULTS = "results"
    ACCESS = "access"
    CONTACT = "contact"
    BLOG = "blog"
    SCHEDULE = "schedule"
    FAQ = "faq"
    GALLERY = "gallery"


@dataclass(frozen=True)
class SectionKind:
    type: SectionType
    label: str
    model: Type[ContentModel]
    default: Dict[str, Any]


_KINDS = (
    SectionKind(
        SectionType.HERO,
        "Hero",
        HeroContent,
        {
            "title": "The neighborhood school that stays closest to every student",
            "subtitle": "One-to-one tutoring that values each \"I get it!\" moment",
            "ctaText": "Book a free trial lesson",
            "ctaLink": "#contact",
        },
    ),
    SectionKind(
        SectionType.FEATURES,
        "Why choose us",
        FeaturesContent,
        {
            "title": "Three reasons families choose us",
            "items": [
                {"icon": "👨‍🏫", "title": "Fully one-to-one", "description": "Lessons paced to each student's understanding"},
                {"icon": "📚", "title": "Test preparation", "description": "Previews and reviews that follow the school curriculum"},
                {"icon": "🏠", "title": "20 years in the community", "description": "Tutors who know the local schools inside out"},
            ],
        },
    ),
    SectionKind(
        SectionType.PRICING,
        "Pricing & courses",
        PricingContent,
        {
            "title": "Pricing & courses",
            "plans": [
                {"name": "Elementary course", "target": "Grades 1-6", "price": "8,000", "period": "4 lessons / month", "features": ["Math and reading", "Homework support", "Junior high preparation"]},
                {"name": "Junior high course", "target": "Grades 7-9", "price": "15,000", "period": "8 lessons / month", "features": ["All five core subjects", "Term test preparation", "High school entrance prep"], "isPopular": True},
                {"name": "High school course", "target": "Grades 10-12", "price": "20,000", "period": "8 lessons / month", "features": ["University entrance prep", "Recommendation entry prep", "Common test prep"]},
            ],
            "note": "Prices include tax. Materials are charged separately.",
        },
    ),
    SectionKind(
        SectionType.TEACHERS,
        "Our teachers",
        TeachersContent,
        {
            "title": "Our teachers",
            "teachers": [
                {"name": "Taro Yamada", "role": "Principal", "subjects": ["Math", "Science"], "message": "From \"I understand\" to \"I can do it\", let's get there together!"},
            ],
        },
    ),
    SectionKind(
        SectionType.RESULTS,
        "Admission results",
        ResultsContent,
        {
            "title": "Admission results",
            "subtitle": "2024 academic year",
            "items": [
                {"year": "2024", "school": "North High School", "count": 5},
                {"year": "2024", "school": "East High School", "count": 3},
            ],
        },
    ),
    SectionKind(
        SectionType.ACCESS,
        "Access",
        AccessContent,
        {
            "title": "Access",
            "address": "1-2-3 Example-cho, Example City",
            "phone": "03-0000-0000",
            "businessHours": "Weekdays 15:00-22:00 / Saturday 10:00-18:00",
            "nearestStation": "5 minutes on foot from Example Station",
        },
    ),
    SectionKind(
        SectionType.CONTACT,
        "Contact",
        ContactContent,
        {
            "title": "Contact us / free trial",
            "subtitle": "Feel free to ask us anything",
            "formFields": ["name", "email", "phone", "grade", "message"],
            "submitText": "Send",
        },
    ),
    SectionKind(
        SectionType.BLOG,
        "Blog",
        BlogContent,
        {
            "title": "News & blog",
            "showCount": 3,
        },
    ),
    SectionKind(
        SectionType.SCHEDULE,
        "Timetable",
        ScheduleContent,
        {
            "title": "Timetable",
            "items": [
                {"day": "Monday", "time": "17:00-18:30", "subject": "Math", "target": "Junior high"},
            ],
        },
    ),
    SectionKind(
        SectionType.FAQ,
        "FAQ",
        FAQContent,
        {
            "title": "Frequently asked questions",
            "items": [
                {"question": "Do you offer trial lessons?", "answer": "Yes, trial lessons are free. Please get in touch."},
            ],
        },
    ),
    SectionKind(
        SectionType.GALLERY,
        "Gallery",
        GalleryContent,
        {
            "title": "Inside our school",
            "subtitle": "Take a look at our bright, clean study spaces",
            "images": [],
            "layout": "grid",
        },
    ),
)

REGISTRY: Dict[SectionType, SectionKind] = {kind.type: kind for kind in _KINDS}

if set(REGISTRY) != set(SectionType):
    raise RuntimeError("every section type needs a registry entry")


def parse_kind(value) -> SectionType:
    try:
        return SectionType(value)
    except ValueError:
        raise ContentValidationError(
            [FieldError("type", f"Unknown section type: {value!r}")]
        ) from None


_KNOWN_KINDS = frozenset(kind.value for kind in SectionType)


def is_known_kind(value) -> bool:
    return isinstance(value, str) and value in _KNOWN_KINDS


def label_for(kind) -> str:
    return REGISTRY[SectionType(kind)].label


def default_content(kind) -> Dict[str, Any]:
    return copy.deepcopy(REGISTRY[SectionType(kind)].default)


def content_model(kind) -> Type[ContentModel]:
    return REGISTRY[SectionType(kind)].model


def field_errors(exc: ValidationError, prefix: str = "") -> List[FieldError]:
    errors = []
    for err in exc.errors():
        path = ".".join(str(part) for part in err["loc"])
        if prefix:
            path = f"{prefix}.{path}" if path else prefix
        errors.append(FieldError(path or "content", err["msg"]))
    return errors


def validate(kind, payload) -> List[FieldError]:
    """
    Validate a content payload against the schema registered for ``kind``.

    Returns an empty list when the payload is acceptable.
    """
    if not is_known_kind(kind):
        return [FieldError("type", f"Unknown section type: {kind!r}")]

    if not isinstance(payload, dict):
        return [FieldError("content", "Content must be an object")]

    try:
        content_model(kind).model_validate(payload)
    except ValidationError as exc:
        return field_errors(exc)
    return []


def validate_or_raise(kind, payload) -> Dict[str, Any]:
    """Validate and return the normalized payload (camelCase keys)."""
    errors = validate(kind, payload)
    if errors:
        raise ContentValidationError(errors)
    return content_model(kind).model_validate(payload).to_payload()


def list_kinds() -> List[SectionKind]:
    return list(_KINDS)
