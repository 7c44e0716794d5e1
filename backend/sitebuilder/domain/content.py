"""
Typed content payloads, one model per section kind.

Payloads are stored as JSON with camelCase keys (``ctaText``,
``businessHours``...). Models accept either the camelCase alias or the
Python field name and always dump by alias.
"""
from __future__ import annotations

from typing import Annotated, List, Literal, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_LINK_PREFIXES = ("http://", "https://", "/", "#", "tel:", "mailto:")
_URL_PREFIXES = ("http://", "https://", "/")


def _check_link(value: str) -> str:
    if value and not value.startswith(_LINK_PREFIXES):
        raise ValueError("must be an absolute URL, a site path or an anchor")
    return value


def _check_url(value: str) -> str:
    if not value.startswith(_URL_PREFIXES):
        raise ValueError("must be an http(s) URL or an uploaded file path")
    return value


Title = Annotated[str, Field(min_length=1, max_length=200)]
Text = Annotated[str, Field(max_length=2000)]
Link = Annotated[str, Field(max_length=512), AfterValidator(_check_link)]
Url = Annotated[str, Field(min_length=1, max_length=512), AfterValidator(_check_url)]


class ContentModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class HeroContent(ContentModel):
    title: Title
    subtitle: Text = ""
    background_image: Optional[Url] = None
    cta_text: Optional[Annotated[str, Field(max_length=100)]] = None
    cta_link: Optional[Link] = None


class FeatureItem(ContentModel):
    icon: str = ""
    title: Title
    description: Text = ""


class FeaturesContent(ContentModel):
    title: Title
    subtitle: Optional[Text] = None
    items: List[FeatureItem] = Field(default_factory=list, max_length=12)


class PricingPlan(ContentModel):
    name: Title
    target: str = ""
    price: Annotated[str, Field(min_length=1, max_length=50)]
    period: str = ""
    features: List[Annotated[str, Field(max_length=200)]] = Field(default_factory=list)
    is_popular: Optional[bool] = None


class PricingContent(ContentModel):
    title: Title
    subtitle: Optional[Text] = None
    plans: List[PricingPlan] = Field(default_factory=list, max_length=8)
    note: Optional[Text] = None


class Teacher(ContentModel):
    name: Title
    role: str = ""
    photo: Optional[Url] = None
    subjects: List[str] = Field(default_factory=list)
    message: Text = ""


class TeachersContent(ContentModel):
    title: Title
    subtitle: Optional[Text] = None
    teachers: List[Teacher] = Field(default_factory=list)


class ResultItem(ContentModel):
    year: str
    school: Title
    count: Annotated[int, Field(ge=0)]


class Testimonial(ContentModel):
    name: str
    text: Text
    school: str = ""


class ResultsContent(ContentModel):
    title: Title
    subtitle: Optional[Text] = None
    items: List[ResultItem] = Field(default_factory=list)
    testimonials: Optional[List[Testimonial]] = None


class AccessContent(ContentModel):
    title: Title
    address: Text
    phone: Annotated[str, Field(max_length=50)]
    email: Optional[Annotated[str, Field(max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")]] = None
    business_hours: Text
    map_embed: Optional[Text] = None
    nearest_station: Optional[Text] = None
    parking_info: Optional[Text] = None


FormField = Literal["name", "email", "phone", "grade", "message"]


class ContactContent(ContentModel):
    title: Title
    subtitle: Optional[Text] = None
    form_fields: Annotated[List[FormField], Field(min_length=1)]
    submit_text: Annotated[str, Field(min_length=1, max_length=50)]


class ScheduleItem(ContentModel):
    day: str
    time: str
    subject: str
    target: str = ""


class ScheduleContent(ContentModel):
    title: Title
    subtitle: Optional[Text] = None
    items: List[ScheduleItem] = Field(default_factory=list)


class FAQItem(ContentModel):
    question: Annotated[str, Field(min_length=1, max_length=500)]
    answer: Text


class FAQContent(ContentModel):
    title: Title
    items: List[FAQItem] = Field(default_factory=list)


class BlogContent(ContentModel):
    title: Title
    show_count: Annotated[int, Field(ge=1, le=20)] = 3


class GalleryImage(ContentModel):
    url: Url
    caption: Optional[Annotated[str, Field(max_length=200)]] = None


class GalleryContent(ContentModel):
    title: Title
    subtitle: Optional[Text] = None
    images: List[GalleryImage] = Field(default_factory=list, max_length=60)
    layout: Literal["grid", "masonry", "slider"] = "grid"
