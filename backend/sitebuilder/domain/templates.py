"""Starter templates offered when an owner creates a new site."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .section_types import SectionType, default_content
from .themes import THEMES

S = SectionType


class UnknownTemplateError(KeyError):
    pass


@dataclass(frozen=True)
class SiteTemplate:
    id: str
    name: str
    description: str
    theme_id: str
    primary_color: str
    secondary_color: str
    sections: Tuple[SectionType, ...]
    tags: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class SectionSeed:
    type: SectionType
    order: int
    is_visible: bool
    content: Dict[str, Any]


TEMPLATES: Tuple[SiteTemplate, ...] = (
    SiteTemplate(
        id="standard",
        name="Standard",
        description="The classic school site: features, pricing, teachers, results and access",
        theme_id="default",
        primary_color="#10b981",
        secondary_color="#f59e0b",
        sections=(S.HERO, S.FEATURES, S.PRICING, S.TEACHERS, S.RESULTS, S.ACCESS, S.CONTACT),
        tags=("recommended", "all-round"),
    ),
    SiteTemplate(
        id="modern-simple",
        name="Simple",
        description="The essentials only. A good place to start",
        theme_id="default",
        primary_color="#3b82f6",
        secondary_color="#f97316",
        sections=(S.HERO, S.FEATURES, S.PRICING, S.CONTACT),
        tags=("simple", "starter"),
    ),
    SiteTemplate(
        id="results-focus",
        name="Results first",
        description="Puts admission results up front. For exam-focused schools",
        theme_id="premium",
        primary_color="#8b5cf6",
        secondary_color="#ec4899",
        sections=(S.HERO, S.RESULTS, S.TEACHERS, S.FEATURES, S.PRICING, S.FAQ, S.ACCESS, S.CONTACT),
        tags=("exam-prep", "results"),
    ),
    SiteTemplate(
        id="modern-gallery",
        name="Modern",
        description="Contemporary layout with a gallery and FAQ",
        theme_id="default",
        primary_color="#0ea5e9",
        secondary_color="#f59e0b",
        sections=(S.HERO, S.GALLERY, S.FEATURES, S.TEACHERS, S.PRICING, S.FAQ, S.CONTACT, S.ACCESS),
        tags=("gallery", "modern"),
    ),
    SiteTemplate(
        id="minimal",
        name="Minimal",
        description="A focused one-pager. Works well as a landing page",
        theme_id="natural",
        primary_color="#18181b",
        secondary_color="#ef4444",
        sections=(S.HERO, S.FEATURES, S.CONTACT),
        tags=("simple", "landing"),
    ),
    SiteTemplate(
        id="prep-school",
        name="Prep school",
        description="For university prep schools, with timetable and access up front",
        theme_id="premium",
        primary_color="#04384c",
        secondary_color="#d30062",
        sections=(
            S.HERO, S.FEATURES, S.SCHEDULE, S.TEACHERS, S.RESULTS,
            S.PRICING, S.GALLERY, S.FAQ, S.ACCESS, S.CONTACT,
        ),
        tags=("exam-prep", "timetable"),
    ),
    SiteTemplate(
        id="classic-trust",
        name="Classic",
        description="Traditional look with news and a timetable",
        theme_id="classic",
        primary_color="#1e3a5f",
        secondary_color="#c9a227",
        sections=(S.HERO, S.FEATURES, S.TEACHERS, S.SCHEDULE, S.BLOG, S.ACCESS, S.CONTACT),
        tags=("traditional", "blog"),
    ),
    SiteTemplate(
        id="pop-kids",
        name="Pop",
        description="Cheerful layout for elementary and junior high students",
        theme_id="pop",
        primary_color="#f472b6",
        secondary_color="#38bdf8",
        sections=(S.HERO, S.FEATURES, S.GALLERY, S.PRICING, S.FAQ, S.CONTACT),
        tags=("kids", "playful"),
    ),
)

_BY_ID: Dict[str, SiteTemplate] = {template.id: template for template in TEMPLATES}

for _template in TEMPLATES:
    if _template.theme_id not in THEMES:
        raise RuntimeError(f"template {_template.id} uses unknown theme {_template.theme_id}")


def get_template(template_id: str) -> SiteTemplate:
    try:
        return _BY_ID[template_id]
    except KeyError:
        raise UnknownTemplateError(template_id) from None


def list_templates(theme_id: Optional[str] = None) -> List[SiteTemplate]:
    if theme_id is None:
        return list(TEMPLATES)
    return [t for t in TEMPLATES if t.theme_id == theme_id]


def templates_by_theme() -> Dict[str, List[SiteTemplate]]:
    grouped: Dict[str, List[SiteTemplate]] = {theme_id: [] for theme_id in THEMES}
    for template in TEMPLATES:
        grouped[template.theme_id].append(template)
    return grouped


def instantiate(template: SiteTemplate) -> List[SectionSeed]:
    """One visible section per listed kind, in listed order, with default content."""
    return [
        SectionSeed(
            type=kind,
            order=index,
            is_visible=True,
            content=default_content(kind),
        )
        for index, kind in enumerate(template.sections, start=1)
    ]
