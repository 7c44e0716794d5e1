from dataclasses import asdict

from sitebuilder.domain.section_types import SectionKind, default_content
from sitebuilder.domain.templates import SiteTemplate
from sitebuilder.domain.themes import Theme


def normalize_theme(theme: Theme):
    return asdict(theme)


def normalize_section_kind(kind: SectionKind):
    return {
        "type": kind.type.value,
        "label": kind.label,
        "default_content": default_content(kind.type),
    }


def normalize_template(template: SiteTemplate):
    return {
        "id": template.id,
        "name": template.name,
        "description": template.description,
        "theme_id": template.theme_id,
        "primary_color": template.primary_color,
        "secondary_color": template.secondary_color,
        "sections": [kind.value for kind in template.sections],
        "tags": list(template.tags),
    }
