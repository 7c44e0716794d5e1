import pytest

from sitebuilder.domain.section_types import SectionType, default_content
from sitebuilder.domain.templates import (
    TEMPLATES,
    UnknownTemplateError,
    get_template,
    instantiate,
    list_templates,
    templates_by_theme,
)
from sitebuilder.domain.themes import (
    UnknownThemeError,
    get_theme,
    list_theme_ids,
    theme_classes,
    theme_css_variables,
)


def test_modern_simple_seeds_four_visible_sections_in_order() -> None:
    seeds = instantiate(get_template("modern-simple"))

    assert [s.type for s in seeds] == [
        SectionType.HERO, SectionType.FEATURES, SectionType.PRICING, SectionType.CONTACT,
    ]
    assert [s.order for s in seeds] == [1, 2, 3, 4]
    assert all(s.is_visible for s in seeds)


@pytest.mark.parametrize("template", TEMPLATES, ids=lambda t: t.id)
def test_every_template_seeds_its_declared_kinds_with_defaults(template) -> None:
    seeds = instantiate(template)

    assert tuple(s.type for s in seeds) == template.sections
    for seed in seeds:
        assert seed.content == default_content(seed.type)


def test_instantiate_is_deterministic_and_unshared() -> None:
    template = get_template("standard")
    first, second = instantiate(template), instantiate(template)

    assert first == second
    first[0].content["title"] = "changed"
    assert second[0].content["title"] != "changed"


def test_templates_filter_and_group_by_theme() -> None:
    grouped = templates_by_theme()

    assert set(grouped) == set(list_theme_ids())
    assert sum(len(v) for v in grouped.values()) == len(TEMPLATES)
    assert all(t.theme_id == "premium" for t in list_templates("premium"))
    assert list_templates("nonexistent") == []


def test_unknown_template_raises() -> None:
    with pytest.raises(UnknownTemplateError):
        get_template("brutalist")


def test_unknown_theme_is_a_key_error() -> None:
    with pytest.raises(KeyError):
        get_theme("neon")
    with pytest.raises(UnknownThemeError):
        get_theme("neon")


def test_theme_catalog_is_closed() -> None:
    assert list_theme_ids() == ["default", "classic", "pop", "premium", "natural"]


def test_theme_css_variables_and_classes() -> None:
    theme = get_theme("pop")
    variables = theme_css_variables(theme, "#111111", "#222222")

    assert variables["--theme-primary"] == "#111111"
    assert variables["--theme-secondary"] == "#222222"
    assert variables["--theme-font-family"] == theme.styles.font_family
    assert theme_classes(theme).startswith("theme-pop ")


def test_catalog_endpoints(client) -> None:
    themes = client.get("/api/v1/themes").get_json()["items"]
    assert {t["id"] for t in themes} == set(list_theme_ids())

    kinds = client.get("/api/v1/section-types").get_json()["items"]
    assert len(kinds) == len(SectionType)
    assert kinds[0]["default_content"] == default_content(kinds[0]["type"])

    templates = client.get("/api/v1/templates?theme=classic").get_json()["items"]
    assert [t["id"] for t in templates] == ["classic-trust"]

    assert client.get("/api/v1/templates?theme=neon").status_code == 400
