"""
Visual themes a site can select.

The catalog is closed and defined in code. Sites reference a theme by id; the
renderer reads the style descriptor to pick layout and visual variants.
"""
from dataclasses import dataclass
from typing import Dict, List, Literal

DEFAULT_THEME_ID = "default"


class UnknownThemeError(KeyError):
    pass


@dataclass(frozen=True)
class ThemePreview:
    primary: str
    secondary: str
    background: str
    text: str


@dataclass(frozen=True)
class BorderRadius:
    small: str
    medium: str
    large: str
    full: str = "9999px"


@dataclass(frozen=True)
class HeroStyle:
    layout: Literal["center", "left", "split"]
    overlay: bool
    title_size: str
    subtitle_size: str


@dataclass(frozen=True)
class ButtonStyle:
    style: Literal["solid", "outline", "gradient"]
    rounded: bool
    shadow: bool


@dataclass(frozen=True)
class CardStyle:
    shadow: Literal["none", "sm", "md", "lg"]
    border: bool
    rounded: str


@dataclass(frozen=True)
class SectionStyle:
    spacing: Literal["compact", "normal", "spacious"]
    title_style: Literal["underline", "accent", "simple", "boxed"]
    alternate_background: bool


@dataclass(frozen=True)
class ThemeStyles:
    font_family: str
    border_radius: BorderRadius
    hero: HeroStyle
    button: ButtonStyle
    card: CardStyle
    section: SectionStyle


@dataclass(frozen=True)
class Theme:
    id: str
    name: str
    description: str
    preview: ThemePreview
    styles: ThemeStyles


THEMES: Dict[str, Theme] = {
    theme.id: theme
    for theme in (
        Theme(
            id="default",
            name="Modern",
            description="Clean, contemporary layout",
            preview=ThemePreview("#10b981", "#f59e0b", "#ffffff", "#1f2937"),
            styles=ThemeStyles(
                font_family='"Noto Sans JP", sans-serif',
                border_radius=BorderRadius("0.5rem", "1rem", "1.5rem"),
                hero=HeroStyle("center", True, "3rem", "1.25rem"),
                button=ButtonStyle("solid", True, True),
                card=CardStyle("md", False, "1rem"),
                section=SectionStyle("normal", "underline", True),
            ),
        ),
        Theme(
            id="classic",
            name="Classic",
            description="Traditional design that reads as established and trustworthy",
            preview=ThemePreview("#1e3a5f", "#c9a227", "#faf9f7", "#2d2d2d"),
            styles=ThemeStyles(
                font_family='"Noto Serif JP", serif',
                border_radius=BorderRadius("0.25rem", "0.5rem", "0.75rem"),
                hero=HeroStyle("left", False, "2.5rem", "1.125rem"),
                button=ButtonStyle("outline", False, False),
                card=CardStyle("sm", True, "0.5rem"),
                section=SectionStyle("spacious", "boxed", False),
            ),
        ),
        Theme(
            id="pop",
            name="Pop",
            description="Bright and playful, aimed at elementary and junior high students",
            preview=ThemePreview("#f472b6", "#38bdf8", "#fef9ff", "#4a4a4a"),
            styles=ThemeStyles(
                font_family='"M PLUS Rounded 1c", sans-serif',
                border_radius=BorderRadius("1rem", "1.5rem", "2rem"),
                hero=HeroStyle("center", False, "2.75rem", "1.25rem"),
                button=ButtonStyle("gradient", True, True),
                card=CardStyle("lg", False, "1.5rem"),
                section=SectionStyle("normal", "accent", True),
            ),
        ),
        Theme(
            id="premium",
            name="Premium",
            description="Upscale look for prep schools and entrance-exam academies",
            preview=ThemePreview("#1a1a2e", "#eab308", "#0f0f1a", "#f5f5f5"),
            styles=ThemeStyles(
                font_family='"Zen Kaku Gothic New", sans-serif',
                border_radius=BorderRadius("0.25rem", "0.5rem", "0.75rem"),
                hero=HeroStyle("split", True, "3.5rem", "1.125rem"),
                button=ButtonStyle("outline", False, False),
                card=CardStyle("none", True, "0.25rem"),
                section=SectionStyle("spacious", "simple", False),
            ),
        ),
        Theme(
            id="natural",
            name="Natural",
            description="Warm and approachable",
            preview=ThemePreview("#65a30d", "#ea580c", "#fefdfb", "#3d3d3d"),
            styles=ThemeStyles(
                font_family='"Zen Maru Gothic", sans-serif',
                border_radius=BorderRadius("0.75rem", "1.25rem", "1.75rem"),
                hero=HeroStyle("center", False, "2.5rem", "1.25rem"),
                button=ButtonStyle("solid", True, False),
                card=CardStyle("sm", False, "1.25rem"),
                section=SectionStyle("normal", "accent", True),
            ),
        ),
    )
}


def get_theme(theme_id: str) -> Theme:
    try:
        return THEMES[theme_id]
    except KeyError:
        raise UnknownThemeError(theme_id) from None


def list_theme_ids() -> List[str]:
    return list(THEMES)


def list_themes() -> List[Theme]:
    return list(THEMES.values())


def theme_css_variables(theme: Theme, primary_color: str, secondary_color: str) -> Dict[str, str]:
    styles = theme.styles
    return {
        "--theme-font-family": styles.font_family,
        "--theme-primary": primary_color,
        "--theme-secondary": secondary_color,
        "--theme-radius-sm": styles.border_radius.small,
        "--theme-radius-md": styles.border_radius.medium,
        "--theme-radius-lg": styles.border_radius.large,
        "--theme-radius-full": styles.border_radius.full,
        "--theme-card-radius": styles.card.rounded,
        "--theme-hero-title-size": styles.hero.title_size,
        "--theme-hero-subtitle-size": styles.hero.subtitle_size,
    }


def theme_classes(theme: Theme) -> str:
    styles = theme.styles
    classes = [f"theme-{theme.id}", f"btn-{styles.button.style}"]

    if styles.button.rounded:
        classes.append("btn-rounded")
    if styles.button.shadow:
        classes.append("btn-shadow")

    classes.append(f"card-shadow-{styles.card.shadow}")
    if styles.card.border:
        classes.append("card-border")

    classes.append(f"section-{styles.section.spacing}")
    classes.append(f"title-{styles.section.title_style}")
    if styles.section.alternate_background:
        classes.append("section-alternate")

    return " ".join(classes)
