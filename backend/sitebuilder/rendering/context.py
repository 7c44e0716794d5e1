"""Shared rendering state: the Jinja environment and per-page context."""
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from functools import lru_cache
import logging
from typing import Any, Dict, Optional, Sequence

from dateutil.parser import isoparse
from jinja2 import Environment, PackageLoader, select_autoescape

from sitebuilder.domain.themes import (
    DEFAULT_THEME_ID,
    Theme,
    UnknownThemeError,
    get_theme,
    theme_classes,
    theme_css_variables,
)
from sitebuilder.normalizers.site import normalize_site

logger = logging.getLogger(__name__)


def value_of(obj, name, default=None):
    """Read ``name`` from a mapping or an object."""
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


def format_date(value, fmt="%Y-%m-%d"):
    if not value:
        return ""
    if isinstance(value, str):
        try:
            value = isoparse(value)
        except ValueError:
            return value
    if isinstance(value, datetime):
        return value.strftime(fmt)
    return str(value)


@lru_cache(maxsize=1)
def get_env() -> Environment:
    env = Environment(
        loader=PackageLoader("sitebuilder", "templates"),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["date"] = format_date
    return env


def resolve_theme(theme_id) -> Theme:
    try:
        return get_theme(theme_id)
    except UnknownThemeError:
        logger.warning("Unknown theme %r, rendering with %r", theme_id, DEFAULT_THEME_ID)
        return get_theme(DEFAULT_THEME_ID)


def site_view(site) -> Dict[str, Any]:
    if isinstance(site, Mapping):
        return dict(site)
    return normalize_site(site)


@dataclass
class SectionContext:
    site: Dict[str, Any]
    theme: Theme
    primary_color: str
    secondary_color: str
    site_name: str
    recent_posts: Sequence[Any] = field(default_factory=tuple)
    blog_url: Optional[str] = None
    contact_url: Optional[str] = None

    @classmethod
    def for_site(cls, site, *, recent_posts=(), blog_url=None, contact_url=None) -> "SectionContext":
        view = site_view(site)
        theme = resolve_theme(view.get("theme_id"))
        return cls(
            site=view,
            theme=theme,
            primary_color=view.get("primary_color") or theme.preview.primary,
            secondary_color=view.get("secondary_color") or theme.preview.secondary,
            site_name=view.get("name") or "",
            recent_posts=tuple(recent_posts or ()),
            blog_url=blog_url,
            contact_url=contact_url,
        )

    @property
    def css_variables(self) -> Dict[str, str]:
        return theme_css_variables(self.theme, self.primary_color, self.secondary_color)

    @property
    def classes(self) -> str:
        return theme_classes(self.theme)
