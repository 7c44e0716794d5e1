import logging
from datetime import datetime, timezone

import pytest

from sitebuilder.domain.section_types import SectionType, default_content
from sitebuilder.rendering import views
from sitebuilder.rendering.blog import render_blocks, render_post, render_post_list
from sitebuilder.rendering.page import render_site
from sitebuilder.rendering.views import SECTION_VIEWS, map_embed_src

SITE = {
    "id": "site-1",
    "name": "Sunrise Academy",
    "slug": "sunrise",
    "theme_id": "default",
    "primary_color": "#3b82f6",
    "secondary_color": "#f97316",
    "phone": "03-1111-2222",
    "tagline": "Small classes",
    "instagram_url": "https://instagram.com/sunrise",
}


def _section(kind, order, content=None, visible=True, section_id=None):
    return {
        "id": section_id or f"{kind}-{order}",
        "type": kind,
        "order": order,
        "is_visible": visible,
        "content": default_content(kind) if content is None else content,
    }


def test_dispatch_covers_every_kind() -> None:
    assert set(SECTION_VIEWS) == set(SectionType)


@pytest.mark.parametrize("kind", list(SectionType))
def test_default_content_renders_for_every_kind(kind) -> None:
    html = render_site(SITE, [_section(kind.value, 1)])
    assert f'id="{kind.value}"' in html


def test_only_visible_sections_render_in_order() -> None:
    html = render_site(SITE, [
        _section("contact", 3),
        _section("hero", 1),
        _section("pricing", 2, visible=False),
    ])

    assert 'id="pricing"' not in html
    assert html.index('id="hero"') < html.index('id="contact"')


def test_header_and_footer_use_site_fields() -> None:
    html = render_site(SITE, [], blog_url="/sunrise/blog")

    assert "Sunrise Academy" in html
    assert 'href="tel:03-1111-2222"' in html
    assert 'href="/sunrise/blog"' in html
    assert "Small classes" in html
    assert "https://instagram.com/sunrise" in html
    assert "--theme-primary: #3b82f6" in html


def test_unknown_kind_renders_nothing_and_logs(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        html = render_site(SITE, [_section("hero", 1), {"id": "x", "type": "marquee", "order": 2, "content": {}}])

    assert 'id="hero"' in html
    assert "marquee" not in html
    assert "unknown type" in caplog.text


def test_incomplete_content_renders_with_fallbacks(caplog) -> None:
    broken = {"title": "Plans", "plans": [{"name": "Basic"}, "garbage", {"price": "5,000"}]}

    with caplog.at_level(logging.WARNING):
        html = render_site(SITE, [_section("pricing", 1, content=broken)])

    assert 'id="pricing"' in html
    assert "Basic" in html
    assert "5,000" in html
    assert "fallbacks" in caplog.text


def test_non_object_content_still_renders_section_shell() -> None:
    html = render_site(SITE, [_section("faq", 1, content="oops")])
    assert 'id="faq"' in html


def test_view_that_raises_is_omitted(monkeypatch, caplog) -> None:
    def explode(content, ctx):
        raise RuntimeError("boom")

    monkeypatch.setitem(views.SECTION_VIEWS, SectionType.FEATURES, explode)

    with caplog.at_level(logging.ERROR):
        html = render_site(SITE, [_section("hero", 1), _section("features", 2), _section("contact", 3)])

    assert 'id="features"' not in html
    assert 'id="hero"' in html and 'id="contact"' in html
    assert "failed to render" in caplog.text


def test_unknown_theme_falls_back_to_default(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        html = render_site(dict(SITE, theme_id="neon"), [_section("hero", 1)])

    assert "theme-default" in html
    assert "neon" in caplog.text


def test_user_content_is_escaped() -> None:
    html = render_site(SITE, [_section("hero", 1, content={"title": "<script>alert(1)</script>"})])

    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;" in html


def test_map_embed_only_allows_https_sources() -> None:
    assert map_embed_src("https://maps.example.com/embed?q=1") == "https://maps.example.com/embed?q=1"
    assert map_embed_src('<iframe width="600" src="https://maps.example.com/e"></iframe>') == "https://maps.example.com/e"
    assert map_embed_src("http://maps.example.com") is None
    assert map_embed_src("<script>x</script>") is None
    assert map_embed_src(None) is None


def test_access_section_embeds_map() -> None:
    content = dict(default_content("access"), mapEmbed='<iframe src="https://maps.example.com/e"></iframe>')
    html = render_site(SITE, [_section("access", 1, content=content)])

    assert '<iframe src="https://maps.example.com/e"' in html


def test_blog_section_lists_recent_posts() -> None:
    posts = [
        {"title": f"Post {n}", "slug": f"post-{n}", "published_at": datetime(2024, 4, n, tzinfo=timezone.utc)}
        for n in range(1, 6)
    ]
    html = render_site(
        SITE,
        [_section("blog", 1, content={"title": "News", "showCount": 2})],
        recent_posts=posts,
        blog_url="/sunrise/blog",
    )

    assert 'href="/sunrise/blog/post-1"' in html
    assert "Post 2" in html
    assert "Post 3" not in html
    assert "2024-04-01" in html


def test_contact_form_posts_to_contact_url() -> None:
    content = dict(default_content("contact"), formFields=["email"])
    html = render_site(SITE, [_section("contact", 1, content=content)], contact_url="/sunrise/contact")

    assert 'action="/sunrise/contact"' in html
    assert 'name="name"' in html
    assert 'name="email"' in html
    assert 'name="phone"' not in html


def test_blocks_render_per_kind_and_skip_unknown(caplog) -> None:
    blocks = [
        {"type": "header", "data": {"text": "Spring term", "level": 2}},
        {"type": "paragraph", "data": {"text": "Classes start <b>soon</b>."}},
        {"type": "list", "data": {"style": "ordered", "items": ["Math", "English"]}},
        {"type": "quote", "data": {"text": "Great school", "caption": "A parent"}},
        {"type": "delimiter", "data": {}},
        {"type": "image", "data": {"url": "/uploads/a.png", "caption": "Our room"}},
        {"type": "embed", "data": {"service": "youtube"}},
        {"type": "header", "data": {"level": 9}},
    ]

    with caplog.at_level(logging.WARNING):
        html = str(render_blocks(blocks))

    assert "<h2>Spring term</h2>" in html
    assert "&lt;b&gt;soon&lt;/b&gt;" in html
    assert "<ol>" in html and "<li>English</li>" in html
    assert "<cite>A parent</cite>" in html
    assert '<hr class="delimiter">' in html
    assert 'src="/uploads/a.png"' in html
    assert "youtube" not in html
    assert "unknown type" in caplog.text
    assert "malformed header" in caplog.text


def test_post_pages_render() -> None:
    post = {
        "title": "Open day",
        "slug": "open-day",
        "published_at": "2024-05-01T09:00:00+00:00",
        "content": [{"type": "paragraph", "data": {"text": "Come and visit us."}}],
    }

    single = render_post(SITE, post, blog_url="/sunrise/blog", site_url="/sunrise")
    listing = render_post_list(SITE, [post], blog_url="/sunrise/blog", site_url="/sunrise")

    assert "<h1>Open day</h1>" in single
    assert "Come and visit us." in single
    assert "2024-05-01" in single
    assert 'href="/sunrise/blog/open-day"' in listing
    assert "Come and visit us." in listing


def test_sections_missing_their_lists_still_render(caplog) -> None:
    sections = [
        _section("features", 1, content={"title": "Why us", "subtitle": 5}),
        _section("faq", 2, content={"title": "Questions", "items": "not a list"}),
        _section("results", 3, content={"title": "Results"}),
        _section("schedule", 4, content={"subtitle": "Weekly"}),
    ]

    with caplog.at_level(logging.WARNING):
        html = render_site(SITE, sections)

    for kind in ("features", "faq", "results", "schedule"):
        assert f'id="{kind}"' in html
    assert "Why us" in html
    assert "failed to render" not in caplog.text
