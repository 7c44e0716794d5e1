from datetime import timedelta

import pytest

from sitebuilder.application.blog.create_post import create_post
from sitebuilder.application.blog.publish_post import set_post_published
from sitebuilder.application.blog.queries import get_public_post, list_posts, list_public_posts
from sitebuilder.application.blog.update_post import update_post
from sitebuilder.domain.blog_blocks import normalize_blocks, validate_blocks
from sitebuilder.domain.errors import ConflictError, ContentValidationError, NotFoundError
from sitebuilder.extensions import db


def test_create_post_defaults_to_untitled_draft(owner, site) -> None:
    post = create_post(owner_id=owner.id, site_id=site.id)

    assert post.title == "Untitled"
    assert post.slug == "untitled"
    assert post.is_published is False
    assert post.published_at is None
    assert post.content == []


def test_post_slug_is_unique_per_site(owner, site) -> None:
    create_post(owner_id=owner.id, site_id=site.id, title="Open Day")

    with pytest.raises(ConflictError):
        create_post(owner_id=owner.id, site_id=site.id, title="Open Day")

    second = create_post(owner_id=owner.id, site_id=site.id, title="Open Day", slug="open-day-2")
    with pytest.raises(ConflictError):
        update_post(owner_id=owner.id, post_id=second.id, data={"slug": "open-day"})


def test_invalid_blocks_are_rejected(owner, site) -> None:
    with pytest.raises(ContentValidationError) as exc:
        create_post(
            owner_id=owner.id,
            site_id=site.id,
            title="Bad",
            content=[{"type": "header", "data": {"text": "x", "level": 7}}],
        )
    assert exc.value.errors[0].field.startswith("content.0")


def test_block_validation() -> None:
    assert validate_blocks([{"type": "delimiter", "data": {}}]) == []
    assert validate_blocks("text")[0].field == "content"
    assert validate_blocks([{"type": "video", "data": {}}])

    normalized = normalize_blocks([{"id": "abc", "type": "paragraph", "data": {"text": "Hi"}}])
    assert normalized == [{"id": "abc", "type": "paragraph", "data": {"text": "Hi"}}]


def test_publish_stamps_and_unpublish_clears(owner, site) -> None:
    post = create_post(owner_id=owner.id, site_id=site.id, title="News")

    set_post_published(owner_id=owner.id, post_id=post.id, published=True)
    assert post.is_published is True
    stamped = post.published_at
    assert stamped is not None

    set_post_published(owner_id=owner.id, post_id=post.id, published=True)
    assert post.published_at == stamped

    set_post_published(owner_id=owner.id, post_id=post.id, published=False)
    assert post.is_published is False
    assert post.published_at is None


def test_public_list_shows_only_published_newest_first(owner, site) -> None:
    older = create_post(owner_id=owner.id, site_id=site.id, title="Older")
    newer = create_post(owner_id=owner.id, site_id=site.id, title="Newer")
    draft = create_post(owner_id=owner.id, site_id=site.id, title="Draft")

    set_post_published(owner_id=owner.id, post_id=newer.id, published=True)
    set_post_published(owner_id=owner.id, post_id=older.id, published=True)
    older.published_at = newer.published_at - timedelta(days=3)
    db.session.commit()

    assert [p.id for p in list_public_posts(site)] == [newer.id, older.id]
    assert draft.id in [p.id for p in list_posts(owner_id=owner.id, site_id=site.id)]

    with pytest.raises(NotFoundError):
        get_public_post(site, draft.slug)
    assert get_public_post(site, "newer").id == newer.id


def test_blog_api(client, site, auth_headers) -> None:
    response = client.post(
        f"/api/v1/sites/{site.id}/posts",
        json={"title": "Summer Camp", "content": [{"type": "paragraph", "data": {"text": "Join us"}}]},
        headers=auth_headers,
    )
    assert response.status_code == 201
    post = response.get_json()
    assert post["slug"] == "summer-camp"

    response = client.put(f"/api/v1/posts/{post['id']}", json={"title": "Summer Camp 2024"}, headers=auth_headers)
    assert response.get_json()["title"] == "Summer Camp 2024"

    response = client.post(f"/api/v1/posts/{post['id']}/publish", headers=auth_headers)
    assert response.get_json()["published_at"] is not None

    listed = client.get(f"/api/v1/sites/{site.id}/posts", headers=auth_headers).get_json()["items"]
    assert [p["id"] for p in listed] == [post["id"]]
    assert "content" not in listed[0]

    assert client.delete(f"/api/v1/posts/{post['id']}", headers=auth_headers).status_code == 200
    assert client.get(f"/api/v1/posts/{post['id']}", headers=auth_headers).status_code == 404


def test_posts_of_other_owners_are_hidden(client, owner, site, other_headers) -> None:
    post = create_post(owner_id=owner.id, site_id=site.id, title="Private")

    assert client.get(f"/api/v1/posts/{post.id}", headers=other_headers).status_code == 404
    assert client.get(f"/api/v1/sites/{site.id}/posts", headers=other_headers).status_code == 404
