import pytest

from sitebuilder.application.lookups import list_sections
from sitebuilder.application.sections.add_section import add_section
from sitebuilder.application.sections.delete_section import delete_section
from sitebuilder.application.sections.reorder_sections import reorder_sections
from sitebuilder.application.sections.set_visibility import set_section_visibility
from sitebuilder.application.sections.update_section import update_section_content
from sitebuilder.domain.errors import ContentValidationError, NotFoundError
from sitebuilder.domain.invariants.section import assert_section
from sitebuilder.domain.section_types import default_content
from sitebuilder.extensions import db


def _orders(owner, site):
    return [(s.type, s.order) for s in list_sections(owner_id=owner.id, site_id=site.id)]


def test_add_section_appends_with_default_content(owner, site) -> None:
    section = add_section(owner_id=owner.id, site_id=site.id, section_type="gallery")

    assert section.order == 5
    assert section.is_visible is True
    assert section.content == default_content("gallery")


def test_add_section_validates_content(owner, site) -> None:
    with pytest.raises(ContentValidationError):
        add_section(owner_id=owner.id, site_id=site.id, section_type="faq", content={"items": []})
    with pytest.raises(ContentValidationError):
        add_section(owner_id=owner.id, site_id=site.id, section_type="marquee")

    assert len(list_sections(owner_id=owner.id, site_id=site.id)) == 4


def test_delete_compacts_remaining_orders(owner, site) -> None:
    features = list_sections(owner_id=owner.id, site_id=site.id)[1]
    delete_section(owner_id=owner.id, section_id=features.id)

    assert _orders(owner, site) == [("hero", 1), ("pricing", 2), ("contact", 3)]


def test_orders_stay_distinct_after_mixed_operations(owner, site) -> None:
    add_section(owner_id=owner.id, site_id=site.id, section_type="faq")
    sections = list_sections(owner_id=owner.id, site_id=site.id)
    delete_section(owner_id=owner.id, section_id=sections[0].id)
    add_section(owner_id=owner.id, site_id=site.id, section_type="gallery")

    ids = [s.id for s in list_sections(owner_id=owner.id, site_id=site.id)]
    reorder_sections(owner_id=owner.id, site_id=site.id, ordered_ids=list(reversed(ids)))

    orders = [order for _, order in _orders(owner, site)]
    assert orders == [1, 2, 3, 4, 5]


def test_reorder_requires_a_full_permutation(owner, site) -> None:
    ids = [s.id for s in list_sections(owner_id=owner.id, site_id=site.id)]

    with pytest.raises(ContentValidationError):
        reorder_sections(owner_id=owner.id, site_id=site.id, ordered_ids=ids[:-1])
    with pytest.raises(ContentValidationError):
        reorder_sections(owner_id=owner.id, site_id=site.id, ordered_ids=ids + [ids[0]])

    reorder_sections(owner_id=owner.id, site_id=site.id, ordered_ids=[ids[3], ids[0], ids[1], ids[2]])
    assert [t for t, _ in _orders(owner, site)] == ["contact", "hero", "features", "pricing"]


def test_hiding_keeps_order_and_content(owner, site) -> None:
    pricing = list_sections(owner_id=owner.id, site_id=site.id)[2]
    content = dict(pricing.content)

    set_section_visibility(owner_id=owner.id, section_id=pricing.id, visible=False)

    assert pricing.is_visible is False
    assert pricing.order == 3
    assert pricing.content == content


def test_update_content_rejects_invalid_payloads(owner, site) -> None:
    hero = list_sections(owner_id=owner.id, site_id=site.id)[0]
    original = dict(hero.content)

    with pytest.raises(ContentValidationError):
        update_section_content(owner_id=owner.id, section_id=hero.id, content={"title": ""})

    assert hero.content == original


def test_sections_of_other_owners_are_not_found(other_owner, owner, site) -> None:
    hero = list_sections(owner_id=owner.id, site_id=site.id)[0]

    with pytest.raises(NotFoundError):
        delete_section(owner_id=other_owner.id, section_id=hero.id)
    with pytest.raises(NotFoundError):
        list_sections(owner_id=other_owner.id, site_id=site.id)


def test_sections_api(client, owner, site, auth_headers) -> None:
    base = f"/api/v1/sites/{site.id}/sections"

    response = client.post(base, json={"type": "faq"}, headers=auth_headers)
    assert response.status_code == 201
    faq = response.get_json()
    assert faq["order"] == 5

    response = client.put(
        f"/api/v1/sections/{faq['id']}",
        json={"content": {"title": "Questions", "items": [{"question": "Fees?", "answer": "See pricing"}]}},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.get_json()["content"]["title"] == "Questions"

    response = client.post(
        f"/api/v1/sections/{faq['id']}/visibility", json={"is_visible": False}, headers=auth_headers
    )
    assert response.get_json()["is_visible"] is False

    ids = [s["id"] for s in client.get(base, headers=auth_headers).get_json()["items"]]
    response = client.post(f"{base}/reorder", json={"order": [ids[-1]] + ids[:-1]}, headers=auth_headers)
    assert [s["order"] for s in response.get_json()["items"]] == [1, 2, 3, 4, 5]
    assert response.get_json()["items"][0]["id"] == faq["id"]

    assert client.delete(f"/api/v1/sections/{faq['id']}", headers=auth_headers).status_code == 200
    remaining = client.get(base, headers=auth_headers).get_json()["items"]
    assert [s["order"] for s in remaining] == [1, 2, 3, 4]


def test_sections_api_rejects_bad_content(client, site, owner, auth_headers) -> None:
    hero = list_sections(owner_id=owner.id, site_id=site.id)[0]

    response = client.put(
        f"/api/v1/sections/{hero.id}", json={"content": {"title": "Hi", "ctaLink": "javascript:alert(1)"}},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.get_json()["fields"][0]["field"] == "ctaLink"


def test_section_invariant_rejects_invalid_stored_content(owner, site) -> None:
    hero = list_sections(owner_id=owner.id, site_id=site.id)[0]
    assert_section(hero)

    hero.content = {"subtitle": "title is missing"}
    with pytest.raises(ContentValidationError):
        assert_section(hero)
    db.session.rollback()
