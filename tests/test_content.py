import datetime as dt

import pytest

from app.core.errors import NotFoundError, ValidationFailed
from app.services import content_service


def campaign(**extra):
    data = {"title_tr": "Yaz İndirimi", "description_tr": "Tüm araçlarda", "content_tr": "Detaylar"}
    data.update(extra)
    return data


def post(slug, **extra):
    data = {"slug": slug, "title_tr": f"Yazı {slug}", "content_tr": "İçerik", "published": True}
    data.update(extra)
    return data


def test_public_campaigns_only_active(client, db):
    content_service.create_item(db, "campaigns", campaign(title_tr="Açık"))
    content_service.create_item(db, "campaigns", campaign(title_tr="Kapalı", active=False))
    content_service.create_item(db, "campaigns", campaign(title_tr="Öne Çıkan", featured=True))

    body = client.get("/api/campaigns").json()
    assert body["success"] is True
    assert [c["title_tr"] for c in body["campaigns"]] == ["Öne Çıkan", "Açık"]

    featured = client.get("/api/campaigns", params={"featured": "true"}).json()["campaigns"]
    assert [c["title_tr"] for c in featured] == ["Öne Çıkan"]
    # featured=false does not narrow
    assert len(client.get("/api/campaigns", params={"featured": "false"}).json()["campaigns"]) == 2


def test_campaign_crud(client, admin_headers):
    assert client.post("/api/campaigns", json=campaign()).status_code == 401

    r = client.post("/api/campaigns", json=campaign(valid_until="2027-01-31", discount_percentage=15),
                    headers=admin_headers)
    assert r.status_code == 200
    created = r.json()["campaign"]
    assert created["valid_until"] == "2027-01-31"
    assert created["active"] is True

    r = client.put("/api/campaigns", json={"id": created["id"], "title_en": "Summer Sale"}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["campaign"]["title_en"] == "Summer Sale"
    assert r.json()["campaign"]["title_tr"] == "Yaz İndirimi"


def test_campaign_validation(client, admin_headers):
    r = client.post("/api/campaigns", json={"title_tr": "Eksik"}, headers=admin_headers)
    assert r.status_code == 400
    assert "description_tr" in r.json()["detail"]
    assert client.put("/api/campaigns", json={"title_en": "x"}, headers=admin_headers).status_code == 400
    assert client.put("/api/campaigns", json={"id": "nope", "title_en": "x"}, headers=admin_headers).status_code == 404
    assert client.post("/api/campaigns", json=campaign(valid_from="soon"), headers=admin_headers).status_code == 400


def test_blog_filters_and_visibility(client, db):
    content_service.create_item(db, "blog", post("kas-rehberi", category="travel"))
    content_service.create_item(db, "blog", post("taslak", published=False))
    content_service.create_item(db, "blog", post("arac-ipuclari", category="cars", featured=True))

    posts = client.get("/api/blog").json()["posts"]
    assert [p["slug"] for p in posts] == ["arac-ipuclari", "kas-rehberi"]
    assert [p["slug"] for p in client.get("/api/blog", params={"category": "travel"}).json()["posts"]] == ["kas-rehberi"]
    assert client.get("/api/blog", params={"slug": "taslak"}).json()["posts"] == []


def test_blog_duplicate_slug(client, db, admin_headers):
    content_service.create_item(db, "blog", post("tekrar"))
    assert client.post("/api/blog", json=post("tekrar"), headers=admin_headers).status_code == 409


def test_pages_by_type(client, db):
    content_service.create_item(db, "pages", {
        "page_type": "about", "slug": "hakkimizda", "title_tr": "Hakkımızda", "content_tr": "...", "published": True,
    })
    content_service.create_item(db, "pages", {
        "page_type": "terms", "slug": "kosullar", "title_tr": "Koşullar", "content_tr": "...", "published": True,
    })
    pages = client.get("/api/pages", params={"type": "about"}).json()["pages"]
    assert [p["slug"] for p in pages] == ["hakkimizda"]


def test_general_faqs_order(client, db, admin_headers):
    content_service.create_item(db, "general-faqs", {"question_tr": "İkinci", "answer_tr": "b", "display_order": 2})
    content_service.create_item(db, "general-faqs", {"question_tr": "Birinci", "answer_tr": "a", "display_order": 1})
    content_service.create_item(db, "general-faqs", {"question_tr": "Gizli", "answer_tr": "c", "published": False})
    faqs = client.get("/api/general-faqs").json()["faqs"]
    assert [f["question_tr"] for f in faqs] == ["Birinci", "İkinci"]


def test_service_faqs(client, admin_headers):
    body = {"service_type": "car-rental", "question_tr": "Depozito var mı?", "answer_tr": "Evet"}
    created = client.post("/api/faqs", json=body, headers=admin_headers).json()["faq"]
    client.post("/api/faqs", json={**body, "service_type": "boat-rental"}, headers=admin_headers)

    faqs = client.get("/api/faqs", params={"service": "car-rental"}).json()["faqs"]
    assert [f["id"] for f in faqs] == [created["id"]]
    assert len(client.get("/api/faqs").json()["faqs"]) == 2

    assert client.delete("/api/faqs", headers=admin_headers).status_code == 400
    assert client.delete("/api/faqs", params={"id": created["id"]}, headers=admin_headers).json() == {"success": True}
    assert client.delete("/api/faqs", params={"id": created["id"]}, headers=admin_headers).status_code == 404


def test_admin_content_includes_hidden(client, db, admin_headers):
    content_service.create_item(db, "blog", post("taslak", published=False))
    assert client.get("/api/admin/content/blog").status_code == 401
    posts = client.get("/api/admin/content/blog", headers=admin_headers).json()["posts"]
    assert [p["slug"] for p in posts] == ["taslak"]
    assert client.get("/api/admin/content/widgets", headers=admin_headers).status_code == 404


def test_admin_delete_content(client, db, admin_headers):
    row = content_service.create_item(db, "campaigns", campaign())
    assert client.delete(f"/api/admin/content/campaigns/{row.id}", headers=admin_headers).status_code == 200
    assert client.delete(f"/api/admin/content/campaigns/{row.id}", headers=admin_headers).status_code == 404


def test_coerce_ignores_read_only_and_unknown_fields(db):
    row = content_service.create_item(db, "campaigns", campaign(
        id="forced", created_at="2000-01-01", bogus=1, valid_from="2026-06-01", valid_until="",
    ))
    assert row.id != "forced"
    assert row.valid_from == dt.date(2026, 6, 1)
    assert row.valid_until is None


def test_update_cannot_blank_required_field(db):
    row = content_service.create_item(db, "campaigns", campaign())
    with pytest.raises(ValidationFailed):
        content_service.update_item(db, "campaigns", row.id, {"title_tr": ""})


def test_unknown_kind(db):
    with pytest.raises(NotFoundError):
        content_service.list_items(db, "widgets")
