from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from app.services import hero_service


def test_defaults_when_no_row(client):
    assert client.get("/api/hero").json() == hero_service.DEFAULT_HERO


def test_update_requires_admin(client):
    assert client.put("/api/hero", json={"title": "x"}).status_code == 401


def test_update_and_read_back(client, admin_headers):
    body = {
        "video_url": "/storage/v1/object/public/services/hero.mp4",
        "fallback_image_url": None,
        "is_active": False,
        "title": "Antalya",
        "subtitle": "Kirala, satın al",
    }
    r = client.put("/api/hero", json=body, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["hero"]["id"] == hero_service.HERO_ID

    hero = client.get("/api/hero").json()
    for key, value in body.items():
        assert hero[key] == value


def test_single_row(db):
    hero_service.set_hero(db, {"title": "one"})
    hero_service.set_hero(db, {"title": "two"})
    assert hero_service.get_hero(db)["title"] == "two"
    assert hero_service.get_hero(db)["is_active"] is True


def test_datastore_error_serves_defaults():
    db = MagicMock()
    db.get.side_effect = OperationalError("SELECT", {}, Exception("relation does not exist"))
    assert hero_service.get_hero(db) == hero_service.DEFAULT_HERO
    db.rollback.assert_called_once()
