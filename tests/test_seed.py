from app import seed
from app.core.config import settings
from app.models.car_segment import CarSegment
from app.models.service import Service, ServiceI18n
from app.services import admin_service, catalog_service, hero_service


def test_seed_is_idempotent(session_factory, monkeypatch):
    monkeypatch.setattr(settings, "SEED_ADMIN_EMAIL", "")
    seed.run(session_factory())
    seed.run(session_factory())

    db = session_factory()
    try:
        assert db.query(Service).count() == len(seed.SERVICES)
        assert db.query(ServiceI18n).count() == 4 * len(seed.SERVICES)
        assert db.query(CarSegment).count() == len(seed.SEGMENTS)
        assert hero_service.get_hero(db)["title"] == hero_service.DEFAULT_HERO["title"]
        assert admin_service.list_admins(db) == []

        titles = [s["title"] for s in catalog_service.list_services(db, "ru")]
        assert titles[0] == "Аренда автомобилей"
    finally:
        db.close()


def test_seed_creates_first_super_admin(session_factory, monkeypatch):
    monkeypatch.setattr(settings, "SEED_ADMIN_EMAIL", "Owner@Example.com")
    monkeypatch.setattr(settings, "SEED_ADMIN_PASSWORD", "long-enough-secret")
    seed.run(session_factory())

    db = session_factory()
    try:
        admin = admin_service.get_admin_by_email(db, "owner@example.com")
        assert admin is not None
        assert admin.role == "super_admin"
    finally:
        db.close()


def test_run_closes_the_session_it_is_given(session_factory, monkeypatch):
    monkeypatch.setattr(settings, "SEED_ADMIN_EMAIL", "")
    session = session_factory()
    closed = []
    monkeypatch.setattr(session, "close", lambda: closed.append(True))
    seed.run(session)
    assert closed == [True]
