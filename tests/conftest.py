import os
import tempfile

# Settings are read at import time: configure before anything from app is imported.
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SERVICE_DATABASE_URL"] = ""
os.environ["STORAGE_BACKEND"] = "local"
os.environ["STORAGE_LOCAL_DIR"] = tempfile.mkdtemp(prefix="rentbuy-storage-")
os.environ["PUBLIC_BASE_URL"] = ""

import datetime as dt

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.core.security import CUSTOMER_SCOPE
from app.db.session import Base, get_db, get_service_db
from app.services import admin_service, customer_service, storage_service
from tests.factories import auth_headers, make_listing, make_service


@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    def _override():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override
    app.dependency_overrides[get_service_db] = _override
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def storage_dir(tmp_path):
    storage_service.set_backend(storage_service.LocalStorage(str(tmp_path)))
    yield tmp_path
    storage_service.set_backend(None)


@pytest.fixture()
def today():
    return dt.date.today()


@pytest.fixture()
def car_rental(db):
    return make_service(db, "car-rental", name="Car Rental", titles={
        "tr": "Araç Kiralama", "en": "Car Rental", "ru": "Аренда автомобилей", "ar": "تأجير السيارات",
    })


@pytest.fixture()
def listing(db, car_rental):
    return make_listing(
        db, car_rental, "fiat-egea", name="Fiat Egea", price_per_day=50.0,
        translations={"tr": {"title": "Fiat Egea Dizel", "slug": "fiat-egea-dizel"}},
    )


@pytest.fixture()
def admin_user(db):
    admin, _ = admin_service.upsert_admin(db, "admin@example.com", "correct-horse", "Site Admin", "admin")
    return admin


@pytest.fixture()
def super_admin(db):
    admin, _ = admin_service.upsert_admin(db, "root@example.com", "correct-horse", "Root", "super_admin")
    return admin


@pytest.fixture()
def admin_headers(admin_user):
    return auth_headers(admin_user.id)


@pytest.fixture()
def customer(db):
    return customer_service.signup(db, "ayse@example.com", "secret1", "Ayşe Yılmaz", "+90 555 111 2233")


@pytest.fixture()
def customer_headers(customer):
    return auth_headers(customer.id, CUSTOMER_SCOPE)
