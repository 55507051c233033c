import datetime as dt

import pytest

from app.core.errors import NotFoundError, ValidationFailed
from app.models.availability import ListingAvailability
from app.services import availability_service
from tests.factories import make_reservation


def days(n):
    return dt.date.today() + dt.timedelta(days=n)


def test_listing_id_is_required(client):
    r = client.get("/api/availability")
    assert r.status_code == 400
    assert r.json()["detail"] == "listing_id is required"


def test_writes_require_admin(client, listing):
    body = {"listing_id": listing.id, "date": days(1).isoformat()}
    assert client.post("/api/availability", json=body).status_code == 401
    assert client.put("/api/availability", json={"listing_id": listing.id, "updates": [body]}).status_code == 401


def test_upsert_is_idempotent_per_date(client, db, listing, admin_headers):
    body = {"listing_id": listing.id, "date": days(2).isoformat(), "is_available": False, "notes": "service"}
    r = client.post("/api/availability", json=body, headers=admin_headers)
    assert r.status_code == 200
    first = r.json()["availability"]
    assert first["is_available"] is False
    assert first["min_nights"] == 1

    body.update(is_available=True, price=75.5, min_nights=3)
    second = client.post("/api/availability", json=body, headers=admin_headers).json()["availability"]
    assert second["id"] == first["id"]
    assert second["price"] == 75.5
    assert second["min_nights"] == 3
    assert db.query(ListingAvailability).count() == 1


def test_upsert_validation(client, admin_headers, listing):
    assert client.post("/api/availability", json={"listing_id": listing.id}, headers=admin_headers).status_code == 400
    r = client.post("/api/availability", json={"listing_id": "nope", "date": days(1).isoformat()},
                    headers=admin_headers)
    assert r.status_code == 404


def test_bulk_update(client, listing, admin_headers):
    updates = [
        {"date": days(3).isoformat(), "is_available": False},
        {"date": days(1).isoformat(), "price": 60},
        {"date": days(3).isoformat(), "is_available": True, "price": 90},
    ]
    r = client.put("/api/availability", json={"listing_id": listing.id, "updates": updates}, headers=admin_headers)
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["updated_count"] == 2
    assert [a["date"] for a in body["availability"]] == [days(1).isoformat(), days(3).isoformat()]
    # last write wins for a repeated date
    assert body["availability"][1]["is_available"] is True
    assert body["availability"][1]["price"] == 90


def test_bulk_update_validation(client, listing, admin_headers):
    assert client.put("/api/availability", json={"listing_id": listing.id, "updates": []},
                      headers=admin_headers).status_code == 400
    assert client.put("/api/availability", json={"updates": [{"date": days(1).isoformat()}]},
                      headers=admin_headers).status_code == 400


def test_bulk_accepts_plain_dicts_with_iso_strings(db, listing):
    rows = availability_service.bulk_upsert_availability(db, listing.id, [{"date": days(4).isoformat()}])
    assert rows[0].date == days(4)
    with pytest.raises(ValidationFailed):
        availability_service.bulk_upsert_availability(db, listing.id, [{"date": "someday"}])
    with pytest.raises(NotFoundError):
        availability_service.bulk_upsert_availability(db, "missing", [{"date": days(4)}])


def test_get_returns_rows_and_blocking_reservations(client, db, listing):
    availability_service.upsert_availability(db, listing.id, days(1), is_available=False)
    availability_service.upsert_availability(db, listing.id, days(40))
    make_reservation(db, listing, days(2), days(4), status="pending")
    make_reservation(db, listing, days(5), days(6), status="cancelled")
    make_reservation(db, listing, days(50), days(52), status="confirmed")

    r = client.get("/api/availability", params={
        "listing_id": listing.id, "start_date": days(0).isoformat(), "end_date": days(30).isoformat(),
    })
    assert r.status_code == 200
    body = r.json()
    assert [a["date"] for a in body["availability"]] == [days(1).isoformat()]
    assert body["reservations"] == [
        {"start_date": days(2).isoformat(), "end_date": days(4).isoformat(), "status": "pending"},
    ]
