import datetime as dt

from app.core.config import settings
from app.core.i18n import t
from app.models.listing import Listing
from app.models.reservation import Reservation
from app.services import content_service
from tests.factories import make_reservation, make_service

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def days(n):
    return (dt.date.today() + dt.timedelta(days=n)).isoformat()


# public site

def test_root_redirects_to_default_locale(client):
    r = client.get("/", follow_redirects=False)
    assert r.status_code == 307
    assert r.headers["location"] == "/tr"


def test_unknown_locale_is_404(client):
    assert client.get("/de").status_code == 404


def test_home(client, db, car_rental):
    content_service.create_item(db, "campaigns", {
        "title_tr": "Yaz", "title_en": "Summer", "description_tr": "d", "content_tr": "c", "featured": True,
    })
    r = client.get("/en")
    assert r.status_code == 200
    assert "Car Rental" in r.text
    assert "Summer" in r.text
    assert 'dir="ltr"' in r.text


def test_arabic_pages_are_rtl(client, car_rental):
    r = client.get("/ar")
    assert 'dir="rtl"' in r.text
    assert "تأجير السيارات" in r.text


def test_catalog_page(client, listing):
    r = client.get("/tr/arac-kiralama")
    assert r.status_code == 200
    assert "Fiat Egea Dizel" in r.text
    assert 'href="/tr/arac-kiralama/fiat-egea"' in r.text
    assert client.get("/tr/space-travel").status_code == 404


def test_listing_page(client, listing):
    r = client.get("/en/car-rental/fiat-egea")
    assert r.status_code == 200
    assert "Fiat Egea" in r.text
    assert t("en", "reservation.submit") in r.text
    assert client.get("/en/car-rental/missing").status_code == 404
    assert client.get("/en/listings/fiat-egea-dizel").status_code == 200


def test_reservation_form(client, db, listing):
    form = {
        "customer_name": "Ali Veli",
        "customer_email": "ali@example.com",
        "customer_phone": "+90 555 123 4567",
        "start_date": days(3),
        "end_date": days(5),
        "guests_count": "2",
    }
    r = client.post("/en/car-rental/fiat-egea", data=form)
    assert r.status_code == 200
    assert t("en", "reservation.success") in r.text
    assert db.query(Reservation).count() == 1

    r = client.post("/en/car-rental/fiat-egea", data=form)
    assert r.status_code == 409
    assert t("en", "reservation.conflict") in r.text
    assert db.query(Reservation).count() == 1


def test_reservation_form_validation(client, listing):
    r = client.post("/tr/car-rental/fiat-egea", data={"customer_name": "Ali"})
    assert r.status_code == 400
    assert 'value="Ali"' in r.text


def test_blog_pages(client, db):
    content_service.create_item(db, "blog", {
        "slug": "kas-rehberi", "title_tr": "Kaş Rehberi", "title_en": "Kas Guide", "content_tr": "Metin",
        "published": True,
    })
    assert "Kas Guide" in client.get("/en/blog").text
    assert client.get("/en/blog/kas-rehberi").status_code == 200
    assert client.get("/en/blog/missing").status_code == 404


def test_faq_page(client, db, car_rental):
    content_service.create_item(db, "general-faqs", {"question_tr": "Ödeme nasıl?", "answer_tr": "Nakit"})
    content_service.create_item(db, "faqs", {
        "service_type": "car-rental", "question_tr": "Depozito?", "question_en": "Deposit?", "answer_tr": "Evet",
    })
    r = client.get("/en/sss")
    assert r.status_code == 200
    assert "Ödeme nasıl?" in r.text
    assert "Deposit?" in r.text


def test_campaigns_page_empty(client):
    r = client.get("/ru/kampanyalar")
    assert r.status_code == 200
    assert t("ru", "campaigns.empty") in r.text


def test_signup_login_profile(client, db, listing):
    make_reservation(db, listing, dt.date.today(), dt.date.today() + dt.timedelta(days=1), email="zeynep@example.com")

    assert client.get("/tr/profile", follow_redirects=False).headers["location"] == "/tr/auth"

    r = client.post("/tr/auth", data={"mode": "signup", "email": "zeynep@example.com", "password": "secret1",
                                      "full_name": "Zeynep"}, follow_redirects=False)
    assert r.status_code == 303
    assert settings.CUSTOMER_COOKIE_NAME in r.cookies

    profile = client.get("/tr/profile")
    assert profile.status_code == 200
    assert "zeynep@example.com" in profile.text
    assert "Fiat Egea" in profile.text

    client.get("/tr/logout")
    assert client.get("/tr/profile", follow_redirects=False).status_code == 303
    r = client.post("/tr/auth", data={"mode": "login", "email": "zeynep@example.com", "password": "wrong"})
    assert r.status_code == 400


# back office

def admin_login(client, password="correct-horse"):
    return client.post("/admin", data={"email": "admin@example.com", "password": password}, follow_redirects=False)


def test_admin_pages_need_login(client):
    for path in ("/admin/dashboard", "/admin/listings", "/admin/reservations", "/admin/faq", "/admin/settings"):
        r = client.get(path, follow_redirects=False)
        assert r.status_code == 303, path
        assert r.headers["location"] == "/admin"


def test_admin_login_page(client, admin_user):
    assert client.get("/admin").status_code == 200
    assert admin_login(client, password="nope").status_code == 401
    r = admin_login(client)
    assert r.status_code == 303
    assert r.headers["location"] == "/admin/dashboard"
    assert client.get("/admin/dashboard").status_code == 200


def test_admin_listing_form(client, db, car_rental, admin_user):
    admin_login(client)
    r = client.post("/admin/listings/car-rental", data={
        "name": "Renault Clio",
        "price_per_day": "45",
        "active": "on",
        "features": "Klima\nDizel\n",
        "title_en": "Renault Clio Diesel",
    }, follow_redirects=False)
    assert r.status_code == 303
    clio = db.query(Listing).filter(Listing.slug == "renault-clio").one()
    assert clio.features == ["Klima", "Dizel"]
    assert clio.price_per_day == 45.0

    assert client.get(f"/admin/listings/car-rental/{clio.id}/edit").status_code == 200
    r = client.post("/admin/listings/car-rental", data={"name": "Renault Clio"})
    assert r.status_code == 409

    client.post(f"/admin/listings/car-rental/{clio.id}/delete")
    assert db.query(Listing).filter(Listing.slug == "renault-clio").count() == 0


def test_admin_listing_form_uploads_and_details(client, db, storage_dir, admin_user):
    make_service(db, "villa-rental")
    admin_login(client)
    assert 'name="meta_bedrooms"' in client.get("/admin/listings/villa-rental").text

    r = client.post(
        "/admin/listings/villa-rental",
        data={"name": "Villa Kalkan", "meta_bedrooms": "4", "meta_area": "210.5", "meta_pool": "on"},
        files=[("image_files", ("pool.png", PNG, "image/png")), ("image_files", ("garden.png", PNG, "image/png"))],
        follow_redirects=False,
    )
    assert r.status_code == 303
    villa = db.query(Listing).filter(Listing.slug == "villa-kalkan").one()
    assert villa.meta == {"bedrooms": 4, "area": 210.5, "pool": True, "seaView": False}
    assert len(villa.storage_paths) == 2
    for path in villa.storage_paths:
        assert (storage_dir / "listings" / path).read_bytes() == PNG

    villa.meta = {**villa.meta, "routes": ["Kalkan - Kaş"]}
    db.commit()
    keep = villa.storage_paths[0]
    r = client.post(
        f"/admin/listings/villa-rental/{villa.id}",
        data={"name": "Villa Kalkan", "storage_paths": keep, "meta_bedrooms": "5"},
        follow_redirects=False,
    )
    assert r.status_code == 303
    db.expire_all()
    villa = db.get(Listing, villa.id)
    assert villa.storage_paths == [keep]
    assert villa.meta == {"bedrooms": 5, "pool": False, "seaView": False, "routes": ["Kalkan - Kaş"]}


def test_admin_listing_form_rejects_bad_upload(client, db, storage_dir, admin_user):
    make_service(db, "villa-rental")
    admin_login(client)
    r = client.post(
        "/admin/listings/villa-rental",
        data={"name": "Villa Patara"},
        files={"image_files": ("notes.txt", b"hello", "text/plain")},
    )
    assert r.status_code == 400
    assert db.query(Listing).filter(Listing.slug == "villa-patara").count() == 0


def test_admin_reservation_status(client, db, listing, admin_user):
    res = make_reservation(db, listing, dt.date.today(), dt.date.today() + dt.timedelta(days=2))
    admin_login(client)
    page = client.get("/admin/reservations")
    assert page.status_code == 200
    assert "Guest" in page.text

    r = client.post(f"/admin/reservations/{res.id}/status", data={"status": "confirmed"}, follow_redirects=False)
    assert r.status_code == 303
    db.refresh(res)
    assert res.status == "confirmed"
    assert client.post(f"/admin/reservations/{res.id}/status", data={"status": "pending"}).status_code == 400


def test_admin_availability(client, listing, admin_user):
    admin_login(client)
    r = client.post("/admin/availability", data={
        "listing_id": listing.id, "date": days(2), "price": "70", "min_nights": "2",
    }, follow_redirects=False)
    assert r.status_code == 303
    page = client.get("/admin/availability", params={"listing_id": listing.id})
    assert days(2) in page.text


def test_admin_faq_and_content(client, db, car_rental, admin_user):
    admin_login(client)
    client.post("/admin/faq", data={"service_type": "car-rental", "question_tr": "Yakıt?", "answer_tr": "Dolu"})
    client.post("/admin/faq", data={"service_type": "", "question_tr": "Rezervasyon?", "answer_tr": "Online"})
    assert [f.question_tr for f in content_service.list_items(db, "faqs")] == ["Yakıt?"]
    assert [f.question_tr for f in content_service.list_items(db, "general-faqs")] == ["Rezervasyon?"]
    assert client.post("/admin/faq", data={"service_type": "car-rental"}).status_code == 400

    faq = content_service.list_items(db, "faqs")[0]
    r = client.post(f"/admin/content/faqs/{faq.id}/delete", follow_redirects=False)
    assert r.headers["location"] == "/admin/faq"
    assert content_service.list_items(db, "faqs") == []
    assert client.get("/admin/content").status_code == 200


def test_admin_settings(client, admin_user):
    admin_login(client)
    r = client.post("/admin/settings", data={"title": "Yeni Başlık", "video_url": "/v.mp4", "is_active": "on"})
    assert r.status_code == 200
    assert client.get("/api/hero").json()["title"] == "Yeni Başlık"
