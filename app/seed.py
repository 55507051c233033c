import logging
import uuid

from sqlalchemy import text
from sqlalchemy.exc import OperationalError, ProgrammingError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import SessionLocal
from app.models.car_segment import CarSegment, CarSegmentI18n
from app.models.service import Service, ServiceI18n
from app.services import admin_service, hero_service

logger = logging.getLogger(__name__)

# slug, name, icon, {locale: (title, localized slug)}
SERVICES = [
    ("car-rental", "Car Rental", "car", {
        "tr": ("Araç Kiralama", "arac-kiralama"),
        "en": ("Car Rental", "car-rental"),
        "ru": ("Аренда автомобилей", "arenda-avtomobiley"),
        "ar": ("تأجير السيارات", "car-rental"),
    }),
    ("vip-transfer", "VIP Transfer", "plane", {
        "tr": ("VIP Transfer", "vip-transfer"),
        "en": ("VIP Transfer", "vip-transfer"),
        "ru": ("VIP трансфер", "vip-transfer"),
        "ar": ("نقل VIP", "vip-transfer"),
    }),
    ("boat-rental", "Boat Rental", "anchor", {
        "tr": ("Tekne Kiralama", "tekne-kiralama"),
        "en": ("Boat Rental", "boat-rental"),
        "ru": ("Аренда яхт", "boat-rental"),
        "ar": ("تأجير القوارب", "boat-rental"),
    }),
    ("villa-rental", "Villa Rental", "home", {
        "tr": ("Villa Kiralama", "villa-kiralama"),
        "en": ("Villa Rental", "villa-rental"),
        "ru": ("Аренда вилл", "villa-rental"),
        "ar": ("تأجير الفلل", "villa-rental"),
    }),
    ("apart-rental", "Apart Rental", "building", {
        "tr": ("Apart Kiralama", "apart-kiralama"),
        "en": ("Apartment Rental", "apartment-rental"),
        "ru": ("Аренда апартаментов", "apart-rental"),
        "ar": ("تأجير الشقق", "apart-rental"),
    }),
    ("properties-for-sale", "Properties for Sale", "building", {
        "tr": ("Satılık Konutlar", "satilik-konutlar"),
        "en": ("Properties for Sale", "properties-for-sale"),
        "ru": ("Недвижимость на продажу", "nedvizhimost-na-prodazhu"),
        "ar": ("عقارات للبيع", "aqarat-lilbay"),
    }),
]

SEGMENTS = [
    ("economic", {"tr": "Ekonomik", "en": "Economy", "ru": "Эконом", "ar": "اقتصادي"}),
    ("mid-class", {"tr": "Orta Sınıf", "en": "Mid-class", "ru": "Средний класс", "ar": "الفئة المتوسطة"}),
    ("comfort", {"tr": "Konfor", "en": "Comfort", "ru": "Комфорт", "ar": "مريحة"}),
    ("premium", {"tr": "Premium", "en": "Premium", "ru": "Премиум", "ar": "فاخرة"}),
    ("atv-jeep", {"tr": "ATV & Jeep", "en": "ATV & Jeep", "ru": "ATV и джипы", "ar": "ATV وجيب"}),
]


def ensure_services(db: Session) -> int:
    created = 0
    for order, (slug, name, icon, translations) in enumerate(SERVICES):
        s = db.query(Service).filter(Service.slug == slug).first()
        if not s:
            s = Service(id=str(uuid.uuid4()), slug=slug, name=name, icon=icon, sort_order=order, active=True)
            db.add(s)
            db.flush()
            created += 1
        existing = {tr.locale for tr in db.query(ServiceI18n).filter(ServiceI18n.service_id == s.id).all()}
        for locale, (title, localized_slug) in translations.items():
            if locale not in existing:
                db.add(ServiceI18n(
                    id=str(uuid.uuid4()), service_id=s.id, locale=locale, title=title, slug=localized_slug,
                ))
    db.commit()
    return created


def ensure_segments(db: Session) -> int:
    created = 0
    for order, (slug, titles) in enumerate(SEGMENTS):
        seg = db.query(CarSegment).filter(CarSegment.slug == slug).first()
        if not seg:
            seg = CarSegment(id=str(uuid.uuid4()), slug=slug, sort_order=order)
            db.add(seg)
            db.flush()
            created += 1
        existing = {tr.locale for tr in db.query(CarSegmentI18n).filter(CarSegmentI18n.segment_id == seg.id).all()}
        for locale, title in titles.items():
            if locale not in existing:
                db.add(CarSegmentI18n(id=str(uuid.uuid4()), segment_id=seg.id, locale=locale, title=title))
    db.commit()
    return created


def ensure_hero(db: Session) -> None:
    if "id" not in hero_service.get_hero(db):
        hero_service.set_hero(db, hero_service.DEFAULT_HERO)


def ensure_admin(db: Session) -> None:
    if not settings.SEED_ADMIN_EMAIL or not settings.SEED_ADMIN_PASSWORD:
        return
    if admin_service.get_admin_by_email(db, settings.SEED_ADMIN_EMAIL):
        return
    admin_service.upsert_admin(
        db, settings.SEED_ADMIN_EMAIL, settings.SEED_ADMIN_PASSWORD, settings.SEED_ADMIN_NAME, "super_admin"
    )
    logger.info("seeded super_admin %s", settings.SEED_ADMIN_EMAIL)


def run(db=None):
    if db is None:
        db = SessionLocal()
    try:
        # If migrations haven't been applied yet, seeding must not crash the API.
        try:
            db.execute(text("SELECT 1 FROM services LIMIT 1"))
        except (ProgrammingError, OperationalError):
            db.rollback()
            logger.warning("services table not found yet. Skipping seeding (run alembic upgrade head).")
            return

        services = ensure_services(db)
        segments = ensure_segments(db)
        ensure_hero(db)
        ensure_admin(db)
        logger.info("seed done: %d services, %d car segments created", services, segments)
    finally:
        db.close()


if __name__ == "__main__":
    from app.core.logging import configure_logging

    configure_logging(settings.LOG_LEVEL)
    run()
