import logging
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.hero_settings import HeroSettings

logger = logging.getLogger(__name__)

HERO_ID = 1
DEFAULT_HERO = {
    "video_url": "/herovideo.mp4",
    "fallback_image_url": "/hero-bg.jpg",
    "is_active": True,
    "title": "RENT&BUY",
    "subtitle": "Rent the Difference",
}


def _to_dict(h: HeroSettings) -> dict:
    return {
        "id": h.id,
        "video_url": h.video_url,
        "fallback_image_url": h.fallback_image_url,
        "is_active": h.is_active,
        "title": h.title,
        "subtitle": h.subtitle,
        "updated_at": h.updated_at.isoformat() if h.updated_at else None,
    }


def get_hero(db: Session) -> dict:
    """Stored hero settings, or the built-in defaults when the row is missing or unreadable."""
    try:
        h = db.get(HeroSettings, HERO_ID)
    except SQLAlchemyError:
        logger.exception("could not read hero settings, serving defaults")
        db.rollback()
        h = None
    if not h:
        return DEFAULT_HERO.copy()
    return _to_dict(h)


def set_hero(db: Session, data: dict) -> dict:
    h = db.get(HeroSettings, HERO_ID)
    if not h:
        h = HeroSettings(id=HERO_ID)
        db.add(h)
    h.video_url = data.get("video_url")
    h.fallback_image_url = data.get("fallback_image_url")
    h.is_active = True if data.get("is_active") is None else bool(data.get("is_active"))
    h.title = data.get("title")
    h.subtitle = data.get("subtitle")
    h.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(h)
    return _to_dict(h)
