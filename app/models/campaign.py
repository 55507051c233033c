from sqlalchemy import String, Integer, DateTime, Boolean, Text, Date, Numeric
from sqlalchemy.orm import Mapped, mapped_column
import datetime as dt
from app.db.session import Base

def _now():
    return dt.datetime.now(dt.timezone.utc)

class Campaign(Base):
    __tablename__ = "campaigns"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    title_tr: Mapped[str] = mapped_column(String(200))
    title_en: Mapped[str | None] = mapped_column(String(200), nullable=True)
    title_ru: Mapped[str | None] = mapped_column(String(200), nullable=True)
    title_ar: Mapped[str | None] = mapped_column(String(200), nullable=True)
    description_tr: Mapped[str] = mapped_column(Text)
    description_en: Mapped[str | None] = mapped_column(Text, nullable=True)
    description_ru: Mapped[str | None] = mapped_column(Text, nullable=True)
    description_ar: Mapped[str | None] = mapped_column(Text, nullable=True)
    content_tr: Mapped[str] = mapped_column(Text)
    content_en: Mapped[str | None] = mapped_column(Text, nullable=True)
    content_ru: Mapped[str | None] = mapped_column(Text, nullable=True)
    content_ar: Mapped[str | None] = mapped_column(Text, nullable=True)

    discount_percentage: Mapped[int | None] = mapped_column(Integer, nullable=True)
    discount_amount: Mapped[float | None] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=True)
    valid_from: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    valid_until: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    campaign_code: Mapped[str | None] = mapped_column(String(40), nullable=True)

    active: Mapped[bool] = mapped_column(Boolean, default=True)
    featured: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=_now)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=_now)
