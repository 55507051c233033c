from sqlalchemy import String, DateTime, Boolean, Text
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from app.db.session import Base

class Page(Base):
    __tablename__ = "pages"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    page_type: Mapped[str] = mapped_column(String(40), index=True)  # about, terms, privacy, landing ...
    slug: Mapped[str] = mapped_column(String(200), index=True)

    title_tr: Mapped[str] = mapped_column(String(300))
    title_en: Mapped[str | None] = mapped_column(String(300), nullable=True)
    title_ru: Mapped[str | None] = mapped_column(String(300), nullable=True)
    title_ar: Mapped[str | None] = mapped_column(String(300), nullable=True)
    content_tr: Mapped[str] = mapped_column(Text)
    content_en: Mapped[str | None] = mapped_column(Text, nullable=True)
    content_ru: Mapped[str | None] = mapped_column(Text, nullable=True)
    content_ar: Mapped[str | None] = mapped_column(Text, nullable=True)
    meta_title_tr: Mapped[str | None] = mapped_column(String(300), nullable=True)
    meta_title_en: Mapped[str | None] = mapped_column(String(300), nullable=True)
    meta_title_ru: Mapped[str | None] = mapped_column(String(300), nullable=True)
    meta_title_ar: Mapped[str | None] = mapped_column(String(300), nullable=True)
    meta_description_tr: Mapped[str | None] = mapped_column(String(500), nullable=True)
    meta_description_en: Mapped[str | None] = mapped_column(String(500), nullable=True)
    meta_description_ru: Mapped[str | None] = mapped_column(String(500), nullable=True)
    meta_description_ar: Mapped[str | None] = mapped_column(String(500), nullable=True)

    published: Mapped[bool] = mapped_column(Boolean, default=False)
    featured: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
