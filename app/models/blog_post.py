from sqlalchemy import String, DateTime, Boolean, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from app.db.session import Base

class BlogPost(Base):
    __tablename__ = "blog_posts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    slug: Mapped[str] = mapped_column(String(200), unique=True, index=True)

    title_tr: Mapped[str] = mapped_column(String(300))
    title_en: Mapped[str | None] = mapped_column(String(300), nullable=True)
    title_ru: Mapped[str | None] = mapped_column(String(300), nullable=True)
    title_ar: Mapped[str | None] = mapped_column(String(300), nullable=True)
    excerpt_tr: Mapped[str | None] = mapped_column(Text, nullable=True)
    excerpt_en: Mapped[str | None] = mapped_column(Text, nullable=True)
    excerpt_ru: Mapped[str | None] = mapped_column(Text, nullable=True)
    excerpt_ar: Mapped[str | None] = mapped_column(Text, nullable=True)
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

    featured_image: Mapped[str | None] = mapped_column(String(500), nullable=True)
    category: Mapped[str | None] = mapped_column(String(80), nullable=True, index=True)
    tags: Mapped[list] = mapped_column(JSON, default=list)

    published: Mapped[bool] = mapped_column(Boolean, default=False)
    featured: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
