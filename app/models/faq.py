from sqlalchemy import String, Integer, DateTime, Boolean, Text
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from app.db.session import Base

class GeneralFaq(Base):
    """Site-wide FAQ shown on the /sss page."""
    __tablename__ = "general_faqs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    question_tr: Mapped[str] = mapped_column(Text)
    question_en: Mapped[str | None] = mapped_column(Text, nullable=True)
    question_ru: Mapped[str | None] = mapped_column(Text, nullable=True)
    question_ar: Mapped[str | None] = mapped_column(Text, nullable=True)
    answer_tr: Mapped[str] = mapped_column(Text)
    answer_en: Mapped[str | None] = mapped_column(Text, nullable=True)
    answer_ru: Mapped[str | None] = mapped_column(Text, nullable=True)
    answer_ar: Mapped[str | None] = mapped_column(Text, nullable=True)
    display_order: Mapped[int] = mapped_column(Integer, default=0)
    published: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))


class Faq(Base):
    """FAQ attached to one service vertical (service_type = canonical service slug)."""
    __tablename__ = "faqs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    service_type: Mapped[str] = mapped_column(String(120), index=True)
    question_tr: Mapped[str] = mapped_column(Text)
    question_en: Mapped[str | None] = mapped_column(Text, nullable=True)
    question_ru: Mapped[str | None] = mapped_column(Text, nullable=True)
    question_ar: Mapped[str | None] = mapped_column(Text, nullable=True)
    answer_tr: Mapped[str] = mapped_column(Text)
    answer_en: Mapped[str | None] = mapped_column(Text, nullable=True)
    answer_ru: Mapped[str | None] = mapped_column(Text, nullable=True)
    answer_ar: Mapped[str | None] = mapped_column(Text, nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)
    active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
