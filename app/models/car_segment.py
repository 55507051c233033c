from sqlalchemy import String, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from app.db.session import Base

class CarSegment(Base):
    __tablename__ = "car_segments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    slug: Mapped[str] = mapped_column(String(40), unique=True, index=True)  # economic, mid-class, comfort, premium, atv-jeep
    sort_order: Mapped[int] = mapped_column(Integer, default=0)


class CarSegmentI18n(Base):
    __tablename__ = "car_segments_i18n"
    __table_args__ = (
        UniqueConstraint("segment_id", "locale", name="uq_car_segments_i18n_segment_locale"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    segment_id: Mapped[str] = mapped_column(String(36), index=True)
    locale: Mapped[str] = mapped_column(String(5))
    title: Mapped[str] = mapped_column(String(120))
