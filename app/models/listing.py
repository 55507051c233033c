from sqlalchemy import String, Integer, DateTime, Boolean, Text, Numeric, JSON, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from app.db.session import Base

class Listing(Base):
    __tablename__ = "listings"
    __table_args__ = (
        UniqueConstraint("service_id", "slug", name="uq_listings_service_slug"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    service_id: Mapped[str] = mapped_column(String(36), index=True)
    segment_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)  # car segment
    slug: Mapped[str] = mapped_column(String(160), index=True)
    name: Mapped[str] = mapped_column(String(200))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str | None] = mapped_column(String(200), nullable=True)

    # Two image schemes coexist: full URLs in `images`, or bucket-relative paths in `storage_paths`.
    images: Mapped[list] = mapped_column(JSON, default=list)
    storage_paths: Mapped[list] = mapped_column(JSON, default=list)
    storage_bucket: Mapped[str] = mapped_column(String(40), default="listings")

    features: Mapped[list] = mapped_column(JSON, default=list)
    # bedrooms, bathrooms, boatType, capacity, transmission ...
    meta: Mapped[dict] = mapped_column("metadata", JSON, default=dict)

    price_per_day: Mapped[float | None] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=True)
    price_per_week: Mapped[float | None] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=True)
    price_range_min: Mapped[float | None] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=True)
    price_range_max: Mapped[float | None] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=True)

    active: Mapped[bool] = mapped_column(Boolean, default=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))


class ListingI18n(Base):
    __tablename__ = "listings_i18n"
    __table_args__ = (
        UniqueConstraint("listing_id", "locale", name="uq_listings_i18n_listing_locale"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    listing_id: Mapped[str] = mapped_column(String(36), index=True)
    locale: Mapped[str] = mapped_column(String(5), index=True)
    title: Mapped[str] = mapped_column(String(200), default="")
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    slug: Mapped[str | None] = mapped_column(String(160), nullable=True, index=True)
