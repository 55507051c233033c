from sqlalchemy import String, Integer, Boolean, Date, Numeric, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
import datetime as dt
from app.db.session import Base

class ListingAvailability(Base):
    __tablename__ = "listing_availability"
    __table_args__ = (
        UniqueConstraint("listing_id", "date", name="uq_listing_availability_listing_date"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    listing_id: Mapped[str] = mapped_column(String(36), index=True)
    date: Mapped[dt.date] = mapped_column(Date, index=True)
    is_available: Mapped[bool] = mapped_column(Boolean, default=True)
    price: Mapped[float | None] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=True)  # overrides the listing daily price
    min_nights: Mapped[int] = mapped_column(Integer, default=1)
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)
