from sqlalchemy import String, Integer, Date, DateTime, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column
from datetime import date, datetime, timezone
from app.db.session import Base

class Reservation(Base):
    __tablename__ = "reservations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    listing_id: Mapped[str] = mapped_column(String(36), index=True)

    customer_name: Mapped[str] = mapped_column(String(200))
    customer_email: Mapped[str] = mapped_column(String(320), index=True)
    customer_phone: Mapped[str] = mapped_column(String(40))

    start_date: Mapped[date] = mapped_column(Date, index=True)
    end_date: Mapped[date] = mapped_column(Date, index=True)
    guests_count: Mapped[int] = mapped_column(Integer, default=1)
    total_price: Mapped[float | None] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=True)

    status: Mapped[str] = mapped_column(String(20), default="pending", index=True)  # pending, confirmed, cancelled, completed
    special_requests: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
