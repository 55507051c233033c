import datetime as dt
from pydantic import BaseModel
from typing import Optional

class ReservationCreate(BaseModel):
    # Everything optional so that missing fields produce a 400 from the service, not a 422.
    listing_id: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    guests_count: Optional[int] = None
    special_requests: Optional[str] = None
    status: Optional[str] = None  # ignored, new reservations are always pending

class ReservationStatusIn(BaseModel):
    status: Optional[str] = None
