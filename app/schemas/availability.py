import datetime as dt
from pydantic import BaseModel
from typing import List, Optional

class AvailabilityIn(BaseModel):
    listing_id: Optional[str] = None
    date: Optional[dt.date] = None
    is_available: bool = True
    price: Optional[float] = None
    min_nights: Optional[int] = None
    notes: Optional[str] = None

class AvailabilityUpdate(BaseModel):
    date: dt.date
    is_available: bool = True
    price: Optional[float] = None
    min_nights: Optional[int] = None
    notes: Optional[str] = None

class AvailabilityBulkIn(BaseModel):
    listing_id: Optional[str] = None
    updates: Optional[List[AvailabilityUpdate]] = None
