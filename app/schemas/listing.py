from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

class ListingTranslationIn(BaseModel):
    title: str = ""
    description: Optional[str] = None
    slug: Optional[str] = None

class ListingIn(BaseModel):
    """Admin create/update payload for a listing of any vertical."""
    name: str = "Untitled"
    slug: str = ""
    description: Optional[str] = None
    location: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    storage_paths: List[str] = Field(default_factory=list)
    storage_bucket: str = "listings"
    features: List[str] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)
    price_per_day: Optional[float] = None
    price_per_week: Optional[float] = None
    price_range_min: Optional[float] = None
    price_range_max: Optional[float] = None
    active: bool = True
    sort_order: int = 0
    segment_id: Optional[str] = None
    translations: Dict[str, ListingTranslationIn] = Field(default_factory=dict)

class ListingPatch(BaseModel):
    """Partial update; only fields present in the request body are written."""
    name: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    images: Optional[List[str]] = None
    storage_paths: Optional[List[str]] = None
    storage_bucket: Optional[str] = None
    features: Optional[List[str]] = None
    metadata: Optional[Dict[str, Any]] = None
    price_per_day: Optional[float] = None
    price_per_week: Optional[float] = None
    price_range_min: Optional[float] = None
    price_range_max: Optional[float] = None
    active: Optional[bool] = None
    sort_order: Optional[int] = None
    segment_id: Optional[str] = None
    translations: Optional[Dict[str, ListingTranslationIn]] = None
