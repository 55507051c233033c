from pydantic import BaseModel
from typing import Optional

class HeroSettingsIn(BaseModel):
    video_url: Optional[str] = None
    fallback_image_url: Optional[str] = None
    is_active: bool = True
    title: Optional[str] = None
    subtitle: Optional[str] = None
