from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_current_admin
from app.db.session import get_db, get_service_db
from app.models.admin_user import AdminUser
from app.schemas.hero import HeroSettingsIn
from app.services import hero_service

router = APIRouter(tags=["hero"])


@router.get("/hero")
def get_hero(db: Session = Depends(get_db)):
    return hero_service.get_hero(db)


@router.put("/hero")
def update_hero(body: HeroSettingsIn, db: Session = Depends(get_service_db),
                admin: AdminUser = Depends(get_current_admin)):
    return {"success": True, "hero": hero_service.set_hero(db, body.model_dump())}
