from fastapi import APIRouter
from app.api.routes.admin import router as admin_router
from app.api.routes.admin_listings import router as admin_listings_router
from app.api.routes.auth import router as auth_router
from app.api.routes.availability import router as availability_router
from app.api.routes.catalog import router as catalog_router
from app.api.routes.content import router as content_router
from app.api.routes.hero import router as hero_router
from app.api.routes.reservations import router as reservations_router
from app.api.routes.storage import router as storage_router

api_router = APIRouter(prefix="/api")
api_router.include_router(catalog_router)
api_router.include_router(availability_router)
api_router.include_router(reservations_router)
api_router.include_router(content_router)
api_router.include_router(hero_router)
api_router.include_router(storage_router)
api_router.include_router(auth_router)
api_router.include_router(admin_router)
api_router.include_router(admin_listings_router)
