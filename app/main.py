import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.logging import configure_logging
from app.core.storage_paths import PUBLIC_PREFIX
from app.api.api import api_router
from app.services import storage_service
from app.web import admin_pages, pages
from app.web.templating import STATIC_DIR

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME)

# CORS: use CORS_ORIGINS from env in production; default to localhost for dev
_default_origins = [
    "http://127.0.0.1:3000", "http://localhost:3000",
    "http://127.0.0.1:8000", "http://localhost:8000",
]
_origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()] if settings.CORS_ORIGINS else _default_origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SQLAlchemyError)
async def datastore_error(request: Request, exc: SQLAlchemyError):
    logger.exception("datastore error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/health")
def health():
    return {"status": "ok"}


app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

# Public object URLs: files on disk for the local backend, a redirect to GCS otherwise
if settings.STORAGE_BACKEND == "local":
    _storage_dir = Path(settings.STORAGE_LOCAL_DIR)
    _storage_dir.mkdir(parents=True, exist_ok=True)
    app.mount(PUBLIC_PREFIX, StaticFiles(directory=str(_storage_dir)), name="storage")
else:
    @app.get(PUBLIC_PREFIX + "/{bucket}/{path:path}", include_in_schema=False)
    def storage_object(bucket: str, path: str):
        return RedirectResponse(url=storage_service.get_backend().direct_url(bucket, path), status_code=307)

app.include_router(api_router)
app.include_router(admin_pages.router)
# last: /{locale}/{service} would otherwise shadow the routes above
app.include_router(pages.router)
