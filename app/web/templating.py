from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.datastructures import UploadFile

from app.core.config import settings
from app.core.i18n import LOCALES, is_rtl, resolve_localized, t

_APP_DIR = Path(__file__).resolve().parent.parent

templates = Jinja2Templates(directory=str(_APP_DIR / "templates"))
templates.env.globals.update(
    t=t,
    is_rtl=is_rtl,
    loc=resolve_localized,
    LOCALES=LOCALES,
    settings=settings,
)

STATIC_DIR = _APP_DIR / "static"


async def form_data(request: Request) -> dict:
    """Parsed urlencoded/multipart body for sync page handlers."""
    form = await request.form()
    return {k: v for k, v in form.items()}


async def form_with_files(request: Request) -> dict:
    """Like form_data, but every file input comes back as a list of non-empty uploads."""
    form = await request.form()
    out = {}
    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            uploads = out.setdefault(key, [])
            if value.filename:
                uploads.append(value)
        else:
            out[key] = value
    return out


def render(request: Request, name: str, context: dict, status_code: int = 200):
    return templates.TemplateResponse(request, name, context, status_code=status_code)
