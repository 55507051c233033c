from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from app.api.deps import get_current_admin, http_error
from app.core.errors import ServiceError
from app.db.session import get_db, get_service_db
from app.models.admin_user import AdminUser
from app.services import content_service
from app.services.content_service import KINDS, to_dict

router = APIRouter(tags=["content"])


def _list(db: Session, kind: str, params: dict, include_hidden: bool = False) -> dict:
    rows = content_service.list_items(db, kind, params, include_hidden=include_hidden)
    return {KINDS[kind].plural: [to_dict(r) for r in rows], "success": True}


def _create(db: Session, kind: str, body: dict) -> dict:
    try:
        row = content_service.create_item(db, kind, body)
    except ServiceError as e:
        raise http_error(e)
    return {KINDS[kind].singular: to_dict(row), "success": True}


def _update(db: Session, kind: str, body: dict) -> dict:
    data = dict(body)
    item_id = data.pop("id", None)
    try:
        row = content_service.update_item(db, kind, item_id, data)
    except ServiceError as e:
        raise http_error(e)
    return {KINDS[kind].singular: to_dict(row), "success": True}


# campaigns

@router.get("/campaigns")
def list_campaigns(request: Request, db: Session = Depends(get_db)):
    return _list(db, "campaigns", dict(request.query_params))


@router.post("/campaigns")
def create_campaign(body: dict[str, Any] = Body(...), db: Session = Depends(get_service_db),
                    admin: AdminUser = Depends(get_current_admin)):
    return _create(db, "campaigns", body)


@router.put("/campaigns")
def update_campaign(body: dict[str, Any] = Body(...), db: Session = Depends(get_service_db),
                    admin: AdminUser = Depends(get_current_admin)):
    return _update(db, "campaigns", body)


# blog

@router.get("/blog")
def list_posts(request: Request, db: Session = Depends(get_db)):
    return _list(db, "blog", dict(request.query_params))


@router.post("/blog")
def create_post(body: dict[str, Any] = Body(...), db: Session = Depends(get_service_db),
                admin: AdminUser = Depends(get_current_admin)):
    return _create(db, "blog", body)


@router.put("/blog")
def update_post(body: dict[str, Any] = Body(...), db: Session = Depends(get_service_db),
                admin: AdminUser = Depends(get_current_admin)):
    return _update(db, "blog", body)


# pages

@router.get("/pages")
def list_pages(request: Request, db: Session = Depends(get_db)):
    return _list(db, "pages", dict(request.query_params))


@router.post("/pages")
def create_page(body: dict[str, Any] = Body(...), db: Session = Depends(get_service_db),
                admin: AdminUser = Depends(get_current_admin)):
    return _create(db, "pages", body)


@router.put("/pages")
def update_page(body: dict[str, Any] = Body(...), db: Session = Depends(get_service_db),
                admin: AdminUser = Depends(get_current_admin)):
    return _update(db, "pages", body)


# site-wide FAQs

@router.get("/general-faqs")
def list_general_faqs(db: Session = Depends(get_db)):
    return _list(db, "general-faqs", {})


@router.post("/general-faqs")
def create_general_faq(body: dict[str, Any] = Body(...), db: Session = Depends(get_service_db),
                       admin: AdminUser = Depends(get_current_admin)):
    return _create(db, "general-faqs", body)


@router.put("/general-faqs")
def update_general_faq(body: dict[str, Any] = Body(...), db: Session = Depends(get_service_db),
                       admin: AdminUser = Depends(get_current_admin)):
    return _update(db, "general-faqs", body)


# per-service FAQs

@router.get("/faqs")
def list_faqs(service: Optional[str] = None, db: Session = Depends(get_db)):
    rows = content_service.list_items(db, "faqs", {"service": service})
    return {"success": True, "faqs": [to_dict(r) for r in rows]}


@router.post("/faqs")
def create_faq(body: dict[str, Any] = Body(...), db: Session = Depends(get_service_db),
               admin: AdminUser = Depends(get_current_admin)):
    return _create(db, "faqs", body)


@router.put("/faqs")
def update_faq(body: dict[str, Any] = Body(...), db: Session = Depends(get_service_db),
               admin: AdminUser = Depends(get_current_admin)):
    return _update(db, "faqs", body)


@router.delete("/faqs")
def delete_faq(id: Optional[str] = None, db: Session = Depends(get_service_db),
               admin: AdminUser = Depends(get_current_admin)):
    try:
        content_service.delete_item(db, "faqs", id)
    except ServiceError as e:
        raise http_error(e)
    return {"success": True}


# back-office view, hidden rows included

@router.get("/admin/content/{kind}")
def admin_list_content(kind: str, request: Request, db: Session = Depends(get_service_db),
                       admin: AdminUser = Depends(get_current_admin)):
    try:
        content_service.get_kind(kind)
    except ServiceError as e:
        raise http_error(e)
    return _list(db, kind, dict(request.query_params), include_hidden=True)


@router.delete("/admin/content/{kind}/{item_id}")
def admin_delete_content(kind: str, item_id: str, db: Session = Depends(get_service_db),
                         admin: AdminUser = Depends(get_current_admin)):
    try:
        content_service.delete_item(db, kind, item_id)
    except ServiceError as e:
        raise http_error(e)
    return {"success": True}
