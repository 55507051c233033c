from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from app.api.deps import get_current_admin, http_error
from app.core.config import settings
from app.core.errors import ServiceError
from app.models.admin_user import AdminUser
from app.services import storage_service

router = APIRouter(tags=["storage"])


@router.post("/storage")
def upload(file: UploadFile = File(...), bucketName: str = Form(...),
           fileName: Optional[str] = Form(None),
           admin: AdminUser = Depends(get_current_admin)):
    # one byte past the limit is enough to detect an oversized file
    content = file.file.read(settings.STORAGE_MAX_BYTES + 1)
    try:
        return storage_service.upload(
            bucketName, content, file.content_type or "", original_name=file.filename or "", path=fileName or None
        )
    except ServiceError as e:
        raise http_error(e)


@router.delete("/storage")
def delete(bucket: Optional[str] = None, path: Optional[str] = None,
           admin: AdminUser = Depends(get_current_admin)):
    try:
        return storage_service.delete(bucket or "", path or "")
    except ServiceError as e:
        raise http_error(e)
