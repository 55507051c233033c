import logging
import os
import random
import string
import time

from app.core.config import settings
from app.core.errors import ConflictError, ValidationFailed
from app.core.storage_paths import ALLOWED_TYPES, BUCKETS, PUBLIC_PREFIX, to_storage_path

logger = logging.getLogger(__name__)


def public_url(bucket: str, path: str) -> str:
    base = (settings.PUBLIC_BASE_URL or "").rstrip("/")
    return f"{base}{PUBLIC_PREFIX}/{bucket}/{path}"


def generate_file_name(original_name: str) -> str:
    ext = original_name.rsplit(".", 1)[-1].lower() if "." in (original_name or "") else ""
    rand = "".join(random.choices(string.ascii_lowercase + string.digits, k=9))
    name = f"{int(time.time() * 1000)}-{rand}"
    return f"{name}.{ext}" if ext else name


def validate_upload(bucket: str, content_type: str | None, size: int) -> None:
    if bucket not in BUCKETS:
        raise ValidationFailed(f"Unknown bucket: {bucket}")
    if (content_type or "").lower() not in ALLOWED_TYPES:
        raise ValidationFailed("Only JPEG, PNG and WebP images are allowed")
    if size > settings.STORAGE_MAX_BYTES:
        raise ValidationFailed("File size must be 10MB or less")
    if size <= 0:
        raise ValidationFailed("File is empty")


def _check_path(path: str) -> str:
    path = (path or "").strip().lstrip("/")
    if not path or ".." in path.split("/"):
        raise ValidationFailed("Invalid path")
    return path


class LocalStorage:
    """Files under STORAGE_LOCAL_DIR/<bucket>/<path>; served by the app at PUBLIC_PREFIX."""

    name = "local"

    def __init__(self, root: str):
        self.root = root

    def _full(self, bucket: str, path: str) -> str:
        return os.path.join(self.root, bucket, *path.split("/"))

    def exists(self, bucket: str, path: str) -> bool:
        return os.path.isfile(self._full(bucket, path))

    def save(self, bucket: str, path: str, content: bytes, content_type: str) -> None:
        full = self._full(bucket, path)
        os.makedirs(os.path.dirname(full), exist_ok=True)
        with open(full, "xb") as f:
            f.write(content)

    def delete(self, bucket: str, path: str) -> bool:
        full = self._full(bucket, path)
        if not os.path.isfile(full):
            return False
        os.remove(full)
        return True


class GcsStorage:
    """One GCS bucket per logical bucket, named GCS_BUCKET_PREFIX + bucket."""

    name = "gcs"

    def __init__(self, prefix: str):
        try:
            from google.cloud import storage  # type: ignore
        except Exception as e:
            raise RuntimeError("google-cloud-storage is not installed. Install the gcs extra and retry") from e
        self.client = storage.Client()
        self.prefix = prefix

    def _blob(self, bucket: str, path: str):
        return self.client.bucket(f"{self.prefix}{bucket}").blob(path)

    def exists(self, bucket: str, path: str) -> bool:
        return self._blob(bucket, path).exists()

    def save(self, bucket: str, path: str, content: bytes, content_type: str) -> None:
        self._blob(bucket, path).upload_from_string(content, content_type=content_type, if_generation_match=0)

    def delete(self, bucket: str, path: str) -> bool:
        blob = self._blob(bucket, path)
        if not blob.exists():
            return False
        blob.delete()
        return True

    def direct_url(self, bucket: str, path: str) -> str:
        return f"https://storage.googleapis.com/{self.prefix}{bucket}/{path}"


_backend = None


def get_backend():
    global _backend
    if _backend is None:
        if settings.STORAGE_BACKEND == "gcs":
            _backend = GcsStorage(settings.GCS_BUCKET_PREFIX)
        else:
            _backend = LocalStorage(settings.STORAGE_LOCAL_DIR)
    return _backend


def set_backend(backend) -> None:
    global _backend
    _backend = backend


def upload(bucket: str, content: bytes, content_type: str, original_name: str = "",
           path: str | None = None) -> dict:
    validate_upload(bucket, content_type, len(content or b""))
    path = _check_path(path) if path else generate_file_name(original_name)
    backend = get_backend()
    if backend.exists(bucket, path):
        raise ConflictError("A file already exists at this path")
    try:
        backend.save(bucket, path, content, content_type)
    except FileExistsError:
        raise ConflictError("A file already exists at this path")
    logger.info("stored %s/%s (%d bytes, %s)", bucket, path, len(content), backend.name)
    return {"success": True, "path": path, "url": public_url(bucket, path)}


def delete(bucket: str, path_or_url: str) -> dict:
    if not bucket or not path_or_url:
        raise ValidationFailed("bucket and path are required")
    if bucket not in BUCKETS:
        raise ValidationFailed(f"Unknown bucket: {bucket}")
    path = _check_path(to_storage_path(path_or_url, bucket))
    deleted = get_backend().delete(bucket, path)
    if deleted:
        logger.info("deleted %s/%s", bucket, path)
    # removing a missing object is not an error
    return {"success": True, "path": path, "deleted": deleted}
