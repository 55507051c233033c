"""HTTP client for the /api/storage upload proxy, used by admin tooling and scripts.

Files are validated locally (size, image type) before anything is sent, so an
oversized or non-image file never reaches the server.
"""
import os
from dataclasses import dataclass
from typing import BinaryIO, Iterable, Optional, Union

import requests

from app.core.storage_paths import ALLOWED_TYPES, MAX_FILE_BYTES, to_storage_path

FileLike = Union[bytes, BinaryIO]


@dataclass
class UploadResult:
    success: bool
    path: Optional[str] = None
    url: Optional[str] = None
    error: Optional[str] = None


def _read(file: FileLike) -> bytes:
    if isinstance(file, (bytes, bytearray)):
        return bytes(file)
    return file.read()


def validate_file(content: bytes, content_type: str) -> Optional[str]:
    """Error message for a file the server would reject, or None."""
    if len(content) > MAX_FILE_BYTES:
        return "File size must be 10MB or less"
    if (content_type or "").lower() not in ALLOWED_TYPES:
        return "Only JPEG, PNG and WebP images are allowed"
    return None


class StorageClient:
    def __init__(self, base_url: str, token: Optional[str] = None, session: Optional[requests.Session] = None,
                 timeout: int = 30):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    def _headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    @staticmethod
    def _error(r: requests.Response) -> str:
        try:
            data = r.json()
        except ValueError:
            return r.text or f"HTTP {r.status_code}"
        return str(data.get("detail") or data.get("error") or data)

    def upload_file(self, file: FileLike, file_name: str, content_type: str, bucket: str = "listings",
                    name: Optional[str] = None) -> UploadResult:
        content = _read(file)
        err = validate_file(content, content_type)
        if err:
            return UploadResult(success=False, error=err)

        data = {"bucketName": bucket}
        if name:
            data["fileName"] = name
        try:
            r = self.session.post(
                f"{self.base_url}/api/storage",
                files={"file": (os.path.basename(file_name), content, content_type)},
                data=data,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            return UploadResult(success=False, error=str(e))
        if r.status_code >= 400:
            return UploadResult(success=False, error=self._error(r))
        body = r.json()
        return UploadResult(success=True, path=body.get("path"), url=body.get("url"))

    def upload_multiple_files(self, files: Iterable[tuple[FileLike, str, str]], bucket: str = "listings") -> list[UploadResult]:
        """Upload (file, file_name, content_type) tuples one by one; failures do not stop the batch."""
        return [self.upload_file(f, file_name, content_type, bucket) for f, file_name, content_type in files]

    def delete_file(self, path_or_url: str, bucket: str = "listings") -> bool:
        path = to_storage_path(path_or_url, bucket)
        if not path:
            return False
        try:
            r = self.session.delete(
                f"{self.base_url}/api/storage",
                params={"bucket": bucket, "path": path},
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException:
            return False
        return r.status_code < 400

    def replace_file(self, old_path_or_url: Optional[str], file: FileLike, file_name: str, content_type: str,
                     bucket: str = "listings") -> UploadResult:
        """Upload the new file first; the old one is removed only after a successful upload."""
        result = self.upload_file(file, file_name, content_type, bucket)
        if result.success and old_path_or_url:
            # best effort: a stale file is harmless
            self.delete_file(old_path_or_url, bucket)
        return result
