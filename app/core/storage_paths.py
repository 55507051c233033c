"""Storage constants and URL/path helpers shared by the upload route and the HTTP client."""
from urllib.parse import unquote, urlparse

BUCKETS = ("listings", "services", "pages", "blog")
ALLOWED_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp")
MAX_FILE_BYTES = 10 * 1024 * 1024
PUBLIC_PREFIX = "/storage/v1/object/public"


def to_storage_path(path_or_url: str, bucket: str) -> str:
    """Turn a public URL (absolute or site-relative) back into a bucket-relative path.

    Bare paths keep their folders; a leading slash is dropped.
    """
    if not path_or_url:
        return ""
    marker = f"{PUBLIC_PREFIX}/{bucket}/"
    idx = path_or_url.find(marker)
    if idx >= 0:
        rest = path_or_url[idx + len(marker):].split("?", 1)[0]
        return unquote(rest)
    if not path_or_url.startswith(("http://", "https://")):
        return path_or_url.lstrip("/")
    # unknown URL shape: last path segment
    return unquote(urlparse(path_or_url).path.rstrip("/").rsplit("/", 1)[-1])
