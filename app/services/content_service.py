"""CRUD for the locale-flat-column content tables (campaigns, blog posts, pages, FAQs).

Each kind is described once in ``KINDS``; the public routes and the admin
content screens share these functions.
"""
import uuid
import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Optional

from sqlalchemy import Date, inspect
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError, ValidationFailed
from app.core.serialization import row_to_dict
from app.models.blog_post import BlogPost
from app.models.campaign import Campaign
from app.models.faq import Faq, GeneralFaq
from app.models.page import Page

READ_ONLY = ("id", "created_at", "updated_at")


@dataclass(frozen=True)
class ContentKind:
    model: Any
    plural: str  # response envelope key for lists
    singular: str  # response envelope key for one row
    required: tuple[str, ...]
    visible_flag: str  # published / active
    order_by: tuple[tuple[str, bool], ...]  # (column, descending)
    filters: dict[str, str] = field(default_factory=dict)  # query param -> column


KINDS = {
    "campaigns": ContentKind(
        model=Campaign,
        plural="campaigns",
        singular="campaign",
        required=("title_tr", "description_tr", "content_tr"),
        visible_flag="active",
        order_by=(("featured", True), ("created_at", True)),
        filters={"featured": "featured"},
    ),
    "blog": ContentKind(
        model=BlogPost,
        plural="posts",
        singular="post",
        required=("slug", "title_tr", "content_tr"),
        visible_flag="published",
        order_by=(("featured", True), ("created_at", True)),
        filters={"category": "category", "featured": "featured", "slug": "slug"},
    ),
    "pages": ContentKind(
        model=Page,
        plural="pages",
        singular="page",
        required=("page_type", "slug", "title_tr", "content_tr"),
        visible_flag="published",
        order_by=(("created_at", True),),
        filters={"type": "page_type", "slug": "slug"},
    ),
    "general-faqs": ContentKind(
        model=GeneralFaq,
        plural="faqs",
        singular="faq",
        required=("question_tr", "answer_tr"),
        visible_flag="published",
        order_by=(("display_order", False), ("created_at", False)),
    ),
    "faqs": ContentKind(
        model=Faq,
        plural="faqs",
        singular="faq",
        required=("service_type", "question_tr", "answer_tr"),
        visible_flag="active",
        order_by=(("sort_order", False), ("created_at", False)),
        filters={"service": "service_type"},
    ),
}


def get_kind(name: str) -> ContentKind:
    kind = KINDS.get(name)
    if not kind:
        raise NotFoundError(f"Unknown content type: {name}")
    return kind


def _columns(model) -> dict:
    return {c.key: c for c in inspect(model).mapper.column_attrs}


def _coerce(model, data: dict) -> dict:
    """Keep known writable columns; parse ISO strings for Date columns; empty dates become None."""
    cols = _columns(model)
    out = {}
    for key, value in data.items():
        if key in READ_ONLY or key not in cols:
            continue
        col_type = cols[key].columns[0].type
        if isinstance(col_type, Date) and isinstance(value, str):
            if not value.strip():
                value = None
            else:
                try:
                    value = dt.date.fromisoformat(value.strip()[:10])
                except ValueError:
                    raise ValidationFailed(f"Invalid date for {key}: {value}")
        out[key] = value
    return out


def _truthy(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def list_items(db: Session, kind_name: str, params: Optional[dict] = None, include_hidden: bool = False) -> list:
    kind = get_kind(kind_name)
    model = kind.model
    q = db.query(model)
    if not include_hidden:
        q = q.filter(getattr(model, kind.visible_flag) == True)
    for param, column in kind.filters.items():
        value = (params or {}).get(param)
        if value in (None, ""):
            continue
        col = getattr(model, column)
        if column == "featured":
            # only ?featured=true narrows the list
            if _truthy(value):
                q = q.filter(col == True)
        else:
            q = q.filter(col == value)
    for column, desc in kind.order_by:
        col = getattr(model, column)
        q = q.order_by(col.desc() if desc else col.asc())
    return q.all()


def get_item(db: Session, kind_name: str, item_id: str):
    kind = get_kind(kind_name)
    row = db.get(kind.model, item_id)
    if not row:
        raise NotFoundError(f"{kind.singular.capitalize()} not found")
    return row


def _commit(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("An item with this slug already exists")


def create_item(db: Session, kind_name: str, data: dict):
    kind = get_kind(kind_name)
    missing = [f for f in kind.required if not data.get(f)]
    if missing:
        raise ValidationFailed("Missing required fields: " + ", ".join(missing))
    values = _coerce(kind.model, data)
    now = dt.datetime.now(dt.timezone.utc)
    row = kind.model(id=str(uuid.uuid4()), created_at=now, updated_at=now, **values)
    db.add(row)
    _commit(db)
    db.refresh(row)
    return row


def update_item(db: Session, kind_name: str, item_id: Optional[str], data: dict):
    kind = get_kind(kind_name)
    if not item_id:
        raise ValidationFailed(f"{kind.singular.capitalize()} ID is required")
    row = get_item(db, kind_name, item_id)
    values = _coerce(kind.model, data)
    for f in kind.required:
        if f in values and not values[f]:
            raise ValidationFailed(f"{f} cannot be empty")
    for key, value in values.items():
        setattr(row, key, value)
    row.updated_at = dt.datetime.now(dt.timezone.utc)
    _commit(db)
    db.refresh(row)
    return row


def delete_item(db: Session, kind_name: str, item_id: Optional[str]) -> None:
    kind = get_kind(kind_name)
    if not item_id:
        raise ValidationFailed(f"{kind.singular.capitalize()} ID is required")
    row = get_item(db, kind_name, item_id)
    db.delete(row)
    db.commit()


def to_dict(row) -> dict:
    return row_to_dict(row)
