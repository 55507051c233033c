"""initial

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19

"""

from alembic import op
import sqlalchemy as sa

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None

_LOCALES = ("tr", "en", "ru", "ar")


def _money(name: str) -> sa.Column:
    return sa.Column(name, sa.Numeric(12, 2), nullable=True)


def _localized(field: str, type_, required: bool = True) -> list:
    """One column per locale; only the Turkish fallback is required."""
    return [
        sa.Column(f"{field}_{locale}", type_, nullable=not (required and locale == "tr"))
        for locale in _LOCALES
    ]


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "services",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("slug", sa.String(length=120), nullable=False),
        sa.Column("icon", sa.String(length=40), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_services_slug", "services", ["slug"], unique=True)

    op.create_table(
        "services_i18n",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("service_id", sa.String(length=36), nullable=False),
        sa.Column("locale", sa.String(length=5), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False, server_default=""),
        sa.Column("summary", sa.Text(), nullable=True),
        sa.Column("body", sa.Text(), nullable=True),
        sa.Column("slug", sa.String(length=120), nullable=True),
        sa.UniqueConstraint("service_id", "locale", name="uq_services_i18n_service_locale"),
    )
    op.create_index("ix_services_i18n_service_id", "services_i18n", ["service_id"])
    op.create_index("ix_services_i18n_locale", "services_i18n", ["locale"])

    op.create_table(
        "car_segments",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("slug", sa.String(length=40), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_car_segments_slug", "car_segments", ["slug"], unique=True)

    op.create_table(
        "car_segments_i18n",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("segment_id", sa.String(length=36), nullable=False),
        sa.Column("locale", sa.String(length=5), nullable=False),
        sa.Column("title", sa.String(length=120), nullable=False),
        sa.UniqueConstraint("segment_id", "locale", name="uq_car_segments_i18n_segment_locale"),
    )
    op.create_index("ix_car_segments_i18n_segment_id", "car_segments_i18n", ["segment_id"])

    op.create_table(
        "listings",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("service_id", sa.String(length=36), nullable=False),
        sa.Column("segment_id", sa.String(length=36), nullable=True),
        sa.Column("slug", sa.String(length=160), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("location", sa.String(length=200), nullable=True),
        sa.Column("images", sa.JSON(), nullable=False),
        sa.Column("storage_paths", sa.JSON(), nullable=False),
        sa.Column("storage_bucket", sa.String(length=40), nullable=False, server_default="listings"),
        sa.Column("features", sa.JSON(), nullable=False),
        sa.Column("metadata", sa.JSON(), nullable=False),
        _money("price_per_day"),
        _money("price_per_week"),
        _money("price_range_min"),
        _money("price_range_max"),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.UniqueConstraint("service_id", "slug", name="uq_listings_service_slug"),
    )
    op.create_index("ix_listings_service_id", "listings", ["service_id"])
    op.create_index("ix_listings_segment_id", "listings", ["segment_id"])
    op.create_index("ix_listings_slug", "listings", ["slug"])

    op.create_table(
        "listings_i18n",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("listing_id", sa.String(length=36), nullable=False),
        sa.Column("locale", sa.String(length=5), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False, server_default=""),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("slug", sa.String(length=160), nullable=True),
        sa.UniqueConstraint("listing_id", "locale", name="uq_listings_i18n_listing_locale"),
    )
    op.create_index("ix_listings_i18n_listing_id", "listings_i18n", ["listing_id"])
    op.create_index("ix_listings_i18n_locale", "listings_i18n", ["locale"])
    op.create_index("ix_listings_i18n_slug", "listings_i18n", ["slug"])

    op.create_table(
        "listing_availability",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("listing_id", sa.String(length=36), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("is_available", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        _money("price"),
        sa.Column("min_nights", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("notes", sa.String(length=500), nullable=True),
        sa.UniqueConstraint("listing_id", "date", name="uq_listing_availability_listing_date"),
    )
    op.create_index("ix_listing_availability_listing_id", "listing_availability", ["listing_id"])
    op.create_index("ix_listing_availability_date", "listing_availability", ["date"])

    op.create_table(
        "reservations",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("listing_id", sa.String(length=36), nullable=False),
        sa.Column("customer_name", sa.String(length=200), nullable=False),
        sa.Column("customer_email", sa.String(length=320), nullable=False),
        sa.Column("customer_phone", sa.String(length=40), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("guests_count", sa.Integer(), nullable=False, server_default="1"),
        _money("total_price"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("special_requests", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_reservations_listing_id", "reservations", ["listing_id"])
    op.create_index("ix_reservations_customer_email", "reservations", ["customer_email"])
    op.create_index("ix_reservations_start_date", "reservations", ["start_date"])
    op.create_index("ix_reservations_end_date", "reservations", ["end_date"])
    op.create_index("ix_reservations_status", "reservations", ["status"])

    op.create_table(
        "admin_users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=200), nullable=False, server_default=""),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="admin"),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_admin_users_email", "admin_users", ["email"], unique=True)

    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("full_name", sa.String(length=200), nullable=False, server_default=""),
        sa.Column("phone", sa.String(length=40), nullable=False, server_default=""),
        sa.Column("role", sa.String(length=30), nullable=False, server_default="customer"),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "hero_settings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("video_url", sa.String(length=500), nullable=True),
        sa.Column("fallback_image_url", sa.String(length=500), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("title", sa.String(length=200), nullable=True),
        sa.Column("subtitle", sa.String(length=300), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "campaigns",
        sa.Column("id", sa.String(length=36), primary_key=True),
        *_localized("title", sa.String(length=200)),
        *_localized("description", sa.Text()),
        *_localized("content", sa.Text()),
        sa.Column("discount_percentage", sa.Integer(), nullable=True),
        _money("discount_amount"),
        sa.Column("valid_from", sa.Date(), nullable=True),
        sa.Column("valid_until", sa.Date(), nullable=True),
        sa.Column("image_url", sa.String(length=500), nullable=True),
        sa.Column("campaign_code", sa.String(length=40), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("featured", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        *_timestamps(),
    )

    op.create_table(
        "blog_posts",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("slug", sa.String(length=200), nullable=False),
        *_localized("title", sa.String(length=300)),
        *_localized("excerpt", sa.Text(), required=False),
        *_localized("content", sa.Text()),
        *_localized("meta_title", sa.String(length=300), required=False),
        *_localized("meta_description", sa.String(length=500), required=False),
        sa.Column("featured_image", sa.String(length=500), nullable=True),
        sa.Column("category", sa.String(length=80), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("published", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("featured", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        *_timestamps(),
    )
    op.create_index("ix_blog_posts_slug", "blog_posts", ["slug"], unique=True)
    op.create_index("ix_blog_posts_category", "blog_posts", ["category"])

    op.create_table(
        "pages",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("page_type", sa.String(length=40), nullable=False),
        sa.Column("slug", sa.String(length=200), nullable=False),
        *_localized("title", sa.String(length=300)),
        *_localized("content", sa.Text()),
        *_localized("meta_title", sa.String(length=300), required=False),
        *_localized("meta_description", sa.String(length=500), required=False),
        sa.Column("published", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("featured", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        *_timestamps(),
    )
    op.create_index("ix_pages_page_type", "pages", ["page_type"])
    op.create_index("ix_pages_slug", "pages", ["slug"])

    op.create_table(
        "general_faqs",
        sa.Column("id", sa.String(length=36), primary_key=True),
        *_localized("question", sa.Text()),
        *_localized("answer", sa.Text()),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("published", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
    )

    op.create_table(
        "faqs",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("service_type", sa.String(length=120), nullable=False),
        *_localized("question", sa.Text()),
        *_localized("answer", sa.Text()),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
    )
    op.create_index("ix_faqs_service_type", "faqs", ["service_type"])


def downgrade() -> None:
    for table in (
        "faqs", "general_faqs", "pages", "blog_posts", "campaigns", "hero_settings", "users", "admin_users",
        "reservations", "listing_availability", "listings_i18n", "listings", "car_segments_i18n",
        "car_segments", "services_i18n", "services",
    ):
        op.drop_table(table)
