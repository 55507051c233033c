import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool, create_engine

from app.core.config import settings
from app.db.session import Base

# Import all models so Alembic sees them in metadata
from app.models.admin_user import AdminUser  # noqa: F401
from app.models.availability import ListingAvailability  # noqa: F401
from app.models.blog_post import BlogPost  # noqa: F401
from app.models.campaign import Campaign  # noqa: F401
from app.models.car_segment import CarSegment, CarSegmentI18n  # noqa: F401
from app.models.faq import Faq, GeneralFaq  # noqa: F401
from app.models.hero_settings import HeroSettings  # noqa: F401
from app.models.listing import Listing, ListingI18n  # noqa: F401
from app.models.page import Page  # noqa: F401
from app.models.reservation import Reservation  # noqa: F401
from app.models.service import Service, ServiceI18n  # noqa: F401
from app.models.user import User  # noqa: F401

# Alembic Config object
config = context.config

# Force sqlalchemy.url from real runtime DATABASE_URL (elevated credential when configured)
db_url = settings.SERVICE_DATABASE_URL or settings.DATABASE_URL or os.getenv("DATABASE_URL")
if not db_url:
    raise RuntimeError("DATABASE_URL is not set (check .env / app.core.config.settings)")

config.set_main_option("sqlalchemy.url", db_url)

# Logging config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Target metadata for autogenerate
target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    url = config.get_main_option("sqlalchemy.url")

    # alembic.ini carries no URL; build the engine from the runtime setting
    connectable = create_engine(url, poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
