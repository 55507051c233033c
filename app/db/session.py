from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from app.core.config import settings


class Base(DeclarativeBase):
    pass


engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Elevated credential for admin and storage routes (bypasses row-level policies on the database side).
if settings.SERVICE_DATABASE_URL and settings.SERVICE_DATABASE_URL != settings.DATABASE_URL:
    service_engine = create_engine(settings.SERVICE_DATABASE_URL, pool_pre_ping=True)
else:
    service_engine = engine
ServiceSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=service_engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_service_db():
    db = ServiceSessionLocal()
    try:
        yield db
    finally:
        db.close()
