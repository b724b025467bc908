from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from wishes_admin.core.config import settings


def connect_args_for(url: str) -> dict:
    # daily buckets group on date(created_at), which follows the session time zone
    if url.startswith("postgresql"):
        return {"options": "-c timezone=UTC"}
    return {}


engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, connect_args=connect_args_for(settings.DATABASE_URL))
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


class Base(DeclarativeBase):
    pass


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
