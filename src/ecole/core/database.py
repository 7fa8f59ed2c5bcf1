"""Engine, session factory and declarative base."""

from typing import Any, Dict, Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import get_settings


def engine_options(database_url: str) -> Dict[str, Any]:
    """Driver specific keyword arguments for ``create_engine``."""

    if make_url(database_url).get_backend_name() == "sqlite":
        # Sessions are handed across the threads of the ASGI worker pool.
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


settings = get_settings()

engine = create_engine(settings.database_url, **engine_options(settings.database_url))
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Yield a session that lives for one request."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
