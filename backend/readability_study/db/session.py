from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from readability_study.core.config import load_settings

settings = load_settings()

_connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = create_engine(settings.database_url, connect_args=_connect_args, pool_pre_ping=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    from readability_study.db import models  # noqa: F401  registers tables on Base

    Base.metadata.create_all(bind=engine)
