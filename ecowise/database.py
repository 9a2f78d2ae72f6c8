from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from ecowise.config import get_settings
import logging

logger = logging.getLogger(__name__)
settings = get_settings()

db_url = settings.database_url

connect_args = {"check_same_thread": False} if db_url.startswith("sqlite") else {}

engine = create_engine(db_url, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Create tables that don't exist yet."""
    # Import models so they register on Base.metadata
    from ecowise.models import Trip  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info(f"Database tables ensured ({engine.url.get_backend_name()})")
