import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from safephone.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_db_engine(database_url: str):
    """Create an engine; SQLite connections are shared with worker threads"""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


# 1. Create Engine (local SQLite file by default)
engine = create_db_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def init_db(bind=None):
    """Initialize database tables"""
    # Models must be imported so they register with 'Base'
    import safephone.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Report store tables ready")
