from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
import logging

logger = logging.getLogger(__name__)

Base = declarative_base()


# ------------------------------------------------------------------------------
# DATABASE ENGINE & SESSION
# ------------------------------------------------------------------------------
def make_engine(database_url: str):
    """Create an engine for the given URL.

    SQLite connections are shared across the request threadpool, and an
    in-memory SQLite database has to live on a single connection or every
    new connection would see an empty database.
    """
    kwargs = {"pool_pre_ping": True}

    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool

    try:
        return create_engine(database_url, **kwargs)
    except Exception as e:
        logger.error(f"❌ Failed to create SQLAlchemy engine: {e}")
        raise


def make_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


# ------------------------------------------------------------------------------
# INITIALIZATION
# ------------------------------------------------------------------------------
def init_db(engine):
    """Create database tables if they do not exist yet."""
    from string_analyzer.models import string_analysis  # noqa: F401  ensure models are imported
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("✅ Database tables created successfully.")
    except Exception as e:
        logger.error(f"❌ Database initialization failed: {e}")
        raise
