"""
Database - key-value persistence for summary history and user preferences.

Tables:
- kv_store: one JSON value per key (summaryHistory, userPreferences)
"""
import logging
from sqlalchemy import create_engine, Column, String, DateTime, JSON
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.sql import func
from app.core.config import settings

logger = logging.getLogger(__name__)

# ==================== SQLAlchemy Setup ====================
engine = create_engine(
    settings.DATABASE_URL,
    connect_args={"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {},
    echo=False
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


# ==================== Database Models ====================

class KeyValue(Base):
    """A stored JSON value under a string key."""
    __tablename__ = "kv_store"

    key = Column(String, primary_key=True, index=True)
    value = Column(JSON, nullable=True)

    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


# ==================== Database Initialization ====================

def create_db_and_tables():
    """Create all database tables."""
    try:
        logger.info("Initializing database and creating tables...")
        Base.metadata.create_all(bind=engine)
        logger.info("✅ Database tables created: kv_store")
    except Exception as e:
        logger.error(f"❌ Error creating database tables: {e}", exc_info=True)
        raise


def check_database() -> bool:
    """True when the database answers a trivial query."""
    from sqlalchemy import text

    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database check failed: {e}")
        return False


# ==================== FastAPI Dependency ====================

def get_db():
    """FastAPI dependency to get a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
