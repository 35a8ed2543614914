"""
Database setup
"""
import logging
from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import declarative_base, sessionmaker

from drama_tracker.core.config import settings

logger = logging.getLogger(__name__)

_is_sqlite = settings.DATABASE_URL.startswith("sqlite")

engine = create_engine(
    settings.DATABASE_URL,
    connect_args={"check_same_thread": False} if _is_sqlite else {},
    echo=False  # set True to log SQL
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def enable_sqlite_foreign_keys(target_engine):
    """SQLite leaves FK enforcement off per connection unless asked"""
    @event.listens_for(target_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


if _is_sqlite:
    enable_sqlite_foreign_keys(engine)


def get_db():
    """Yield a database session for one request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def import_models():
    """Import every model so Base.metadata knows all tables"""
    from drama_tracker.models.person import Person
    from drama_tracker.models.drama import Drama, drama_participants
    from drama_tracker.models.vote import Vote
    return [Person, Drama, Vote, drama_participants]

async def init_db():
    """Create tables and apply column migrations"""
    import_models()

    Base.metadata.create_all(bind=engine)

    if _is_sqlite:
        await _migrate_database()

    logger.info("Database initialized")

async def _migrate_database():
    """Add columns introduced after the first release to older SQLite files"""
    migrations = [
        ("people", "is_admin", "ALTER TABLE people ADD COLUMN is_admin BOOLEAN NOT NULL DEFAULT 0"),
        ("drama_severity_votes", "updated_at", "ALTER TABLE drama_severity_votes ADD COLUMN updated_at DATETIME"),
    ]
    try:
        with engine.connect() as conn:
            for table, column, statement in migrations:
                result = conn.execute(text(f"PRAGMA table_info({table})"))
                columns = [row[1] for row in result.fetchall()]

                if column not in columns:
                    logger.info("📦 Migrating: adding %s.%s", table, column)
                    conn.execute(text(statement))
                    conn.commit()
                else:
                    logger.debug("%s.%s already present, skipping", table, column)
    except Exception:
        logger.exception("⚠️ Database migration failed; some features may be unavailable")
