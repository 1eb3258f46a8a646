from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base
from ghostbill.conf import DATABASE_URL, DB_LOG_ENABLED, POOL_SIZE, MAX_OVERFLOW, POOL_TIMEOUT
from ghostbill.core.log.logging_service import get_logger

logger = get_logger(__name__)

# Create engine
# echo=True prints all executed SQL. Set to 0 (False) for production unless debugging.
if DATABASE_URL.startswith("sqlite"):
    engine = create_engine(
        DATABASE_URL,
        echo=DB_LOG_ENABLED,
        connect_args={"check_same_thread": False},  # scheduler jobs run off the request thread
    )
else:
    engine = create_engine(
        DATABASE_URL,
        echo=DB_LOG_ENABLED,
        pool_size=POOL_SIZE,
        max_overflow=MAX_OVERFLOW,
        pool_timeout=POOL_TIMEOUT,
    )

@event.listens_for(engine, "connect")
def set_pg_timezone(dbapi_connection, connection_record):
    """
    Sets the session timezone to UTC for PostgreSQL connections so that
    created_at/updated_at defaults and date comparisons use the same calendar
    as the recurrence scheduler.

    SQLite has no timezone support and needs nothing here.
    """
    if hasattr(dbapi_connection, 'server_version'):  # PostgreSQL connection
        try:
            with dbapi_connection.cursor() as cursor:
                cursor.execute("SET TIMEZONE TO 'UTC'")
        except Exception as e:
            # Log the error but don't fail the connection
            logger.warning(f"Could not set timezone to UTC: {e}")

# autoflush=False: Changes are not flushed automatically to the DB until commit or explicit flush.
# expire_on_commit=False: rows stay readable after the session that loaded them is closed.
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
Base = declarative_base()


def init_db(bind=None) -> None:
    """Create all tables. Models must be imported before this runs."""
    from ghostbill.domain.schemas import feedback, merchant_override, profile, recurring_transaction, transaction  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)
