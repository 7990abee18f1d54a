import logging
from pathlib import Path
from typing import Generator, List

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.orm import sessionmaker, Session, declarative_base

from message_service.config import Settings, settings

logger = logging.getLogger(__name__)

MESSAGES_TABLE = "messages"


def build_database_url(config: Settings) -> URL:
    """
    Build the SQLAlchemy URL from DATABASE_URL, letting the separate
    driver and credential settings override what the URL carries.
    """
    url = make_url(config.DATABASE_URL)
    overrides = {}
    if config.DATABASE_DRIVER:
        overrides["drivername"] = config.DATABASE_DRIVER
    if config.DATABASE_USERNAME:
        overrides["username"] = config.DATABASE_USERNAME
    if config.DATABASE_PASSWORD:
        overrides["password"] = config.DATABASE_PASSWORD
    if overrides:
        url = url.set(**overrides)
    return url


database_url = build_database_url(settings)

# check_same_thread=False lets SQLite connections cross FastAPI's threadpool
connect_args = {"check_same_thread": False} if database_url.get_backend_name() == "sqlite" else {}

engine = create_engine(
    database_url,
    connect_args=connect_args,
    echo=False,
)

# Create SessionLocal class for creating database sessions
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for SQLAlchemy models
Base = declarative_base()


def load_schema_statements(path: str) -> List[str]:
    """
    Read a DDL script and split it into individual statements.

    Full-line ``--`` comments are dropped before splitting on ``;``.
    """
    script = Path(path).read_text(encoding="utf-8")
    lines = [line for line in script.splitlines() if not line.strip().startswith("--")]
    statements = [stmt.strip() for stmt in "\n".join(lines).split(";")]
    return [stmt for stmt in statements if stmt]


def init_db() -> None:
    """
    Initialize the database by applying the schema script.
    Called during application startup.
    """
    if not settings.SCHEMA_INIT_ALWAYS:
        logger.info("Schema initialization disabled, skipping")
        return

    logger.debug(f"Initializing database with URL: {database_url.render_as_string(hide_password=True)}")
    try:
        # Import models to register them with Base.metadata
        from message_service.models import Message  # noqa: F401

        statements = load_schema_statements(settings.SCHEMA_LOCATION)
        logger.debug(f"Applying {len(statements)} schema statements from {settings.SCHEMA_LOCATION}")
        with engine.begin() as conn:
            for statement in statements:
                conn.exec_driver_sql(statement)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise


def get_db() -> Generator[Session, None, None]:
    """
    Dependency to get database session.
    Yields a session and ensures it's closed after use.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_health() -> bool:
    """
    Check if the database is reachable and schema is applied.

    Returns:
        True if DB is healthy and schema exists, False otherwise.
    """
    logger.debug("Checking database health...")
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            logger.debug("Database connectivity OK")

            if not inspect(conn).has_table(MESSAGES_TABLE):
                logger.error(f"Database schema not applied: '{MESSAGES_TABLE}' table not found")
                return False
        logger.debug("Database health check passed")
        return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False
