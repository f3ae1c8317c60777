import os
import logging
from sqlmodel import SQLModel, Session, create_engine

logger = logging.getLogger(__name__)


def get_database_url() -> str:
    """Build the database URL from DATABASE_URL or the DB_* variables."""
    if os.environ.get("DATABASE_URL"):
        return os.environ["DATABASE_URL"]
    if os.environ.get("DB_HOST"):
        return (f"postgresql://{os.environ.get('DB_USER')}:{os.environ.get('DB_PASSWORD')}"
                f"@{os.environ.get('DB_HOST')}:{os.environ.get('DB_PORT', '5432')}"
                f"/{os.environ.get('DB_NAME')}")
    return "sqlite:///./client_requests.db"


DATABASE_URL = get_database_url()
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, connect_args=connect_args, pool_pre_ping=True)


def init_db():
    """Create tables that do not exist yet."""
    # Import models so they are registered with SQLModel
    import app.models  # noqa: F401
    SQLModel.metadata.create_all(engine)
    logger.info("✅ Database tables initialized.")


def get_db():
    with Session(engine) as session:
        yield session
