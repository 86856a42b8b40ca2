from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

# Create Base class for models
Base = declarative_base()


def make_engine(database_url: str) -> Engine:
    """
    Create a SQLAlchemy engine for the given URL.

    SQLite URLs get a single shared connection so that in-memory databases
    survive across sessions and worker threads.
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    return create_engine(
        database_url,
        pool_pre_ping=True,  # Verify connections before using them
        pool_size=10,
        max_overflow=20
    )


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    """
    Create all tables directly from the models.

    Production databases are managed with Alembic ("alembic upgrade head");
    this is for local development and tests.
    """
    from app.models import user, job, editor_profile, review, application  # noqa: F401  register models
    Base.metadata.create_all(bind=engine)
