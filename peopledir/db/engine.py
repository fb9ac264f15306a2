from collections.abc import Generator

from sqlalchemy import Engine
from sqlmodel import Session, SQLModel, create_engine

from peopledir.core.settings import get_settings

_settings = get_settings()

connect_args: dict[str, object] = {}
if _settings.database_url.startswith("sqlite"):
    # Required for SQLite when used with FastAPI across threads.
    connect_args = {"check_same_thread": False}

engine = create_engine(_settings.database_url, echo=False, connect_args=connect_args)


def init_db(bind: Engine = engine) -> None:
    """Create missing tables for all registered table models."""
    # Registers table models in SQLModel.metadata
    import peopledir.models  # noqa: F401

    SQLModel.metadata.create_all(bind)


def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session
