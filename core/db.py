"""
Database configuration
"""
from sqlmodel import SQLModel, create_engine, Session
from sqlmodel.pool import StaticPool
from core.config import get_settings

IN_MEMORY_SQLITE_URIS = ("sqlite://", "sqlite:///:memory:")

# Create engine lazily to allow test configuration to be applied
_engine = None


def get_engine():
    """
    Get or create the database engine.
    This lazy initialization allows test settings to be applied properly.
    """
    global _engine
    if _engine is None:
        uri = str(get_settings().SQLALCHEMY_DATABASE_URI)
        if uri in IN_MEMORY_SQLITE_URIS:
            # In-memory sqlite lives in one connection, shared across the threadpool
            _engine = create_engine(
                uri,
                echo=False,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        elif uri.startswith("sqlite"):
            _engine = create_engine(
                uri, echo=False, connect_args={"check_same_thread": False}
            )
        else:
            _engine = create_engine(uri, echo=False)
    return _engine


def reset_engine():
    """
    Reset the engine to None.
    This is useful for tests that need to switch between different settings.
    """
    global _engine
    _engine = None


def create_db_and_tables():
    """ Create all tables registered on SQLModel.metadata """
    # Register table models before create_all
    import api.files.models  # noqa: F401

    SQLModel.metadata.create_all(get_engine())


# Yield session
def get_session():
    with Session(get_engine()) as session:
        yield session
