import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, create_engine, SQLModel
from sqlmodel.pool import StaticPool
from api.files.repository import FileRecordRepository
from api.files.services import FileStorageService
from core.deps import get_db, get_storage_service
from main import app


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="repository")
def repository_fixture(engine):
    """Metadata repository backed by the in-memory database"""
    return FileRecordRepository(engine)


@pytest.fixture(name="upload_dir")
def upload_dir_fixture(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture(name="storage_service")
def storage_service_fixture(repository, upload_dir):
    """Storage service writing into a temporary upload directory"""
    return FileStorageService(repository=repository, storage_location=upload_dir)


@pytest.fixture(name="client")
def client_fixture(session: Session, storage_service: FileStorageService):
    def get_db_override():
        return session

    def get_storage_service_override():
        return storage_service

    app.dependency_overrides[get_db] = get_db_override
    app.dependency_overrides[get_storage_service] = get_storage_service_override

    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
