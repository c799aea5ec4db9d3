import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from student_records.config import settings
from student_records.database.base import Base
from student_records.database.models import Student, StudentFile  # noqa: F401 (register tables)
from student_records.database.repositories import StudentFileRepository, StudentRepository
from student_records.database.session import get_db
from student_records.main import app
from student_records.services.storage import LocalBlobStorage, get_storage
from student_records.services.file_services import FileService
from student_records.services.student_service import StudentService


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def storage(tmp_path):
    return LocalBlobStorage(root=tmp_path / "blobs", secret_key="test-secret")


@pytest.fixture
def student_service(db_session, storage):
    return StudentService(StudentRepository(db_session), StudentFileRepository(db_session), storage)


@pytest.fixture
def file_service(db_session, storage):
    return FileService(StudentRepository(db_session), StudentFileRepository(db_session), storage)


@pytest.fixture
def client(db_session, storage):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def logged_in_client(client):
    response = client.post(
        "/login",
        data={"email": settings.ADMIN_EMAIL, "password": settings.ADMIN_PASSWORD},
        follow_redirects=False
    )
    assert response.status_code == 303
    return client
