import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from readability_study.db import models  # noqa: F401
from readability_study.db.session import Base, get_db
from readability_study.main import app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    """Session against the same in-memory database the client writes to."""
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_study_text(client):
    def _make(version: str, active: bool = False, **fields) -> int:
        payload = {"version": version, "content": f"{version} content", "active": active}
        payload.update(fields)
        response = client.post("/api/admin/study-text", json=payload)
        assert response.status_code in (200, 201), response.text
        return response.json()["id"]

    return _make
