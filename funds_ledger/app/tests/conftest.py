import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from ..core.config import Settings, get_settings
from ..core.db import create_engine_for_url, get_session, init_db, set_engine
from ..main import app

ADMIN_TOKEN = "admin-token"
USER_TOKEN = "user-token"


@pytest.fixture
def engine(tmp_path):
    test_engine = create_engine_for_url(f"sqlite:///{tmp_path / 'test.db'}")
    SQLModel.metadata.drop_all(test_engine)
    SQLModel.metadata.create_all(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as db_session:
        yield db_session


@pytest.fixture
def settings() -> Settings:
    return Settings(api_tokens={ADMIN_TOKEN: "admin", USER_TOKEN: "user"})


@pytest.fixture
def client(engine, settings) -> TestClient:
    original_engine = set_engine(engine)

    def _get_session_override():
        with Session(engine) as db_session:
            yield db_session

    app.dependency_overrides[get_session] = _get_session_override
    app.dependency_overrides[get_settings] = lambda: settings
    init_db()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    set_engine(original_engine)


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def user_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {USER_TOKEN}"}
