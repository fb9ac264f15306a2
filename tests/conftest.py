import inspect
from pathlib import Path

import anyio
import httpx
import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

import peopledir.models  # noqa: F401
from peopledir.core.settings import Settings, get_settings
from peopledir.db.engine import get_session
from peopledir.directory.client import DirectoryClient
from peopledir.main import app
from peopledir.services.image_storage import LocalImageStorage, get_image_storage
from peopledir.user.models import Role, Team, User
from tests.factories import make_user


def pytest_configure(config: pytest.Config) -> None:
    # Tests use @pytest.mark.asyncio, but we intentionally rely on anyio.
    config.addinivalue_line(
        "markers",
        "asyncio: run async tests using anyio (project-local hook)",
    )


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Run @pytest.mark.asyncio tests with anyio.

    This avoids adding an external pytest-asyncio dependency.
    """
    if pyfuncitem.get_closest_marker("asyncio") is None:
        return None

    test_func = pyfuncitem.obj
    if not inspect.iscoroutinefunction(test_func):
        return None

    funcargs = {
        name: pyfuncitem.funcargs[name] for name in pyfuncitem._fixtureinfo.argnames
    }

    async def _run_async_test() -> None:
        await test_func(**funcargs)

    anyio.run(_run_async_test)
    return True


@pytest.fixture(name="session")
def session_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture(name="user_a")
def user_a_fixture(session: Session) -> User:
    user = make_user(
        name="A",
        email="a@x.com",
        work_email="a.work@x.com",
        role=Role.product_designer,
        teams=[Team.design.value],
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture(name="user_b")
def user_b_fixture(session: Session) -> User:
    user = make_user(
        name="B",
        email="b@x.com",
        work_email="b.work@x.com",
        role=Role.backend_developer,
        teams=[Team.design.value, Team.technology.value],
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture(name="upload_dir")
def upload_dir_fixture(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture(name="image_storage")
def image_storage_fixture(upload_dir: Path) -> LocalImageStorage:
    return LocalImageStorage(upload_dir, "/uploads")


@pytest.fixture(name="mock_settings")
def mock_settings_fixture(upload_dir: Path) -> Settings:
    """Create test settings."""
    return Settings(
        env_name="test",
        database_url="sqlite://",
        upload_dir=upload_dir,
        max_image_bytes=1024,
    )


@pytest.fixture(name="overrides")
def overrides_fixture(
    session: Session,
    image_storage: LocalImageStorage,
    mock_settings: Settings,
):
    """Point the app at the test database, storage and settings."""

    def get_session_override():
        return session

    def get_image_storage_override():
        return image_storage

    def get_settings_override():
        return mock_settings

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_image_storage] = get_image_storage_override
    app.dependency_overrides[get_settings] = get_settings_override

    yield

    app.dependency_overrides.clear()


@pytest.fixture(name="client")
def client_fixture(overrides) -> TestClient:
    """Create a test client with overridden dependencies."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture(name="directory_client")
def directory_client_fixture(overrides):
    """DirectoryClient wired to the app in-process through ASGITransport."""
    client = DirectoryClient(
        "http://testserver", transport=httpx.ASGITransport(app=app)
    )
    yield client
    anyio.run(client.aclose)
