import inspect
import os
from collections.abc import Callable, Iterator
from unittest.mock import MagicMock

# Must be set before lenddesk.core.settings is first imported.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SESSION_SECRET_KEY", "test-secret-key")
os.environ.setdefault("ADMIN_USERNAME", "admin")
os.environ.setdefault("ADMIN_PASSWORD", "admin-password")
os.environ.setdefault("ENV_NAME", "test")

import anyio  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402
from sqlmodel.pool import StaticPool  # noqa: E402

from lenddesk.auth.dependencies import get_current_user  # noqa: E402
from lenddesk.auth.service import (  # noqa: E402
    FirebaseAuthService,
    TokenClaims,
    get_firebase_auth_service,
)
from lenddesk.core.settings import Settings, get_settings  # noqa: E402
from lenddesk.db.engine import get_session  # noqa: E402
from lenddesk.item.models import Item  # noqa: E402
from lenddesk.main import app  # noqa: E402
from lenddesk.user.models import ApprovalStatus, User, UserRole  # noqa: E402


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
def session_fixture() -> Iterator[Session]:
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture(name="make_user")
def make_user_fixture(session: Session) -> Callable[..., User]:
    """Factory for persisted users; usernames default from the external id."""

    def _make_user(
        external_id: str,
        *,
        role: UserRole = UserRole.viewer,
        approval_status: ApprovalStatus = ApprovalStatus.approved,
        is_active: bool = True,
        first_name: str = "Test",
        last_name: str = "User",
        email: str | None = None,
    ) -> User:
        user = User(
            external_id=external_id,
            email=email or f"{external_id}@example.com",
            username=external_id,
            first_name=first_name,
            last_name=last_name,
            role=role,
            approval_status=approval_status,
            is_active=is_active,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make_user


@pytest.fixture(name="test_user")
def test_user_fixture(make_user) -> User:
    """An approved viewer."""
    return make_user("viewer-uid-123", first_name="Vera", last_name="Viewer")


@pytest.fixture(name="other_user")
def other_user_fixture(make_user) -> User:
    return make_user("viewer-uid-456", first_name="Otto", last_name="Other")


@pytest.fixture(name="editor_user")
def editor_user_fixture(make_user) -> User:
    return make_user(
        "editor-uid-789", role=UserRole.editor, first_name="Eddie", last_name="Editor"
    )


@pytest.fixture(name="admin_user")
def admin_user_fixture(make_user) -> User:
    return make_user(
        "admin-uid-000", role=UserRole.admin, first_name="Ada", last_name="Admin"
    )


@pytest.fixture(name="item")
def item_fixture(session: Session) -> Item:
    item = Item(
        name="Cordless Drill",
        description="18V drill with two batteries",
        photo_url="https://cdn.example.com/drill.jpg",
        qty_total=5,
        qty_available=3,
    )
    session.add(item)
    session.commit()
    session.refresh(item)
    return item


@pytest.fixture(name="mock_firebase_auth")
def mock_firebase_auth_fixture() -> MagicMock:
    """Create a mock FirebaseAuthService."""
    mock_service = MagicMock(spec=FirebaseAuthService)
    mock_service.verify_session_cookie.return_value = TokenClaims(uid="test-uid")
    mock_service.verify_id_token.return_value = TokenClaims(uid="test-uid")
    return mock_service


@pytest.fixture(name="mock_settings")
def mock_settings_fixture() -> Settings:
    return Settings(
        env_name="test",
        database_url="sqlite://",
        session_secret_key="test-secret-key",
        admin_username="admin",
        admin_password="admin-password",
        session_expires_days=5,
        firebase_api_key="test-api-key",
    )


@pytest.fixture(name="client_for")
def client_for_fixture(
    session: Session,
    mock_firebase_auth: MagicMock,
    mock_settings: Settings,
) -> Iterator[Callable[[User | None], TestClient]]:
    """Build a TestClient authenticated as the given user (None: no override)."""

    def _client_for(user: User | None) -> TestClient:
        app.dependency_overrides[get_session] = lambda: session
        app.dependency_overrides[get_firebase_auth_service] = lambda: mock_firebase_auth
        app.dependency_overrides[get_settings] = lambda: mock_settings
        if user is None:
            app.dependency_overrides.pop(get_current_user, None)
        else:
            app.dependency_overrides[get_current_user] = lambda: user
        return TestClient(app)

    yield _client_for

    app.dependency_overrides.clear()


@pytest.fixture(name="client")
def client_fixture(client_for, test_user: User) -> TestClient:
    """Client authenticated as an approved viewer."""
    return client_for(test_user)


@pytest.fixture(name="staff_client")
def staff_client_fixture(client_for, editor_user: User) -> TestClient:
    return client_for(editor_user)


@pytest.fixture(name="admin_client")
def admin_client_fixture(client_for, admin_user: User) -> TestClient:
    return client_for(admin_user)


@pytest.fixture(name="unauthenticated_client")
def unauthenticated_client_fixture(client_for) -> TestClient:
    """Client without the auth override (exercises get_current_user)."""
    return client_for(None)
