"""HTTP client fixtures wired to an isolated database and session storage."""

from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine

from src.agenda.api.http.app import app
from src.agenda.api.http.app_data import ApplicationDependencies
from src.agenda.core.services.auth import AuthService
from src.agenda.core.services.database import DbSessionService
from src.agenda.core.services.notifications import ToastStore
from src.agenda.core.services.session import UserSessionService
from src.agenda.core.storage.session_storage import InMemorySessionStorage

__all__ = ["app_dependencies", "client", "sign_up"]


@pytest.fixture
def app_dependencies(
    engine: Engine,
    session_storage: InMemorySessionStorage,
    user_session_service: UserSessionService,
    auth_service: AuthService,
) -> ApplicationDependencies:
    return ApplicationDependencies(
        database_service=DbSessionService(engine),
        user_session_service=user_session_service,
        auth_service=auth_service,
        toast_store=ToastStore(session_storage),
    )


@pytest.fixture
def client(app_dependencies: ApplicationDependencies) -> Generator[TestClient]:
    """Test client without lifespan; dependencies are installed directly."""
    app.state.app_dependencies = app_dependencies
    yield TestClient(app, base_url="http://testserver")
    del app.state.app_dependencies


@pytest.fixture
def sign_up(client: TestClient) -> Callable[..., TestClient]:
    """Create an account through the HTTP flow and keep its cookies on the client."""

    def _sign_up(
        email: str = "carla.owner@example.com",
        password: str = "secret123",
        full_name: str = "",
    ) -> TestClient:
        response = client.post(
            "/auth/sign-up",
            data={"email": email, "password": password, "full_name": full_name},
            follow_redirects=False,
        )
        assert response.status_code == 303
        assert response.headers["location"] == "/"
        return client

    return _sign_up
