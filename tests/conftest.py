import pytest
from fastapi.testclient import TestClient

from socialfeed.core.config import Settings
from socialfeed.main import create_app

PASSWORD = "password123"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        UPLOAD_DIRECTORY=str(tmp_path / "uploads"),
        SECRET_KEY="test-secret",
        BACKEND_CORS_ORIGINS=["http://testserver"],
        MAX_UPLOAD_SIZE=1024,
        ENVIRONMENT="test",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # Entering the client runs the lifespan, which creates the tables
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(app, client):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def storage(app):
    return app.state.storage


def register(client, name="Alice", email="alice@x.com", password=PASSWORD, **extra):
    body = {
        "name": name,
        "email": email,
        "password": password,
        "password_confirmation": password,
        **extra,
    }
    return client.post("/api/register", json=body)


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register_and_login(client, name="Alice", email="alice@x.com"):
    """Register an account and return (user json, auth headers)"""
    response = register(client, name=name, email=email)
    assert response.status_code == 201, response.text
    data = response.json()
    return data["user"], auth_headers(data["token"])


def create_post(client, headers, title="Hello", content="World", files=None):
    response = client.post(
        "/api/posts", data={"title": title, "content": content}, files=files, headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def alice(client):
    return register_and_login(client, "Alice", "alice@x.com")


@pytest.fixture
def bob(client):
    return register_and_login(client, "Bob", "bob@x.com")
