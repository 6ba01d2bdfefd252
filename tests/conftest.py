import os
import random
import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so 'app', 'config', and 'moodwave' import correctly
_TESTS_DIR = os.path.dirname(__file__)
_ROOT_DIR = os.path.abspath(os.path.join(_TESTS_DIR, os.pardir))
if _ROOT_DIR not in sys.path:
    sys.path.insert(0, _ROOT_DIR)

from tests.support import factories as test_factories
from tests.support import stubs as test_stubs


@pytest.fixture
def database_uri(tmp_path_factory):
    db_dir = tmp_path_factory.mktemp("db")
    return f"sqlite:///{(Path(db_dir) / 'test.sqlite').as_posix()}"


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, database_uri):
    """Ensure a clean env for tests with per-test sqlite files."""
    monkeypatch.setenv("DATABASE_URL", database_uri)
    monkeypatch.setenv("SPOTIPY_CLIENT_ID", "test-client-id")
    monkeypatch.setenv("SPOTIPY_CLIENT_SECRET", "test-client-secret")
    yield


@pytest.fixture
def spotify_stub():
    return test_stubs.SpotipyStub()


@pytest.fixture
def token_manager():
    return test_stubs.TokenManagerStub()


@pytest.fixture
def catalog_client(spotify_stub, token_manager):
    from moodwave.domain.catalog import CatalogClient, CatalogCredentials

    credentials = CatalogCredentials(manager=token_manager)
    return CatalogClient(credentials=credentials, market="IN", spotify_client=spotify_stub)


@pytest.fixture
def app(database_uri, catalog_client):
    import app as app_module
    from moodwave.database.db_manager import db

    application = app_module.create_app(
        config_overrides={
            "TESTING": True,
            "SECRET_KEY": "test-secret",
            "SQLALCHEMY_DATABASE_URI": database_uri,
        },
        catalog_client=catalog_client,
    )
    application.extensions["aggregator_rng"] = random.Random(7)
    yield application
    with application.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def app_context(app):
    with app.app_context():
        yield app


@pytest.fixture
def db_session(app_context):
    from moodwave.database.db_manager import db

    test_factories.set_session(db.session)
    try:
        yield db.session
    finally:
        db.session.rollback()
        db.session.remove()
        test_factories.reset_session()


@pytest.fixture
def factories(db_session):
    yield test_factories


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def register(client):
    """Register (and log in) an account through the HTTP surface."""

    def _register(username="alice", email=None, password="password123", name="Alice"):
        response = client.post(
            "/user/register",
            json={
                "name": name,
                "username": username,
                "email": email or f"{username}@example.com",
                "password": password,
            },
        )
        assert response.status_code == 201, response.get_json()
        return response.get_json()["user"]

    return _register
