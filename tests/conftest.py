import pytest
from fastapi.testclient import TestClient

from trainload.config import Settings, get_settings
from trainload.main import app


@pytest.fixture(name="settings")
def settings_fixture():
    # Ignore any local .env so tests see the documented defaults.
    return Settings(_env_file=None)


@pytest.fixture(name="client")
def client_fixture(settings: Settings):
    def override_get_settings():
        return settings

    app.dependency_overrides[get_settings] = override_get_settings
    yield TestClient(app)
    app.dependency_overrides.clear()
