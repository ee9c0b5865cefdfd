import pytest
from fastapi.testclient import TestClient

from relay.config import Config, RegistrySettings
from relay.main import app_factory


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def room_ttl_ms():
    return 60_000


@pytest.fixture
def config(room_ttl_ms):
    return Config(registry=RegistrySettings(room_ttl_ms=room_ttl_ms))


@pytest.fixture
def app(config):
    return app_factory(config)


@pytest.fixture
def client(app):
    with TestClient(app) as tc:
        yield tc


@pytest.fixture
def offer():
    return {"type": "offer", "sdp": "v=0\r\no=- 1 2 IN IP4 127.0.0.1\r\n"}


@pytest.fixture
def answer():
    return {"type": "answer", "sdp": "v=0\r\no=- 3 4 IN IP4 127.0.0.1\r\n"}
