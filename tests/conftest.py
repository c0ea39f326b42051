"""Test fixtures and mocks."""
import pytest

from pyhap.loader import Loader

from th10switch.config import Config

from . import DEVICE_ADDRESS, FakeClient


@pytest.fixture(scope="session")
def mock_driver():
    yield MockDriver()


@pytest.fixture
def config():
    return Config(ip_address=DEVICE_ADDRESS, name="Freezer", alert_count=1)


@pytest.fixture
def fake_client():
    return FakeClient()


class MockDriver:
    def __init__(self):
        self.loader = Loader()

    def publish(self, data, client_addr=None, immediate=False):
        pass
