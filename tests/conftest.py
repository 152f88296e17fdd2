from datetime import datetime, timedelta

import pytest
import pytz
from fastapi.testclient import TestClient

from storefront.application.commerce_store import CommerceStore
from storefront.main import create_app


class FakeClock:
    """Starts at a fixed instant and advances one second per call."""

    def __init__(self, start=None):
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=pytz.UTC)

    def __call__(self):
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def store(clock):
    return CommerceStore(discount_interval=3, discount_percent=0.10, clock=clock)


@pytest.fixture()
def client(store):
    return TestClient(create_app(store=store))

