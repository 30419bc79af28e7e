from __future__ import annotations

import pytest

from .common import FakeApi, Notifications


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def notify() -> Notifications:
    return Notifications()
