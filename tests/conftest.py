from datetime import datetime, timezone

import pytest

from .fakes import FakeClient, FakeSurface, make_task


@pytest.fixture()
def tasks():
    return [make_task(i, project=f"P{i}", activity=f"A{i}") for i in range(1, 11)]


@pytest.fixture()
def surface():
    return FakeSurface()


@pytest.fixture()
def client(tasks):
    return FakeClient(recent=tasks)


@pytest.fixture()
def fixed_clock():
    now = datetime(2024, 1, 1, 12, 30, tzinfo=timezone.utc)
    return lambda: now
