"""Shared fixtures."""

from __future__ import annotations

import pytest

from fakes import FakePlatformAPI, FakeUI


@pytest.fixture
def ui() -> FakeUI:
    return FakeUI()


@pytest.fixture
def api() -> FakePlatformAPI:
    return FakePlatformAPI()
