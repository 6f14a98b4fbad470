"""Fixtures for application service tests: mocked repositories, recorder and cache."""

from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def recorder():
    r = AsyncMock()
    r.record = AsyncMock(return_value=None)
    return r


@pytest.fixture
def cache():
    c = AsyncMock()
    c.get = AsyncMock(return_value=None)
    c.put = AsyncMock(return_value=None)
    c.invalidate = AsyncMock(return_value=None)
    return c


@pytest.fixture
def logger():
    return MagicMock()
