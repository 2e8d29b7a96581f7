"""Shared pytest fixtures for repository tests."""

import pytest
from unittest.mock import AsyncMock, Mock
from contextlib import asynccontextmanager


@pytest.fixture
def mock_async_session():
    """Create a mock AsyncSession for repository tests."""
    session = AsyncMock()

    mock_result = Mock()
    mock_result.scalar_one_or_none = Mock(return_value=None)
    mock_result.scalars = Mock(return_value=Mock(all=Mock(return_value=[])))
    mock_result.rowcount = 0

    session.execute = AsyncMock(return_value=mock_result)
    session.commit = AsyncMock()
    session.add = Mock()

    return session


@pytest.fixture
def session_factory(mock_async_session):
    """Stand-in for ``async_sessionmaker`` yielding the mock session."""

    @asynccontextmanager
    async def factory():
        yield mock_async_session

    return factory
