"""Shared pytest fixtures for router integration tests."""

import pytest
from unittest.mock import AsyncMock, Mock

from fastapi.testclient import TestClient

from postsmith.exceptions import InvalidTokenError
from postsmith.repositories import InMemoryAccountStore, InMemoryHistoryStore
from postsmith.services.auth_service import AuthenticatedUser


@pytest.fixture
def components(scripted_llm, clock):
    """Service graph over in-memory stores, the scripted LLM and the fake clock."""
    from postsmith.config import get_settings
    from postsmith.factories.service_factories import build_components

    settings = get_settings().model_copy(update={"upstream_retry_wait_seconds": 0})
    return build_components(
        settings,
        llm=scripted_llm,
        account_store=InMemoryAccountStore(),
        history_store=InMemoryHistoryStore(),
        clock=clock,
    )


@pytest.fixture
def mock_user():
    return AuthenticatedUser(uid="uid-123", email="ada@example.com", name="Ada Lovelace")


@pytest.fixture
def mock_auth_service():
    """Rejects every token it is asked to verify."""
    service = Mock()
    service.verify_token = AsyncMock(side_effect=InvalidTokenError("Token has expired"))
    return service


def _create_test_client(components, mock_auth_service, *, mock_user=None):
    """Build a TestClient with the service graph and auth overridden.

    When mock_user is provided every request is authenticated as that user.
    When omitted, auth dependencies run normally: no header means guest on
    /generate and 401 elsewhere, and any token is rejected.
    """
    from postsmith.main import app
    from postsmith.dependencies import (
        get_components,
        get_current_user_optional,
        get_current_user_required,
    )
    from postsmith.services.auth_service import get_auth_service

    app.dependency_overrides[get_components] = lambda: components
    app.dependency_overrides[get_auth_service] = lambda: mock_auth_service

    if mock_user is not None:
        app.dependency_overrides[get_current_user_required] = lambda: mock_user
        app.dependency_overrides[get_current_user_optional] = lambda: mock_user

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def client(components, mock_auth_service, mock_user):
    """Create TestClient with all dependencies overridden including auth."""
    yield from _create_test_client(components, mock_auth_service, mock_user=mock_user)


@pytest.fixture
def unauthenticated_client(components, mock_auth_service):
    """Create TestClient WITHOUT auth override to test guest and 401 responses."""
    yield from _create_test_client(components, mock_auth_service)


@pytest.fixture
def valid_body():
    return {
        "topic": "Launching my new AI newsletter",
        "platform": "LinkedIn",
        "tone": "Professional",
        "language": "English",
    }
