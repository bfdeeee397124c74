"""Fixtures for browser state layer unit tests."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from crd_browser.integrations.browser_api.client import BrowserAPIClient
from crd_browser.integrations.browser_api.config import BrowserConfig
from crd_browser.integrations.browser_api.models import ResourceKind
from crd_browser.services.browser.state import CatalogState
from crd_browser.services.browser.store import BrowserStore


@pytest.fixture
def mock_client() -> MagicMock:
    """Browser API client with every fetch replaced by an AsyncMock."""
    client = MagicMock(spec=BrowserAPIClient)
    client.list_resource_kinds = AsyncMock(return_value=[])
    client.list_namespaces = AsyncMock(return_value=[])
    client.list_objects = AsyncMock(return_value=[])
    client.list_resource_namespaces = AsyncMock(return_value=[])
    return client


@pytest.fixture
def state() -> CatalogState:
    """Fresh session state."""
    return CatalogState()


@pytest.fixture
def catalog_kinds(catalog_payload: list[dict[str, Any]]) -> list[ResourceKind]:
    """Catalog payload parsed into ResourceKind models."""
    return [ResourceKind.model_validate(item) for item in catalog_payload]


@pytest.fixture
def store(
    mock_client: MagicMock,
    browser_config: BrowserConfig,
    events: Any,
) -> BrowserStore:
    """Store wired to the mock client and a recording event sink."""
    return BrowserStore(mock_client, config=browser_config, events=events)
