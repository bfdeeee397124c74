"""Integration tests for BrowserStore over a mocked HTTP backend.

These tests drive the real BrowserAPIClient through respx so that status
translation, payload validation and state updates are exercised together.
"""

from __future__ import annotations

from typing import Any

import httpx
import pytest
import respx
from httpx import Response

from crd_browser.integrations.browser_api.client import BrowserAPIClient
from crd_browser.integrations.browser_api.config import BrowserConfig
from crd_browser.services.browser.state import ALL_NAMESPACES
from crd_browser.services.browser.store import BrowserStore


class TestCatalogFlow:
    """Catalog and namespace loading end to end."""

    @pytest.mark.integration
    @pytest.mark.asyncio
    @respx.mock
    async def test_refresh(
        self,
        browser_config: BrowserConfig,
        base_url: str,
        catalog_payload: list[dict[str, Any]],
        events: Any,
    ) -> None:
        respx.get(f"{base_url}/api/crds").mock(return_value=Response(200, json=catalog_payload))
        respx.get(f"{base_url}/api/namespaces").mock(
            return_value=Response(200, json=["default", "kube-system"])
        )

        async with BrowserAPIClient(browser_config) as client:
            store = BrowserStore(client, config=browser_config, events=events)
            await store.refresh()

        assert len(store.resources) == 4
        assert store.sorted_resources()[0].name == "namespaces"
        assert store.namespaces == ["default", "kube-system"]
        assert store.error is None
        assert store.loading is False

    @pytest.mark.integration
    @pytest.mark.asyncio
    @respx.mock
    async def test_non_list_catalog_is_an_error(
        self,
        browser_config: BrowserConfig,
        base_url: str,
    ) -> None:
        respx.get(f"{base_url}/api/crds").mock(
            return_value=Response(200, json={"items": []})
        )

        async with BrowserAPIClient(browser_config) as client:
            store = BrowserStore(client, config=browser_config)
            await store.load_catalog()

        assert store.resources == []
        assert store.error is not None
        assert store.error.startswith("Failed to load resource catalog")

    @pytest.mark.integration
    @pytest.mark.asyncio
    @respx.mock
    async def test_namespace_outage_uses_fallback(
        self,
        browser_config: BrowserConfig,
        base_url: str,
        events: Any,
    ) -> None:
        respx.get(f"{base_url}/api/namespaces").mock(
            side_effect=httpx.ConnectError("connection refused")
        )

        async with BrowserAPIClient(browser_config) as client:
            store = BrowserStore(client, config=browser_config, events=events)
            await store.load_namespaces()

        assert store.namespaces == ["default", "kube-system", "kube-public"]
        assert store.error is None
        assert "namespaces_fallback_used" in events.names

    @pytest.mark.integration
    @pytest.mark.asyncio
    @respx.mock
    async def test_alternate_catalog_path(
        self,
        base_url: str,
        catalog_payload: list[dict[str, Any]],
    ) -> None:
        config = BrowserConfig.model_validate(
            {"connection": {"base_url": base_url, "retries": 0}, "catalog_path": "/api/resources"}
        )
        respx.get(f"{base_url}/api/resources").mock(
            return_value=Response(200, json=catalog_payload)
        )

        async with BrowserAPIClient(config) as client:
            store = BrowserStore(client, config=config)
            await store.load_catalog()

        assert len(store.resources) == 4


class TestObjectFlow:
    """Selecting a kind and loading its objects end to end."""

    @pytest.mark.integration
    @pytest.mark.asyncio
    @respx.mock
    async def test_open_core_resource(
        self,
        browser_config: BrowserConfig,
        base_url: str,
        catalog_payload: list[dict[str, Any]],
        object_factory: Any,
    ) -> None:
        """Core kinds are requested under the ``core`` path segment."""
        respx.get(f"{base_url}/api/crds").mock(return_value=Response(200, json=catalog_payload))
        objects_route = respx.get(f"{base_url}/api/crds/core/v1/pods/objects").mock(
            return_value=Response(200, json=[object_factory("web-0", "default")])
        )
        respx.get(f"{base_url}/api/crds/core/v1/pods/namespaces").mock(
            return_value=Response(200, json=["default"])
        )

        async with BrowserAPIClient(browser_config) as client:
            store = BrowserStore(client, config=browser_config)
            await store.load_catalog()
            pods = store.select_by_key("core", "v1", "pods")
            await store.open_resource(pods)

        assert objects_route.called
        assert store.scope == ALL_NAMESPACES
        assert store.find_object("web-0", "default") is not None
        assert store.resource_namespaces == ["default"]

    @pytest.mark.integration
    @pytest.mark.asyncio
    @respx.mock
    async def test_scope_reload_passes_namespace(
        self,
        browser_config: BrowserConfig,
        base_url: str,
        deployments_kind: Any,
        object_factory: Any,
    ) -> None:
        objects_route = respx.get(f"{base_url}/api/crds/apps/v1/deployments/objects").mock(
            return_value=Response(200, json=[object_factory("api", "prod")])
        )

        async with BrowserAPIClient(browser_config) as client:
            store = BrowserStore(client, config=browser_config)
            store.select(deployments_kind)
            await store.set_scope_and_reload("prod")

        assert objects_route.calls.last.request.url.params["namespace"] == "prod"
        assert [o["metadata"]["name"] for o in store.objects] == ["api"]

    @pytest.mark.integration
    @pytest.mark.asyncio
    @respx.mock
    async def test_object_failure_uses_server_message(
        self,
        browser_config: BrowserConfig,
        base_url: str,
        deployments_kind: Any,
    ) -> None:
        respx.get(f"{base_url}/api/crds/apps/v1/deployments/objects").mock(
            return_value=Response(403, json={"error": "deployments.apps is forbidden"})
        )
        respx.get(f"{base_url}/api/crds/apps/v1/deployments/namespaces").mock(
            return_value=Response(403, json={"error": "forbidden"})
        )

        async with BrowserAPIClient(browser_config) as client:
            store = BrowserStore(client, config=browser_config)
            await store.open_resource(deployments_kind)

        assert store.objects == []
        assert store.resource_namespaces == []
        assert store.error == (
            "Failed to load deployments (apps/v1): deployments.apps is forbidden"
        )

    @pytest.mark.integration
    @pytest.mark.asyncio
    @respx.mock
    async def test_malformed_objects_payload_is_empty(
        self,
        browser_config: BrowserConfig,
        base_url: str,
        crd_kind: Any,
    ) -> None:
        respx.get(f"{base_url}/api/crds/cert-manager.io/v1/clusterissuers/objects").mock(
            return_value=Response(200, json={"kind": "List"})
        )
        respx.get(f"{base_url}/api/crds/cert-manager.io/v1/clusterissuers/namespaces").mock(
            return_value=Response(200, json=[])
        )

        async with BrowserAPIClient(browser_config) as client:
            store = BrowserStore(client, config=browser_config)
            await store.open_resource(crd_kind)

        assert store.objects == []
        assert store.error is None
