"""Shared pytest fixtures for crd_browser tests."""

from __future__ import annotations

import os
from collections.abc import Generator
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from crd_browser.integrations.browser_api.config import BrowserConfig, ConnectionConfig
from crd_browser.integrations.browser_api.models import ResourceKind

BASE_URL = "http://browser.test"


class RecordingEventSink:
    """Event sink that keeps every emitted event for assertions."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def emit(self, event: str, **fields: Any) -> None:
        self.events.append((event, fields))

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    def fields_for(self, event: str) -> list[dict[str, Any]]:
        return [fields for name, fields in self.events if name == event]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear CRDB_ environment variables for each test."""
    for key in list(os.environ.keys()):
        if key.startswith("CRDB_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path) -> Generator[Path]:
    """Keep config lookups and log files inside the test's tmp dir."""
    log_dir = tmp_path / "state"
    with (
        patch("pathlib.Path.home", return_value=tmp_path),
        patch("crd_browser.logging.config.LOG_DIR", log_dir),
        patch("crd_browser.logging.config.LOG_FILE", log_dir / "crdb.log"),
    ):
        yield tmp_path


@pytest.fixture
def base_url() -> str:
    """Base URL used by mocked backends."""
    return BASE_URL


@pytest.fixture
def browser_config() -> BrowserConfig:
    """Config pointing at the mocked backend, without retry delays."""
    return BrowserConfig(connection=ConnectionConfig(base_url=BASE_URL, retries=0))


@pytest.fixture
def events() -> RecordingEventSink:
    """Recording event sink."""
    return RecordingEventSink()


@pytest.fixture
def pods_kind() -> ResourceKind:
    """Core group pods."""
    return ResourceKind(group="", version="v1", name="pods", namespaced=True, kind="Pod")


@pytest.fixture
def deployments_kind() -> ResourceKind:
    """apps/v1 deployments."""
    return ResourceKind(
        group="apps", version="v1", name="deployments", namespaced=True, kind="Deployment"
    )


@pytest.fixture
def crd_kind() -> ResourceKind:
    """A cluster-scoped custom resource kind."""
    return ResourceKind(
        group="cert-manager.io",
        version="v1",
        name="clusterissuers",
        namespaced=False,
        kind="ClusterIssuer",
    )


@pytest.fixture
def catalog_payload() -> list[dict[str, Any]]:
    """Catalog as the backend returns it."""
    return [
        {
            "group": "apps",
            "version": "v1",
            "name": "deployments",
            "kind": "Deployment",
            "namespaced": True,
        },
        {"group": "", "version": "v1", "name": "pods", "kind": "Pod", "namespaced": True},
        {
            "group": "",
            "version": "v1",
            "name": "namespaces",
            "kind": "Namespace",
            "namespaced": False,
        },
        {
            "group": "cert-manager.io",
            "version": "v1",
            "name": "clusterissuers",
            "kind": "ClusterIssuer",
            "namespaced": False,
        },
    ]


def make_object(name: str, namespace: str | None = None, **extra: Any) -> dict[str, Any]:
    """Build a minimal object document."""
    metadata: dict[str, Any] = {"name": name}
    if namespace is not None:
        metadata["namespace"] = namespace
    return {"apiVersion": "v1", "kind": "Object", "metadata": metadata, **extra}


@pytest.fixture
def object_factory() -> Any:
    """Factory for minimal object documents."""
    return make_object
