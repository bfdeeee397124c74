"""Browser API configuration models."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from crd_browser.integrations.browser_api.exceptions import BrowserConfigError

DEFAULT_FALLBACK_NAMESPACES = ["default", "kube-system", "kube-public"]


class ConnectionConfig(BaseModel):
    """Browser API connection configuration."""

    model_config = ConfigDict(extra="forbid")

    base_url: str = "http://localhost:8080"
    timeout: float = 30.0
    verify_ssl: bool = True
    retries: int = 3

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate base URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate timeout is positive."""
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @field_validator("retries")
    @classmethod
    def validate_retries(cls, v: int) -> int:
        """Validate retries is non-negative."""
        if v < 0:
            raise ValueError("retries must be non-negative")
        return v


class BrowserConfig(BaseModel):
    """Complete browser configuration."""

    model_config = ConfigDict(extra="forbid")

    connection: ConnectionConfig = ConnectionConfig()
    catalog_path: Literal["/api/crds", "/api/resources"] = "/api/crds"
    fallback_namespaces: list[str] = Field(
        default_factory=lambda: list(DEFAULT_FALLBACK_NAMESPACES),
        description="Namespaces offered when the cluster namespace list is unavailable",
    )
    output_format: Literal["table", "json", "yaml"] = "table"

    @field_validator("fallback_namespaces")
    @classmethod
    def validate_fallback_namespaces(cls, v: list[str]) -> list[str]:
        """Validate the fallback list is non-empty and free of blanks."""
        cleaned = [ns.strip() for ns in v if ns.strip()]
        if not cleaned:
            raise ValueError("fallback_namespaces must contain at least one namespace")
        return cleaned

    @property
    def base_url(self) -> str:
        """Shortcut for the connection base URL."""
        return self.connection.base_url

    @classmethod
    def get_config_path(cls) -> Path:
        """Get the default config file path.

        Returns:
            Path to the config file (~/.config/crdb/config.yaml).
        """
        return Path.home() / ".config" / "crdb" / "config.yaml"

    @classmethod
    def from_env(cls, base_config: dict[str, Any] | None = None) -> BrowserConfig:
        """Create configuration with environment variable overrides.

        Environment variables take precedence over base_config values.

        Supported environment variables:
            CRDB_BASE_URL: Browser API base URL
            CRDB_TIMEOUT: Request timeout in seconds
            CRDB_CATALOG_PATH: Catalog endpoint (/api/crds or /api/resources)
            CRDB_FALLBACK_NAMESPACES: Comma-separated fallback namespaces
            CRDB_OUTPUT: Output format (table, json, yaml)

        Raises:
            BrowserConfigError: If the merged configuration is invalid.
        """
        config_dict = dict(base_config) if base_config else {}
        connection = dict(config_dict.get("connection") or {})

        if base_url := os.environ.get("CRDB_BASE_URL"):
            connection["base_url"] = base_url
        if timeout := os.environ.get("CRDB_TIMEOUT"):
            connection["timeout"] = timeout
        config_dict["connection"] = connection

        if catalog_path := os.environ.get("CRDB_CATALOG_PATH"):
            config_dict["catalog_path"] = catalog_path
        if fallback := os.environ.get("CRDB_FALLBACK_NAMESPACES"):
            config_dict["fallback_namespaces"] = fallback.split(",")
        if output_format := os.environ.get("CRDB_OUTPUT"):
            config_dict["output_format"] = output_format

        try:
            return cls.model_validate(config_dict)
        except ValidationError as e:
            raise BrowserConfigError("Invalid browser configuration", details=str(e)) from e

    @classmethod
    def load(cls, path: Path | None = None) -> BrowserConfig:
        """Load configuration from file and environment.

        Priority (highest first):
        1. Environment variables (CRDB_*)
        2. Config file (explicit path or ~/.config/crdb/config.yaml)
        3. Built-in defaults

        A missing default config file is not an error; a missing explicit
        path is.

        Args:
            path: Optional explicit config file path.

        Returns:
            Loaded configuration.

        Raises:
            BrowserConfigError: If the file is unreadable or invalid.
        """
        config_path = path or cls.get_config_path()
        if not config_path.exists():
            if path is not None:
                raise BrowserConfigError(
                    "Config file not found",
                    details=f"No such file: {config_path}",
                )
            return cls.from_env()

        try:
            with config_path.open() as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise BrowserConfigError("Invalid config file format", details=str(e)) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise BrowserConfigError(
                "Invalid config file format",
                details=f"Expected a mapping at the top level of {config_path}",
            )
        return cls.from_env(data)
