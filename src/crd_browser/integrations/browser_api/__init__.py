"""Resource browser backend API integration."""

from crd_browser.integrations.browser_api.client import BrowserAPIClient
from crd_browser.integrations.browser_api.config import (
    DEFAULT_FALLBACK_NAMESPACES,
    BrowserConfig,
    ConnectionConfig,
)
from crd_browser.integrations.browser_api.exceptions import (
    BrowserAPIError,
    BrowserConfigError,
    BrowserConnectionError,
    BrowserNotFoundError,
    MalformedPayloadError,
)
from crd_browser.integrations.browser_api.models import (
    CORE_GROUP_TOKEN,
    ResourceKind,
    ResourceObject,
    object_name,
    object_namespace,
)

__all__ = [
    "CORE_GROUP_TOKEN",
    "DEFAULT_FALLBACK_NAMESPACES",
    "BrowserAPIClient",
    "BrowserAPIError",
    "BrowserConfig",
    "BrowserConfigError",
    "BrowserConnectionError",
    "BrowserNotFoundError",
    "ConnectionConfig",
    "MalformedPayloadError",
    "ResourceKind",
    "ResourceObject",
    "object_name",
    "object_namespace",
]
