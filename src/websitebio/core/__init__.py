"""Core functionality shared by the UI and the proxy API.

- **config**: Environment-based configuration using Pydantic Settings
  (``WEBSITEBIO_`` prefix, global ``config`` instance)
- **errors**: ValidationError / ApiError / TransportError / PersistenceWarning
- **models**: GenerationRequest, GeneratedImage, Settings, RecentPrompt
- **image_client**: httpx client for the external image API
- **local_store**: JSON-file key-value store (the ``localStorage`` analogue)
- **persistence**: Settings and recent-prompt persistence over the store
"""

from websitebio.core.config import WebsiteBioConfig, config
from websitebio.core.errors import (
    ApiError,
    PersistenceWarning,
    TransportError,
    ValidationError,
    WebsiteBioError,
)
from websitebio.core.image_client import ImageApiClient
from websitebio.core.local_store import LocalStore
from websitebio.core.models import GeneratedImage, GenerationRequest, RecentPrompt, Settings
from websitebio.core.persistence import LoadResult, PersistenceLayer

__all__ = [
    "ApiError",
    "GeneratedImage",
    "GenerationRequest",
    "ImageApiClient",
    "LoadResult",
    "LocalStore",
    "PersistenceLayer",
    "PersistenceWarning",
    "RecentPrompt",
    "Settings",
    "TransportError",
    "ValidationError",
    "WebsiteBioConfig",
    "WebsiteBioError",
    "config",
]
