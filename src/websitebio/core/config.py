"""Configuration management for the WebsiteBio AI Image Generator.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the WEBSITEBIO_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (WEBSITEBIO_* prefix)
2. .env file in the project root
3. Default values defined in WebsiteBioConfig

The API credential and endpoint additionally accept the provider-level names
used by existing deployments (``WHOMEAI_API_KEY``, ``WHOMEAI_API_ENDPOINT`` and
``VITE_WHOMEAI_API_ENDPOINT``).

Example .env file:
    WEBSITEBIO_API_KEY=sk-live-...
    WEBSITEBIO_PROXY_URL=http://localhost:8000/api/generateImages
    WEBSITEBIO_DATA_DIR=data

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.

Usage Example
-------------
    from websitebio.core.config import config

    print(config.api_endpoint)
    print(config.target_url)
"""

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_KEY = "sk-demo"
DEFAULT_API_ENDPOINT = "https://api.whomeai.com/v1/images/generations"


class WebsiteBioConfig(BaseSettings):
    """Main configuration for the WebsiteBio AI Image Generator.

    Attributes
    ----------
    API Settings:
        api_key : str
            Credential sent as ``Authorization: Bearer <key>``
        api_endpoint : str
            URL of the external image generation API
        proxy_url : str | None
            When set, the UI posts to this proxy instead of the external API
        request_timeout : float | None
            Seconds before an outbound request is abandoned (None = no limit)

    Generation Options:
        default_model : str
            Model used when neither the user nor the request chooses one
        default_size : str
            Size used when neither the user nor the request chooses one
        available_models : list[str]
            Models offered in the model dropdown
        available_sizes : list[str]
            Sizes offered in the size dropdown ("WxH")
        max_images : int
            Upper bound of the quantity slider

    Paths:
        data_dir : Path
            Directory holding the local key-value store
        downloads_dir : Path
            Directory that receives downloaded images

    Server Settings:
        server_host / server_port : proxy API bind address
        gradio_server_name / gradio_server_port / gradio_share : UI bind
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="WEBSITEBIO_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # API settings
    api_key: str = Field(
        default=DEFAULT_API_KEY,
        validation_alias=AliasChoices("api_key", "WEBSITEBIO_API_KEY", "WHOMEAI_API_KEY"),
        description="Bearer credential for the external image API",
    )
    api_endpoint: str = Field(
        default=DEFAULT_API_ENDPOINT,
        validation_alias=AliasChoices(
            "api_endpoint",
            "WEBSITEBIO_API_ENDPOINT",
            "WHOMEAI_API_ENDPOINT",
            "VITE_WHOMEAI_API_ENDPOINT",
        ),
        description="External image generation endpoint",
    )
    proxy_url: str | None = Field(
        default=None,
        description="Route UI requests through this proxy endpoint when set",
    )
    request_timeout: float | None = Field(
        default=None,
        description="Outbound request timeout in seconds (None disables it)",
        gt=0,
    )

    # Generation options
    default_model: str = Field(default="nano-banana")
    default_size: str = Field(default="1024x1024")
    available_models: list[str] = Field(
        default_factory=lambda: [
            "nano-banana",
            "flux-schnell",
            "flux-dev",
            "stable-diffusion-xl",
        ],
    )
    available_sizes: list[str] = Field(
        default_factory=lambda: ["512x512", "768x768", "1024x1024", "1024x1792", "1792x1024"],
    )
    max_images: int = Field(default=4, ge=1, le=10)

    # Paths
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding the local key-value store",
    )
    downloads_dir: Path = Field(
        default=Path("downloads"),
        description="Directory that receives downloaded images",
    )

    # Proxy server settings
    server_host: str = Field(default="0.0.0.0")
    server_port: int = Field(default=8000, ge=1024, le=65535)

    # UI settings
    gradio_server_name: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    gradio_server_port: int = Field(default=7860, ge=1024, le=65535)
    gradio_share: bool = Field(
        default=False,
        description="Create public gradio.live link (keep False for local-only)",
    )

    def __init__(self, **kwargs):
        """Initialize configuration and create required directories.

        Args:
            **kwargs: Configuration overrides (typically from environment variables)
        """
        super().__init__(**kwargs)

        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.downloads_dir.mkdir(parents=True, exist_ok=True)

    @property
    def store_path(self) -> Path:
        """Path of the JSON file backing the local key-value store."""
        return self.data_dir / "local_storage.json"

    @property
    def target_url(self) -> str:
        """URL the UI posts generation requests to."""
        return self.proxy_url or self.api_endpoint


# Global configuration instance
config = WebsiteBioConfig()
