"""Pydantic request models for the proxy API.

Models
------
ProxyGenerateRequest
    Body of ``POST /api/generateImages``. Every field is optional at the
    schema level so a missing prompt can be reported as a 400 with the same
    message the browser client expects, rather than FastAPI's 422.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

DEFAULT_MODEL = "nano-banana"
DEFAULT_SIZE = "1024x1024"
DEFAULT_COUNT = 1


class ProxyGenerateRequest(BaseModel):
    """Request body for the ``POST /api/generateImages`` endpoint.

    Attributes:
        prompt: Text description of the image (required by the handler).
        model: Model identifier.  Defaults to ``"nano-banana"``.
        size: Image size as ``"WxH"``.  Defaults to ``"1024x1024"``.
        n: Number of images.  Defaults to 1.
        seed: Optional seed, forwarded only when truthy.
    """

    prompt: str | None = Field(
        default=None,
        description="Text description of the image to generate.",
    )
    model: str | None = Field(
        default=None,
        description="Model identifier (default 'nano-banana').",
    )
    size: str | None = Field(
        default=None,
        description="Image size as 'WxH' (default '1024x1024').",
    )
    n: int | None = Field(
        default=None,
        description="Number of images to generate (default 1).",
    )
    seed: int | None = Field(
        default=None,
        description="Random seed, forwarded only when non-zero.",
    )

    def to_upstream_body(self) -> dict[str, Any]:
        """Apply defaults and build the body forwarded to the image API."""
        body: dict[str, Any] = {
            "prompt": self.prompt,
            "model": self.model or DEFAULT_MODEL,
            "size": self.size or DEFAULT_SIZE,
            "n": self.n or DEFAULT_COUNT,
        }
        if self.seed:
            body["seed"] = self.seed
        return body
