"""WebsiteBio Image Proxy — FastAPI Application.

This module defines the FastAPI ``app`` instance that proxies generation
requests to the external image API, and the ``main()`` CLI function that
launches the uvicorn server.

Architecture
------------
The proxy is stateless: each request is validated, completed with defaults,
signed with the server-held credential and forwarded.  The browser never
sees the API key.  There is no caching, rate limiting or request
correlation.

Endpoints
---------
========  ========================  ======================================
Method    Path                      Purpose
========  ========================  ======================================
POST      ``/api/generateImages``   Forward a generation request
other     ``/api/generateImages``   405 ``{"error": "Method not allowed"}``
GET       ``/api/health``           Liveness probe
========  ========================  ======================================

Error mapping
-------------
- Missing prompt → 400 ``{"error": "Prompt is required"}``
- Upstream non-2xx → upstream status with its error message
- Upstream 2xx without an ``images`` list → 500
- Network failure → 500 with the underlying message

Usage
-----
CLI (installed entry point)::

    websitebio-api

Direct invocation::

    python -m websitebio.api.main
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from websitebio import __version__
from websitebio.api.models import ProxyGenerateRequest
from websitebio.core.config import DEFAULT_API_KEY, config
from websitebio.core.errors import ApiError, TransportError
from websitebio.core.image_client import DEFAULT_FAILURE_MESSAGE, ImageApiClient

logger = logging.getLogger(__name__)

GENERATE_PATH = "/api/generateImages"


# ---------------------------------------------------------------------------
# Application lifecycle.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log where requests will be forwarded for the lifetime of the app.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    logger.info(
        f"Image proxy forwarding to {config.api_endpoint} "
        f"(demo key: {config.api_key == DEFAULT_API_KEY})"
    )
    yield
    logger.info("Image proxy shut down.")


# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="WebsiteBio Image Proxy",
    description="Server-side proxy for the WhomeAI image generation API.",
    version=__version__,
    lifespan=lifespan,
)

# The UI may be served from a different origin than the proxy.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_image_client() -> ImageApiClient:
    """Build the upstream client with the server-held credential.

    Tests replace this dependency through ``app.dependency_overrides``.
    """
    return ImageApiClient(
        config.api_endpoint,
        api_key=config.api_key,
        timeout=config.request_timeout,
    )


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _read_payload(request: Request) -> dict:
    """Decode the request body, treating an empty or unreadable body as ``{}``."""
    raw = await request.body()
    if not raw:
        return {}
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.warning("Request body is not valid JSON; treating it as empty")
        return {}
    return payload if isinstance(payload, dict) else {}


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.post(GENERATE_PATH)
async def generate_images(
    request: Request,
    client: ImageApiClient = Depends(get_image_client),
) -> JSONResponse:
    """Forward a generation request to the external image API.

    Args:
        request: Incoming request; its JSON body follows
            :class:`ProxyGenerateRequest`.
        client: Upstream client carrying the server-held credential.

    Returns:
        ``200 {"images": [...]}`` relayed from upstream, or
        ``{status} {"error": str}``.
    """
    payload = await _read_payload(request)

    try:
        req = ProxyGenerateRequest.model_validate(payload)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ()))
        return _error(400, f"Invalid field '{field}': {first.get('msg')}")

    if not req.prompt:
        return _error(400, "Prompt is required")

    body = req.to_upstream_body()

    try:
        data = await client.generate(body)
    except ApiError as e:
        status = e.status_code or 500
        logger.error(f"API Error ({status}): {e.message}")
        return _error(status, e.message)
    except TransportError as e:
        logger.error(f"API Error: {e.message}")
        return _error(500, e.message or DEFAULT_FAILURE_MESSAGE)

    return JSONResponse(status_code=200, content=data)


@app.api_route(GENERATE_PATH, methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"])
async def generate_images_method_not_allowed() -> JSONResponse:
    """Reject every method other than POST.

    CORS preflight requests never reach this route; the middleware answers them.
    """
    return _error(405, "Method not allowed")


@app.get("/api/health")
async def health() -> dict:
    """Return a liveness payload for deployment probes."""
    return {"status": "ok", "version": __version__}


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host and port from :data:`~websitebio.core.config.config` (which
    loads from ``WEBSITEBIO_SERVER_HOST`` and ``WEBSITEBIO_SERVER_PORT``
    environment variables).  Defaults to ``0.0.0.0:8000``.
    """
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(
        "websitebio.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
