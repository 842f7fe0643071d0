"""HTTP client for the external image generation API.

Both the UI orchestrator and the proxy endpoint talk to the image API through
:class:`ImageApiClient`, so request construction, response validation and
error extraction live in one place.

Wire format
-----------
Request::

    POST <endpoint>
    Authorization: Bearer <key>
    Content-Type: application/json

    {"prompt": "...", "model": "...", "size": "WxH", "n": 1, "seed": 42}

Success::

    {"images": [{"base64": "...", "revised_prompt": "..."}, ...]}

Error (either shape is understood; the second is what the proxy relays)::

    {"error": {"message": "..."}}
    {"error": "..."}
"""

import logging
from typing import Any

import httpx

from .errors import ApiError, TransportError

logger = logging.getLogger(__name__)

INVALID_RESPONSE_MESSAGE = "Invalid response from API: No images returned"
DEFAULT_FAILURE_MESSAGE = "Failed to generate images"


class ImageApiClient:
    """Post generation requests and validate the answers.

    A fresh :class:`httpx.AsyncClient` is opened per call, so instances hold
    no network resources and are safe to share.

    Args:
        endpoint: URL the request is posted to (external API or proxy)
        api_key: Bearer credential, omitted from the headers when empty
        timeout: Seconds before the request is abandoned, ``None`` for no limit
        transport: Optional httpx transport (tests use ``httpx.MockTransport``)
    """

    def __init__(
        self,
        endpoint: str,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.endpoint = endpoint
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def generate(self, body: dict[str, Any]) -> dict[str, Any]:
        """Send *body* and return the validated JSON answer.

        Args:
            body: Request body (``prompt``, ``model``, ``size``, ``n``, ``seed?``)

        Returns:
            The decoded response, guaranteed to hold an ``images`` list

        Raises:
            ApiError: Non-2xx status (``status_code`` set to the upstream
                status) or a 2xx answer without an ``images`` list
                (``status_code`` is ``None``)
            TransportError: The endpoint could not be reached
        """
        logger.info(
            f"Posting generation request to {self.endpoint} "
            f"(model={body.get('model')}, size={body.get('size')}, n={body.get('n')})"
        )

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.post(self.endpoint, headers=self._headers(), json=body)
        except httpx.HTTPError as e:
            logger.error(f"Transport failure reaching {self.endpoint}: {e!r}")
            raise TransportError(str(e) or DEFAULT_FAILURE_MESSAGE) from e

        if not response.is_success:
            message = extract_error_message(response)
            logger.warning(f"Image API answered {response.status_code}: {message}")
            raise ApiError(message, status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise ApiError(INVALID_RESPONSE_MESSAGE) from e

        validate_images_payload(data)
        logger.info(f"Image API returned {len(data['images'])} image(s)")
        return data


def extract_error_message(response: httpx.Response) -> str:
    """Best-effort error message from a non-2xx answer.

    Falls back to ``"HTTP {status}: {reason}"`` when the body is not JSON or
    carries no message.
    """
    fallback = f"HTTP {response.status_code}: {response.reason_phrase}"
    try:
        payload = response.json()
    except ValueError:
        return fallback

    if not isinstance(payload, dict):
        return fallback

    error = payload.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str) and error["message"]:
        return error["message"]
    if isinstance(error, str) and error:
        return error
    return fallback


def validate_images_payload(data: Any) -> None:
    """Ensure a success body carries an ``images`` list.

    Raises:
        ApiError: If ``images`` is missing or not a list
    """
    if not isinstance(data, dict) or not isinstance(data.get("images"), list):
        raise ApiError(INVALID_RESPONSE_MESSAGE)
