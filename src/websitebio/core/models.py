"""Domain records for image generation, settings and prompt history."""

import base64
import binascii
import io
import logging
from dataclasses import asdict, dataclass
from typing import Any

from PIL import Image

logger = logging.getLogger(__name__)

MIN_PROMPT_LENGTH = 5


@dataclass(frozen=True)
class GenerationRequest:
    """Parameters of a single call to the image API.

    The prompt is stored trimmed. ``count`` is sent on the wire as ``n``.
    """

    prompt: str
    model: str
    size: str
    count: int = 1
    seed: int | None = None

    def to_body(self) -> dict[str, Any]:
        """Build the JSON body expected by the image API and the proxy.

        ``seed`` is only included when truthy, so a seed of 0 means "random".
        """
        body: dict[str, Any] = {
            "prompt": self.prompt,
            "model": self.model,
            "size": self.size,
            "n": self.count,
        }
        if self.seed:
            body["seed"] = self.seed
        return body


@dataclass(frozen=True)
class GeneratedImage:
    """One image returned by the API, ready for display.

    Attributes:
        id: ``img_<epoch-millis>_<index>``, unique within a session
        encoded_pixel_data: Base64 PNG payload as returned by the API
        revised_prompt: Prompt the model actually used (falls back to the source)
        source_prompt: Prompt the user submitted
        model: Model that produced the image
        size: Requested size ("WxH")
        seed: Seed sent with the request, if any
    """

    id: str
    encoded_pixel_data: str
    revised_prompt: str
    source_prompt: str
    model: str
    size: str
    seed: int | None = None

    @property
    def data_url(self) -> str:
        return f"data:image/png;base64,{self.encoded_pixel_data}"

    @property
    def download_name(self) -> str:
        return f"websitebio-generated-{self.id}.png"

    def png_bytes(self) -> bytes:
        """Decode the base64 payload.

        Raises:
            ValueError: If the payload is not valid base64
        """
        try:
            return base64.b64decode(self.encoded_pixel_data, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Image {self.id} has invalid base64 data: {e}") from e

    def to_pil(self) -> Image.Image:
        """Decode the payload into a PIL image for display."""
        image = Image.open(io.BytesIO(self.png_bytes()))
        image.load()
        return image


@dataclass
class Settings:
    """The user's last chosen generation parameters.

    Serialised as ``{"model", "size", "quantity", "seed"}``.
    """

    model: str
    size: str
    quantity: int = 1
    seed: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Any) -> "Settings":
        """Build settings from a decoded JSON document.

        Quantity and seed are accepted as numbers or numeric strings, and an
        empty seed string means "no seed".

        Raises:
            ValueError: If the document is not a well-formed settings object
        """
        if not isinstance(data, dict):
            raise ValueError(f"Settings must be an object, got {type(data).__name__}")

        model = data.get("model")
        size = data.get("size")
        if not isinstance(model, str) or not model:
            raise ValueError("Settings field 'model' must be a non-empty string")
        if not isinstance(size, str) or not size:
            raise ValueError("Settings field 'size' must be a non-empty string")

        quantity = _coerce_int(data.get("quantity", 1), "quantity")
        if quantity is None or quantity < 1:
            raise ValueError("Settings field 'quantity' must be a positive integer")

        seed = _coerce_int(data.get("seed"), "seed")
        return cls(model=model, size=size, quantity=quantity, seed=seed)


@dataclass(frozen=True)
class RecentPrompt:
    """A successful prompt and when it ran (epoch milliseconds)."""

    prompt: str
    timestamp: int

    def to_dict(self) -> dict[str, Any]:
        return {"prompt": self.prompt, "timestamp": self.timestamp}


def _coerce_int(value: Any, field_name: str) -> int | None:
    """Accept ints and numeric strings; ``None`` and ``""`` become ``None``."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"Settings field '{field_name}' must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as e:
            raise ValueError(f"Settings field '{field_name}' must be an integer") from e
    raise ValueError(f"Settings field '{field_name}' must be an integer")
