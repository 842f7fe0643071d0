"""Validation utilities for WebsiteBio UI inputs."""

import logging

from websitebio.core.errors import ValidationError
from websitebio.core.models import MIN_PROMPT_LENGTH, GenerationRequest, Settings

logger = logging.getLogger(__name__)

EMPTY_PROMPT_MESSAGE = "Please enter a description for your image."
SHORT_PROMPT_MESSAGE = (
    f"Please provide a more detailed description (at least {MIN_PROMPT_LENGTH} characters)."
)

__all__ = [
    "EMPTY_PROMPT_MESSAGE",
    "SHORT_PROMPT_MESSAGE",
    "ValidationError",
    "validate_generation_request",
    "validate_prompt",
]


def validate_prompt(prompt: str | None) -> str:
    """Trim *prompt* and check it is long enough to send.

    Args:
        prompt: Raw prompt text from the UI

    Returns:
        The trimmed prompt

    Raises:
        ValidationError: If the prompt is empty or shorter than five characters
    """
    text = (prompt or "").strip()
    if not text:
        raise ValidationError(EMPTY_PROMPT_MESSAGE)
    if len(text) < MIN_PROMPT_LENGTH:
        raise ValidationError(SHORT_PROMPT_MESSAGE)
    return text


def validate_generation_request(
    prompt: str | None,
    settings: Settings,
    models: list[str],
    sizes: list[str],
    max_images: int,
) -> GenerationRequest:
    """Validate user input and build the outbound request.

    Args:
        prompt: Raw prompt text
        settings: Current generation settings
        models: Models offered by the UI
        sizes: Sizes offered by the UI
        max_images: Largest quantity offered by the UI

    Returns:
        A GenerationRequest ready to send

    Raises:
        ValidationError: If any input is outside what the UI offers
    """
    text = validate_prompt(prompt)

    if settings.model not in models:
        raise ValidationError(f"Unknown model: {settings.model}")
    if settings.size not in sizes:
        raise ValidationError(f"Unsupported size: {settings.size}")
    if settings.quantity < 1 or settings.quantity > max_images:
        raise ValidationError(f"Quantity must be 1-{max_images}, got {settings.quantity}")
    if settings.seed is not None and settings.seed < 0:
        raise ValidationError(f"Seed must be a positive number, got {settings.seed}")

    return GenerationRequest(
        prompt=text,
        model=settings.model,
        size=settings.size,
        count=settings.quantity,
        seed=settings.seed,
    )
