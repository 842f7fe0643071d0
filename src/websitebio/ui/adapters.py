"""Adapter functions for converting between UI values and business objects."""

from websitebio.core.models import Settings

from .validation import ValidationError


def values_to_settings(model: str, size: str, quantity, seed) -> Settings:
    """Convert raw widget values to Settings.

    Gradio numbers arrive as floats (or ``None`` when cleared), so quantity and
    seed are normalised to ints here. An empty seed means "no seed".

    Raises:
        ValidationError: If quantity or seed is not a whole number
    """
    return Settings(
        model=model,
        size=size,
        quantity=_to_int(quantity, "Quantity") or 1,
        seed=_to_int(seed, "Seed"),
    )


def settings_to_values(settings: Settings) -> tuple[str, str, int, int | None]:
    """Convert Settings to (model, size, quantity, seed) widget values."""
    return settings.model, settings.size, settings.quantity, settings.seed


def _to_int(value, label: str) -> int | None:
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{label} must be a number, got {value!r}") from e
    if not number.is_integer():
        raise ValidationError(f"{label} must be a whole number, got {value!r}")
    return int(number)
