"""Unit tests for UI adapter functions."""

import pytest

from websitebio.core.models import Settings
from websitebio.ui.adapters import settings_to_values, values_to_settings
from websitebio.ui.validation import ValidationError


class TestValuesToSettings:
    """Tests for values_to_settings function."""

    def test_converts_float_widgets(self):
        """Test that Gradio float values become ints."""
        settings = values_to_settings("nano-banana", "512x512", 2.0, 42.0)
        assert settings == Settings(model="nano-banana", size="512x512", quantity=2, seed=42)

    @pytest.mark.parametrize("seed", [None, ""])
    def test_empty_seed_is_none(self, seed):
        assert values_to_settings("nano-banana", "512x512", 1, seed).seed is None

    def test_missing_quantity_defaults_to_one(self):
        assert values_to_settings("nano-banana", "512x512", None, None).quantity == 1

    def test_numeric_strings(self):
        settings = values_to_settings("nano-banana", "512x512", "3", "7")
        assert (settings.quantity, settings.seed) == (3, 7)

    def test_non_numeric_seed(self):
        with pytest.raises(ValidationError, match="Seed must be a number"):
            values_to_settings("nano-banana", "512x512", 1, "abc")

    def test_fractional_quantity(self):
        with pytest.raises(ValidationError, match="Quantity must be a whole number"):
            values_to_settings("nano-banana", "512x512", 1.5, None)


class TestSettingsToValues:
    def test_round_trip(self):
        settings = Settings(model="flux-dev", size="768x768", quantity=4, seed=None)
        assert settings_to_values(settings) == ("flux-dev", "768x768", 4, None)
        assert values_to_settings(*settings_to_values(settings)) == settings
