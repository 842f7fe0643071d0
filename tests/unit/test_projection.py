"""Unit tests for the state-to-view projection."""

from websitebio.core.models import GeneratedImage
from websitebio.ui.models import (
    GALLERY_PLACEHOLDER,
    GENERATE_LABEL,
    GENERATING_LABEL,
    GenerationState,
)
from websitebio.ui.projection import project_state


def _image(index: int) -> GeneratedImage:
    return GeneratedImage(
        id=f"img_1_{index}",
        encoded_pixel_data="AA",
        revised_prompt=f"revised {index}",
        source_prompt="a red fox",
        model="nano-banana",
        size="512x512",
    )


class TestProjectState:
    """Tests for project_state."""

    def test_initial_state(self):
        view = project_state(GenerationState())
        assert view.generate_label == GENERATE_LABEL
        assert view.generate_interactive is True
        assert view.loading_visible is False
        assert view.error_visible is False
        assert view.gallery_items == ()
        assert view.placeholder == GALLERY_PLACEHOLDER
        assert view.status == "*Ready to generate images*"

    def test_generating(self):
        """Test that generation hides the gallery and error and disables the button."""
        state = GenerationState(error="old").begin("a red fox")
        view = project_state(state)
        assert view.generate_label == GENERATING_LABEL
        assert view.generate_interactive is False
        assert view.loading_visible is True
        assert view.error_visible is False
        assert view.gallery_visible is False

    def test_generating_hides_stale_error(self):
        state = GenerationState(phase="generating", error="stale")
        assert project_state(state).error_visible is False

    def test_success_captions_with_revised_prompt(self):
        images = [_image(0), _image(1)]
        view = project_state(GenerationState().begin("a red fox").succeed(images))
        assert view.gallery_visible is True
        assert [caption for _, caption in view.gallery_items] == ["revised 0", "revised 1"]
        assert view.placeholder == ""
        assert view.status == "✅ **Generated 2 images**"

    def test_single_image_status(self):
        view = project_state(GenerationState().succeed([_image(0)]))
        assert view.status == "✅ **Generated 1 image**"

    def test_failure_shows_error_and_keeps_gallery(self):
        state = GenerationState().succeed([_image(0)]).begin("q").fail("rate limited")
        view = project_state(state)
        assert view.error_visible is True
        assert view.error_message == "rate limited"
        assert len(view.gallery_items) == 1
        assert view.status == "❌ **Generation failed**"
        assert view.generate_interactive is True
