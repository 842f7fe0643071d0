"""Image generation and settings handlers."""

import logging

import gradio as gr

from websitebio.core.config import config
from websitebio.core.models import Settings

from ..adapters import settings_to_values, values_to_settings
from ..models import DEFAULT_QUANTITY, UIState
from ..projection import GalleryView, project_state
from ..state import initialize_ui_state
from ..validation import ValidationError

logger = logging.getLogger(__name__)


def _gallery_value(view: GalleryView) -> list[tuple]:
    """Decode images for gr.Gallery, skipping any that cannot be decoded."""
    items = []
    for image, caption in view.gallery_items:
        try:
            items.append((image.to_pil(), caption))
        except (ValueError, OSError) as e:
            logger.warning(f"Could not decode image {image.id}: {e}")
    return items


def render_outputs(state: UIState, view: GalleryView | None = None) -> tuple:
    """Project the orchestrator state onto the generation widgets.

    Returns:
        Tuple of (generate_btn, loading, error_group, error_message, gallery,
        placeholder, status, recent_prompts, state)
    """
    if view is None:
        view = project_state(state.orchestrator.state)

    return (
        gr.update(value=view.generate_label, interactive=view.generate_interactive),
        gr.update(visible=view.loading_visible),
        gr.update(visible=view.error_visible),
        gr.update(value=view.error_message),
        gr.update(value=_gallery_value(view), visible=view.gallery_visible),
        gr.update(value=view.placeholder, visible=bool(view.placeholder) and view.gallery_visible),
        gr.update(value=view.status),
        gr.update(choices=state.recent_prompts),
        state,
    )


def begin_generation_ui(state: UIState) -> tuple:
    """Disable the trigger and show the loading indicator before the call starts."""
    state = initialize_ui_state(state)
    preview = project_state(state.orchestrator.state.begin(""))
    return render_outputs(state, preview)


async def generate_images_handler(
    prompt: str,
    model: str,
    size: str,
    quantity: float,
    seed: float | None,
    state: UIState,
) -> tuple:
    """Generate images from the UI inputs.

    Args:
        prompt: Prompt text
        model: Selected model
        size: Selected size ("WxH")
        quantity: Number of images
        seed: Optional seed (None or empty for random)
        state: UI state

    Returns:
        Widget updates from :func:`render_outputs`
    """
    state = initialize_ui_state(state)
    orchestrator = state.orchestrator

    try:
        settings = values_to_settings(model, size, quantity, seed)
    except ValidationError as e:
        logger.warning(f"Validation error: {e}")
        return _render_error(state, e.message)

    await orchestrator.submit(prompt, settings)
    state.recent_prompts = orchestrator.recent_prompts()
    return render_outputs(state)


async def retry_handler(
    model: str, size: str, quantity: float, seed: float | None, state: UIState
) -> tuple:
    """Re-run the last prompt with the current settings."""
    state = initialize_ui_state(state)

    try:
        settings = values_to_settings(model, size, quantity, seed)
    except ValidationError as e:
        return _render_error(state, e.message)

    await state.orchestrator.retry(settings)
    state.recent_prompts = state.orchestrator.recent_prompts()
    return render_outputs(state)


def dismiss_error_handler(state: UIState) -> tuple:
    """Hide the error panel."""
    state = initialize_ui_state(state)
    state.orchestrator.dismiss_error()
    return render_outputs(state)


def _render_error(state: UIState, message: str) -> tuple:
    view = project_state(state.orchestrator.state.fail(message))
    return render_outputs(state, view)


def save_settings_handler(
    model: str, size: str, quantity: float, seed: float | None, state: UIState
) -> UIState:
    """Persist settings whenever one of the setting fields changes."""
    state = initialize_ui_state(state)
    try:
        settings = values_to_settings(model, size, quantity, seed)
    except ValidationError as e:
        logger.debug(f"Not saving settings: {e}")
        return state
    state.orchestrator.update_settings(settings)
    return state


def load_settings_handler(state: UIState) -> tuple:
    """Restore saved settings on page load.

    Returns:
        Tuple of (model, size, quantity, seed, recent_prompts, state) updates
    """
    state = initialize_ui_state(state)
    saved = state.orchestrator.load_settings()
    defaults = Settings(
        model=config.default_model, size=config.default_size, quantity=DEFAULT_QUANTITY
    )

    if saved is None:
        settings = defaults
    else:
        # Stored values outside the current option lists fall back to defaults.
        settings = Settings(
            model=saved.model if saved.model in config.available_models else defaults.model,
            size=saved.size if saved.size in config.available_sizes else defaults.size,
            quantity=min(max(saved.quantity, 1), config.max_images),
            seed=saved.seed,
        )

    model, size, quantity, seed = settings_to_values(settings)
    return (
        gr.update(value=model),
        gr.update(value=size),
        gr.update(value=quantity),
        gr.update(value=seed),
        gr.update(choices=state.recent_prompts),
        state,
    )


def select_recent_prompt(choice: str | None) -> gr.update:
    """Copy a recent prompt back into the prompt box."""
    if not choice:
        return gr.update()
    return gr.update(value=choice)
