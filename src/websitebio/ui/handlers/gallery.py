"""Full-size viewer and download handlers."""

import logging
from pathlib import Path

import gradio as gr

from websitebio.core.config import config
from websitebio.core.models import GeneratedImage

from ..models import DOWNLOAD_TOAST, UIState
from ..state import initialize_ui_state

logger = logging.getLogger(__name__)


def save_image_for_download(image: GeneratedImage, directory: Path) -> Path:
    """Write *image* as ``websitebio-generated-<id>.png`` into *directory*.

    Raises:
        ValueError: If the image payload is not valid base64
        OSError: If the file cannot be written
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / image.download_name
    path.write_bytes(image.png_bytes())
    logger.info(f"Saved {image.id} for download: {path}")
    return path


def select_image_handler(evt: gr.SelectData, state: UIState) -> tuple:
    """Open the full-size viewer for the clicked gallery image.

    Args:
        evt: Gradio SelectData event containing the selected index
        state: UI state

    Returns:
        Tuple of (viewer_group, viewer_image, viewer_prompt, download_file, state)
    """
    state = initialize_ui_state(state)
    images = state.orchestrator.state.images

    if evt.index is None or evt.index >= len(images):
        state.selected_image_id = None
        return gr.update(visible=False), None, "", gr.update(value=None, visible=False), state

    image = images[evt.index]
    state.selected_image_id = image.id

    try:
        preview = image.to_pil()
    except (ValueError, OSError) as e:
        logger.error(f"Error opening image {image.id}: {e}", exc_info=True)
        return (
            gr.update(visible=True),
            None,
            f"*Error loading image: {str(e)}*",
            gr.update(value=None, visible=False),
            state,
        )

    return (
        gr.update(visible=True),
        preview,
        image.revised_prompt,
        gr.update(value=None, visible=False),
        state,
    )


def prepare_downloads_handler(state: UIState) -> tuple:
    """Offer every image in the gallery as its own download.

    Returns:
        Tuple of (downloads_list, state)
    """
    state = initialize_ui_state(state)
    paths = []
    for image in state.orchestrator.state.images:
        try:
            paths.append(str(save_image_for_download(image, config.downloads_dir)))
        except (ValueError, OSError) as e:
            logger.warning(f"Could not prepare download for {image.id}: {e}")
    return gr.update(value=paths or None, visible=bool(paths)), state


def close_viewer_handler(state: UIState) -> tuple:
    """Close the full-size viewer.

    Returns:
        Tuple of (viewer_group, viewer_image, download_file, state)
    """
    state.selected_image_id = None
    return gr.update(visible=False), None, gr.update(value=None, visible=False), state


def download_image_handler(state: UIState) -> tuple:
    """Save the image open in the viewer and offer it as a file.

    Returns:
        Tuple of (download_file, state)
    """
    state = initialize_ui_state(state)
    image = state.orchestrator.find_image(state.selected_image_id)

    if image is None:
        gr.Warning("Select an image to download")
        return gr.update(value=None, visible=False), state

    try:
        path = save_image_for_download(image, config.downloads_dir)
    except (ValueError, OSError) as e:
        logger.error(f"Error downloading image {image.id}: {e}", exc_info=True)
        gr.Warning(f"Download failed: {e}")
        return gr.update(value=None, visible=False), state

    gr.Info(DOWNLOAD_TOAST)
    return gr.update(value=str(path), visible=True), state
