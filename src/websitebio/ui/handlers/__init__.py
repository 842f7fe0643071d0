"""UI event handlers organized by feature area.

- generation: Image generation, retry and settings persistence
- gallery: Full-size viewer and downloads
"""

from .gallery import (
    close_viewer_handler,
    download_image_handler,
    prepare_downloads_handler,
    save_image_for_download,
    select_image_handler,
)
from .generation import (
    begin_generation_ui,
    dismiss_error_handler,
    generate_images_handler,
    load_settings_handler,
    render_outputs,
    retry_handler,
    save_settings_handler,
    select_recent_prompt,
)

__all__ = [
    # Generation handlers
    "begin_generation_ui",
    "dismiss_error_handler",
    "generate_images_handler",
    "load_settings_handler",
    "render_outputs",
    "retry_handler",
    "save_settings_handler",
    "select_recent_prompt",
    # Gallery handlers
    "close_viewer_handler",
    "download_image_handler",
    "prepare_downloads_handler",
    "save_image_for_download",
    "select_image_handler",
]
