"""Pure projection of orchestrator state onto widget values.

Handlers never decide visibility or labels themselves; they call
:func:`project_state` and translate the resulting :class:`GalleryView` into
``gr.update`` values. Keeping the mapping free of Gradio makes it testable.
"""

from dataclasses import dataclass

from websitebio.core.models import GeneratedImage

from .models import GALLERY_PLACEHOLDER, GENERATE_LABEL, GENERATING_LABEL, GenerationState


@dataclass(frozen=True)
class GalleryView:
    """Everything the page shows for one state snapshot."""

    generate_label: str
    generate_interactive: bool
    loading_visible: bool
    error_visible: bool
    error_message: str
    gallery_visible: bool
    gallery_items: tuple[tuple[GeneratedImage, str], ...]
    placeholder: str
    status: str


def project_state(state: GenerationState) -> GalleryView:
    """Map a state snapshot to what the page should display.

    - While generating, the button is disabled, the loading indicator shows
      and both the error panel and the gallery are hidden.
    - When idle, the error panel shows the last error (if any) and the
      gallery shows the current images captioned with their revised prompt.
    """
    generating = state.is_generating
    items = tuple((image, image.revised_prompt) for image in state.images)

    if generating:
        status = "*Generating images...*"
    elif state.error:
        status = "❌ **Generation failed**"
    elif items:
        status = f"✅ **Generated {len(items)} image{'s' if len(items) != 1 else ''}**"
    else:
        status = "*Ready to generate images*"

    return GalleryView(
        generate_label=GENERATING_LABEL if generating else GENERATE_LABEL,
        generate_interactive=not generating,
        loading_visible=generating,
        error_visible=bool(state.error) and not generating,
        error_message=state.error or "",
        gallery_visible=not generating,
        gallery_items=items,
        placeholder="" if items else GALLERY_PLACEHOLDER,
        status=status,
    )
