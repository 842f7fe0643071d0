"""Data models for WebsiteBio UI state."""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Literal

from websitebio.core.models import GeneratedImage

logger = logging.getLogger(__name__)

Phase = Literal["idle", "generating"]


@dataclass(frozen=True)
class GenerationState:
    """Snapshot of the generation lifecycle owned by the orchestrator.

    Transitions return new snapshots instead of mutating, so a snapshot handed
    to a listener never changes under it.

    Attributes
    ----------
    phase : Phase
        ``"idle"`` or ``"generating"``
    images : tuple[GeneratedImage, ...]
        Images from the last successful generation
    error : str | None
        Message of the last failure, cleared when a new generation starts
    last_prompt : str | None
        Prompt of the most recent generation attempt, used by retry
    sequence : int
        Token of the most recent generation; completions carrying an older
        token are stale and ignored
    """

    phase: Phase = "idle"
    images: tuple[GeneratedImage, ...] = ()
    error: str | None = None
    last_prompt: str | None = None
    sequence: int = 0

    @property
    def is_generating(self) -> bool:
        return self.phase == "generating"

    def begin(self, prompt: str) -> "GenerationState":
        """Enter ``generating`` with a fresh sequence token."""
        return replace(
            self, phase="generating", error=None, last_prompt=prompt, sequence=self.sequence + 1
        )

    def succeed(self, images: list[GeneratedImage]) -> "GenerationState":
        """Return to ``idle`` showing *images*."""
        return replace(self, phase="idle", images=tuple(images), error=None)

    def fail(self, message: str) -> "GenerationState":
        """Return to ``idle`` showing *message*; previous images are kept."""
        return replace(self, phase="idle", error=message)

    def dismiss_error(self) -> "GenerationState":
        return replace(self, error=None)


@dataclass
class UIState:
    """Session state for the Gradio UI.

    Each user session gets its own UIState so generations never leak between
    browser tabs.

    Attributes
    ----------
    orchestrator : Any | None
        GenerationOrchestrator instance, created lazily by initialize_ui_state
    selected_image_id : str | None
        Image currently open in the full-size viewer
    recent_prompts : list[str]
        Cached recent prompts for the picker, newest first
    """

    orchestrator: Any | None = None
    selected_image_id: str | None = None
    recent_prompts: list[str] = field(default_factory=list)

    def is_initialized(self) -> bool:
        return self.orchestrator is not None

    def __repr__(self) -> str:
        return (
            f"UIState(initialized={self.is_initialized()}, "
            f"selected={self.selected_image_id}, "
            f"recent_prompts={len(self.recent_prompts)})"
        )


# UI Constants
DEFAULT_QUANTITY = 1
GENERATE_LABEL = "✨ Generate Images"
GENERATING_LABEL = "⏳ Generating..."
GALLERY_PLACEHOLDER = "*Your generated images will appear here*"
DOWNLOAD_TOAST = "Image downloaded successfully!"
