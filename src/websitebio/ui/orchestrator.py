"""Request orchestration for the generation UI.

:class:`GenerationOrchestrator` is the view-model of the application. It owns
the :class:`~websitebio.ui.models.GenerationState`, turns form values into an
API request, converts the answer into :class:`GeneratedImage` records and
publishes every state change to subscribed listeners. It knows nothing about
Gradio; the rendering layer subscribes or reads ``state`` and projects it.

State machine::

    idle ──submit/retry──▶ generating ──success──▶ idle (images shown)
                                     └──failure──▶ idle (error shown)

Each generation takes a new sequence token. A completion whose token is no
longer current belongs to a superseded request and is dropped, so a late
answer can never overwrite fresher state.
"""

import logging
import time
from collections.abc import Callable
from typing import Any

from websitebio.core.errors import ApiError, TransportError, ValidationError
from websitebio.core.image_client import ImageApiClient
from websitebio.core.models import GeneratedImage, GenerationRequest, Settings
from websitebio.core.persistence import PersistenceLayer

from .models import GenerationState
from .validation import EMPTY_PROMPT_MESSAGE, validate_generation_request

logger = logging.getLogger(__name__)

Listener = Callable[[GenerationState], None]


class GenerationOrchestrator:
    """Coordinate user input, the outbound API call and UI state.

    Args:
        client: Client posting to the image API or the proxy
        persistence: Settings and recent-prompt storage
        models: Models offered by the UI
        sizes: Sizes offered by the UI
        max_images: Largest quantity offered by the UI
        clock: Time source in seconds, used for image ids
    """

    def __init__(
        self,
        client: ImageApiClient,
        persistence: PersistenceLayer,
        models: list[str],
        sizes: list[str],
        max_images: int,
        clock: Callable[[], float] = time.time,
    ):
        self.client = client
        self.persistence = persistence
        self.models = list(models)
        self.sizes = list(sizes)
        self.max_images = max_images
        self.clock = clock
        self.last_settings: Settings | None = None
        self._state = GenerationState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> GenerationState:
        return self._state

    @property
    def is_generating(self) -> bool:
        return self._state.is_generating

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener* for state snapshots.

        Returns:
            A callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, state: GenerationState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                logger.error(f"State listener {listener!r} failed: {e}", exc_info=True)

    async def generate(self, prompt_text: str, settings: Settings) -> list[GeneratedImage]:
        """Generate images for *prompt_text* with *settings*.

        On success the image list is replaced, the prompt is added to the
        recent-prompt log and the settings are persisted. On failure only the
        error message changes.

        Returns:
            The generated images

        Raises:
            ValidationError: Bad input; raised before any network call
            ApiError: Error status or malformed answer from the API
            TransportError: The API could not be reached
        """
        request = validate_generation_request(
            prompt_text, settings, self.models, self.sizes, self.max_images
        )
        self.last_settings = settings

        self._set_state(self._state.begin(request.prompt))
        token = self._state.sequence
        logger.info(f"Generating images (sequence {token}) with settings: {settings}")

        try:
            data = await self.client.generate(request.to_body())
            images = build_images(data, request, self.clock)
        except (ApiError, TransportError) as e:
            if self._is_current(token):
                self._set_state(self._state.fail(e.message))
            else:
                logger.info(f"Ignoring failure of superseded generation {token}: {e.message}")
            raise

        if not self._is_current(token):
            logger.info(f"Ignoring result of superseded generation {token}")
            return images

        self._set_state(self._state.succeed(images))
        self.persistence.append_recent_prompt(request.prompt)
        self.persistence.save_settings(settings)
        logger.info(f"Generated {len(images)} image(s)")
        return images

    async def submit(self, prompt_text: str, settings: Settings) -> GenerationState:
        """Run :meth:`generate` and report the outcome as state.

        This is the orchestration boundary: validation, API and transport
        errors are caught here and shown as a single message.
        """
        try:
            await self.generate(prompt_text, settings)
        except ValidationError as e:
            logger.warning(f"Validation error: {e.message}")
            self._set_state(self._state.fail(e.message))
        except (ApiError, TransportError) as e:
            logger.error(f"Generation failed: {e.message}")
        return self._state

    async def retry(self, settings: Settings | None = None) -> GenerationState:
        """Re-submit the last used prompt.

        Args:
            settings: Settings to use, defaults to those of the last attempt
        """
        prompt = self._state.last_prompt
        settings = settings or self.last_settings
        if prompt is None or settings is None:
            self._set_state(self._state.fail(EMPTY_PROMPT_MESSAGE))
            return self._state
        logger.info("Retrying last generation")
        return await self.submit(prompt, settings)

    def dismiss_error(self) -> GenerationState:
        self._set_state(self._state.dismiss_error())
        return self._state

    def update_settings(self, settings: Settings) -> bool:
        """Persist a settings change made in the UI."""
        return self.persistence.save_settings(settings)

    def load_settings(self) -> Settings | None:
        return self.persistence.load_settings()

    def recent_prompts(self) -> list[str]:
        """Distinct prompts from the recent-prompt log, newest first."""
        return list(dict.fromkeys(entry.prompt for entry in self.persistence.load_recent_prompts()))

    def find_image(self, image_id: str | None) -> GeneratedImage | None:
        """Return the current image with *image_id*, if any."""
        return next((img for img in self._state.images if img.id == image_id), None)

    def _is_current(self, token: int) -> bool:
        return self._state.sequence == token


def build_images(
    data: dict[str, Any], request: GenerationRequest, clock: Callable[[], float] = time.time
) -> list[GeneratedImage]:
    """Convert a validated API answer into display records.

    Raises:
        ApiError: If an image entry carries no base64 payload
    """
    stamp = int(clock() * 1000)
    images = []
    for index, entry in enumerate(data["images"]):
        if not isinstance(entry, dict) or not isinstance(entry.get("base64"), str):
            raise ApiError("Invalid response from API: Image entry has no base64 data")
        images.append(
            GeneratedImage(
                id=f"img_{stamp}_{index}",
                encoded_pixel_data=entry["base64"],
                revised_prompt=entry.get("revised_prompt") or request.prompt,
                source_prompt=request.prompt,
                model=request.model,
                size=request.size,
                seed=request.seed,
            )
        )
    return images
