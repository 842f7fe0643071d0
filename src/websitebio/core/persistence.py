"""Settings and recent-prompt persistence on top of :class:`LocalStore`.

Nothing in this module raises on storage problems. Reads distinguish between
"nothing stored" and "something stored but unusable" through
:class:`LoadResult`; both are non-fatal and the latter is logged as a
:class:`~websitebio.core.errors.PersistenceWarning`.
"""

import json
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Literal

from .errors import PersistenceWarning
from .local_store import LocalStore
from .models import RecentPrompt, Settings

logger = logging.getLogger(__name__)

SETTINGS_KEY = "websitebio-ai-settings"
RECENT_PROMPTS_KEY = "websitebio-recent-prompts"
MAX_RECENT_PROMPTS = 10


@dataclass
class LoadResult:
    """Outcome of reading a value from the local store.

    Attributes:
        status: ``"ok"``, ``"absent"`` or ``"corrupt"``
        value: The decoded value when ``status == "ok"``
        error: The logged warning when ``status == "corrupt"``
    """

    status: Literal["ok", "absent", "corrupt"]
    value: Settings | None = None
    error: PersistenceWarning | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


@dataclass
class PersistenceLayer:
    """Read and write UI data through a :class:`LocalStore`."""

    store: LocalStore
    max_recent_prompts: int = MAX_RECENT_PROMPTS
    clock: Callable[[], float] = field(default=time.time, repr=False)

    def save_settings(self, settings: Settings) -> bool:
        """Write settings under :data:`SETTINGS_KEY`, overwriting unconditionally.

        Returns:
            True if the write succeeded, False if it failed (logged)
        """
        try:
            self.store.set_item(SETTINGS_KEY, json.dumps(settings.to_dict()))
        except (OSError, TypeError, ValueError) as e:
            _warn(f"Failed to save settings: {e}")
            return False
        logger.debug(f"Saved settings: {settings}")
        return True

    def read_settings(self) -> LoadResult:
        """Read settings, reporting absent and corrupt data separately."""
        try:
            raw = self.store.get_item(SETTINGS_KEY)
        except OSError as e:
            return LoadResult(status="corrupt", error=_warn(f"Failed to read settings: {e}"))

        if raw is None:
            return LoadResult(status="absent")

        try:
            settings = Settings.from_dict(json.loads(raw))
        except (json.JSONDecodeError, ValueError) as e:
            return LoadResult(
                status="corrupt", error=_warn(f"Stored settings are malformed, ignoring them: {e}")
            )

        return LoadResult(status="ok", value=settings)

    def load_settings(self) -> Settings | None:
        """Return saved settings, or ``None`` when absent or malformed."""
        result = self.read_settings()
        if result.ok:
            logger.info("Loaded saved settings")
        return result.value

    def load_recent_prompts(self) -> list[RecentPrompt]:
        """Return the recent-prompt log, newest first.

        Malformed entries are skipped; a malformed log reads as empty.
        """
        try:
            raw = self.store.get_item(RECENT_PROMPTS_KEY)
        except OSError as e:
            _warn(f"Failed to read recent prompts: {e}")
            return []

        if raw is None:
            return []

        try:
            entries = json.loads(raw)
        except json.JSONDecodeError as e:
            _warn(f"Stored recent prompts are malformed, ignoring them: {e}")
            return []

        if not isinstance(entries, list):
            _warn("Stored recent prompts are not a list, ignoring them")
            return []

        prompts = []
        for entry in entries:
            if not isinstance(entry, dict) or not isinstance(entry.get("prompt"), str):
                continue
            timestamp = entry.get("timestamp")
            if not isinstance(timestamp, int) or isinstance(timestamp, bool):
                continue
            prompts.append(RecentPrompt(prompt=entry["prompt"], timestamp=timestamp))
        return prompts

    def append_recent_prompt(self, prompt: str) -> list[RecentPrompt]:
        """Prepend *prompt* to the log, keep the newest entries, write it back.

        Failures are logged and swallowed.

        Returns:
            The log as it now stands (or as it would have been if the write failed)
        """
        prompts = self.load_recent_prompts()
        entry = RecentPrompt(prompt=prompt, timestamp=int(self.clock() * 1000))
        prompts = [entry, *prompts][: self.max_recent_prompts]

        try:
            self.store.set_item(
                RECENT_PROMPTS_KEY, json.dumps([p.to_dict() for p in prompts])
            )
        except OSError as e:
            _warn(f"Failed to save prompt: {e}")

        return prompts


def _warn(message: str) -> PersistenceWarning:
    warning = PersistenceWarning(message)
    logger.warning(message)
    return warning
