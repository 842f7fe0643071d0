"""Unit tests for settings and recent-prompt persistence."""

import json
from unittest.mock import patch

import pytest

from websitebio.core.errors import PersistenceWarning
from websitebio.core.models import Settings
from websitebio.core.persistence import (
    MAX_RECENT_PROMPTS,
    RECENT_PROMPTS_KEY,
    SETTINGS_KEY,
    PersistenceLayer,
)


class TestStorageKeys:
    def test_keys(self):
        assert SETTINGS_KEY == "websitebio-ai-settings"
        assert RECENT_PROMPTS_KEY == "websitebio-recent-prompts"
        assert MAX_RECENT_PROMPTS == 10


class TestSettingsPersistence:
    """Tests for save_settings / read_settings / load_settings."""

    def test_round_trip(self, persistence):
        settings = Settings(model="flux-dev", size="768x768", quantity=3, seed=99)
        assert persistence.save_settings(settings) is True
        assert persistence.load_settings() == settings

    def test_absent(self, persistence):
        result = persistence.read_settings()
        assert result.status == "absent"
        assert result.value is None
        assert persistence.load_settings() is None

    def test_stored_as_json_document(self, persistence, local_store):
        persistence.save_settings(Settings(model="nano-banana", size="512x512"))
        stored = json.loads(local_store.get_item(SETTINGS_KEY))
        assert stored == {"model": "nano-banana", "size": "512x512", "quantity": 1, "seed": None}

    @pytest.mark.parametrize("raw", ["{broken", "[]", '{"model": "x"}', '"text"'])
    def test_corrupt_settings(self, persistence, local_store, raw):
        local_store.set_item(SETTINGS_KEY, raw)
        result = persistence.read_settings()
        assert result.status == "corrupt"
        assert isinstance(result.error, PersistenceWarning)
        assert persistence.load_settings() is None

    def test_save_failure_returns_false(self, persistence):
        with patch.object(persistence.store, "set_item", side_effect=OSError("disk full")):
            assert persistence.save_settings(Settings(model="m", size="s")) is False

    def test_read_failure_is_corrupt(self, persistence):
        with patch.object(persistence.store, "get_item", side_effect=OSError("denied")):
            assert persistence.read_settings().status == "corrupt"

    def test_undecodable_store_reads_absent(self, persistence, local_store):
        local_store.path.write_bytes(b'{"websitebio-ai-settings": "\xff\xfe"}')
        assert persistence.read_settings().status == "absent"
        assert persistence.load_settings() is None

    def test_save_overwrites(self, persistence):
        persistence.save_settings(Settings(model="a", size="1x1"))
        persistence.save_settings(Settings(model="b", size="2x2"))
        assert persistence.load_settings().model == "b"


class TestRecentPrompts:
    """Tests for the bounded, newest-first recent-prompt log."""

    def test_empty_log(self, persistence):
        assert persistence.load_recent_prompts() == []

    def test_append_prepends(self, persistence):
        persistence.append_recent_prompt("first")
        persistence.append_recent_prompt("second")
        prompts = [entry.prompt for entry in persistence.load_recent_prompts()]
        assert prompts == ["second", "first"]

    def test_timestamps_in_milliseconds(self, persistence):
        entry = persistence.append_recent_prompt("a prompt")[0]
        assert entry.timestamp == 1_700_000_000_000

    def test_capped_at_ten_newest(self, persistence):
        for i in range(11):
            persistence.append_recent_prompt(f"prompt {i}")
        prompts = [entry.prompt for entry in persistence.load_recent_prompts()]
        assert len(prompts) == 10
        assert prompts[0] == "prompt 10"
        assert "prompt 0" not in prompts

    def test_custom_cap(self, local_store):
        layer = PersistenceLayer(local_store, max_recent_prompts=2)
        for prompt in ["a", "b", "c"]:
            layer.append_recent_prompt(prompt)
        assert [entry.prompt for entry in layer.load_recent_prompts()] == ["c", "b"]

    def test_duplicates_kept(self, persistence):
        persistence.append_recent_prompt("same")
        persistence.append_recent_prompt("same")
        assert len(persistence.load_recent_prompts()) == 2

    def test_malformed_entries_skipped(self, persistence, local_store):
        local_store.set_item(
            RECENT_PROMPTS_KEY,
            json.dumps([{"prompt": "ok", "timestamp": 1}, {"prompt": 5}, "junk", {"prompt": "x"}]),
        )
        assert [entry.prompt for entry in persistence.load_recent_prompts()] == ["ok"]

    @pytest.mark.parametrize("raw", ["{broken", '{"prompt": "x"}'])
    def test_malformed_log_reads_empty(self, persistence, local_store, raw):
        local_store.set_item(RECENT_PROMPTS_KEY, raw)
        assert persistence.load_recent_prompts() == []

    def test_corrupt_log_replaced_on_append(self, persistence, local_store):
        local_store.set_item(RECENT_PROMPTS_KEY, "{broken")
        persistence.append_recent_prompt("fresh")
        assert [entry.prompt for entry in persistence.load_recent_prompts()] == ["fresh"]

    def test_write_failure_swallowed(self, persistence):
        with patch.object(persistence.store, "set_item", side_effect=OSError("disk full")):
            prompts = persistence.append_recent_prompt("a prompt")
        assert prompts[0].prompt == "a prompt"
        assert persistence.load_recent_prompts() == []

    def test_undecodable_store_replaced_on_append(self, persistence, local_store):
        local_store.path.write_bytes(b"\xff\xfe garbage")
        assert persistence.load_recent_prompts() == []
        persistence.append_recent_prompt("a red fox in snow")
        assert [entry.prompt for entry in persistence.load_recent_prompts()] == [
            "a red fox in snow"
        ]
