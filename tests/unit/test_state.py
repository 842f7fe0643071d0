"""Unit tests for UI state management."""

from unittest.mock import Mock, patch

from websitebio.core.persistence import RECENT_PROMPTS_KEY
from websitebio.ui.models import UIState
from websitebio.ui.orchestrator import GenerationOrchestrator
from websitebio.ui.state import cleanup_ui_state, create_orchestrator, initialize_ui_state


class TestCreateOrchestrator:
    """Tests for create_orchestrator function."""

    def test_direct_api(self, test_config):
        """Test that without a proxy the external API is called with the key."""
        orchestrator = create_orchestrator(test_config)
        assert isinstance(orchestrator, GenerationOrchestrator)
        assert orchestrator.client.endpoint == test_config.api_endpoint
        assert orchestrator.client.api_key == "sk-test"
        assert orchestrator.persistence.store.path == test_config.store_path

    def test_proxy_sends_no_key(self, test_config):
        """Test that the proxy route never carries the credential."""
        test_config.proxy_url = "http://localhost:8000/api/generateImages"
        orchestrator = create_orchestrator(test_config)
        assert orchestrator.client.endpoint == "http://localhost:8000/api/generateImages"
        assert orchestrator.client.api_key is None

    def test_options_from_config(self, test_config):
        orchestrator = create_orchestrator(test_config)
        assert orchestrator.models == test_config.available_models
        assert orchestrator.sizes == test_config.available_sizes
        assert orchestrator.max_images == test_config.max_images


class TestInitializeUIState:
    """Tests for initialize_ui_state function."""

    def test_initialize_none_creates_new_state(self, test_config):
        """Test that passing None creates a new, initialized UIState."""
        with patch("websitebio.ui.state.config", test_config):
            result = initialize_ui_state(None)
        assert isinstance(result, UIState)
        assert result.is_initialized()

    def test_initialize_returns_if_already_initialized(self):
        """Test that already initialized state is returned as-is."""
        state = UIState()
        orchestrator = Mock()
        state.orchestrator = orchestrator

        with patch("websitebio.ui.state.create_orchestrator") as mock_create:
            result = initialize_ui_state(state)

        assert result is state
        assert result.orchestrator is orchestrator
        mock_create.assert_not_called()

    def test_loads_recent_prompts(self, test_config, local_store):
        """Test that the recent-prompt picker is filled from storage."""
        with patch("websitebio.ui.state.config", test_config):
            state = initialize_ui_state(UIState())
            state.orchestrator.persistence.append_recent_prompt("a red fox in snow")
            fresh = initialize_ui_state(UIState())
        assert fresh.recent_prompts == ["a red fox in snow"]
        assert local_store.get_item(RECENT_PROMPTS_KEY) is not None


class TestCleanupUIState:
    def test_cleanup_releases_session(self):
        state = UIState(orchestrator=Mock(), selected_image_id="img_1_0", recent_prompts=["x"])
        cleanup_ui_state(state)
        assert state.orchestrator is None
        assert state.selected_image_id is None
        assert state.recent_prompts == []
        assert not state.is_initialized()
