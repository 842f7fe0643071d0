"""State management utilities for the WebsiteBio UI.

This module handles the initialization and teardown of per-session UI state,
wiring the orchestrator to the configured API client and local store.
"""

import logging

from websitebio.core.config import WebsiteBioConfig, config
from websitebio.core.image_client import ImageApiClient
from websitebio.core.local_store import LocalStore
from websitebio.core.persistence import PersistenceLayer

from .models import UIState
from .orchestrator import GenerationOrchestrator

logger = logging.getLogger(__name__)


def create_orchestrator(app_config: WebsiteBioConfig | None = None) -> GenerationOrchestrator:
    """Build an orchestrator from configuration.

    When ``proxy_url`` is configured the UI posts to the proxy and sends no
    credential; otherwise it calls the external API with the configured key.
    """
    app_config = app_config or config

    if app_config.proxy_url:
        logger.info(f"Routing generation requests through proxy {app_config.proxy_url}")
        client = ImageApiClient(app_config.proxy_url, timeout=app_config.request_timeout)
    else:
        logger.info(f"Calling image API directly at {app_config.api_endpoint}")
        client = ImageApiClient(
            app_config.api_endpoint,
            api_key=app_config.api_key,
            timeout=app_config.request_timeout,
        )

    persistence = PersistenceLayer(LocalStore(app_config.store_path))
    return GenerationOrchestrator(
        client=client,
        persistence=persistence,
        models=app_config.available_models,
        sizes=app_config.available_sizes,
        max_images=app_config.max_images,
    )


def initialize_ui_state(state: UIState | None = None) -> UIState:
    """Initialize or ensure UI state is ready.

    Args:
        state: Existing UIState or None

    Returns:
        Initialized UIState instance
    """
    if state is None:
        logger.info("Creating new UIState")
        state = UIState()

    if state.is_initialized():
        logger.debug("UIState already initialized")
        return state

    logger.info("Initializing UIState components...")
    state.orchestrator = create_orchestrator(config)
    state.recent_prompts = state.orchestrator.recent_prompts()
    logger.info(f"UIState initialization complete: {state}")
    return state


def cleanup_ui_state(state: UIState) -> None:
    """Drop session references when a session ends.

    Generated images live only in memory, so releasing the orchestrator is
    enough to discard them.
    """
    logger.info("Cleaning up UIState resources")
    state.orchestrator = None
    state.selected_image_id = None
    state.recent_prompts.clear()
