"""Gradio front end: orchestrator, state projection, handlers and layout."""
