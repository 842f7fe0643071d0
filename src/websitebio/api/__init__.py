"""WebsiteBio Image Proxy — FastAPI REST API layer.

Modules
-------
main
    FastAPI application with the ``/api/generateImages`` proxy route and the
    ``main()`` CLI entry point.
models
    Pydantic model for the proxy request body and its defaults.
"""
