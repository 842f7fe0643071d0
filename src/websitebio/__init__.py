"""WebsiteBio AI Image Generator - prompt-to-image front end and API proxy."""

__version__ = "1.0.0"
