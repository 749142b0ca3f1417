"""Single-page website audit: structure, content, links."""

__version__ = "1.0.0"
