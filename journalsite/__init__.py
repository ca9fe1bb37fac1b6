"""Static site builder for a dated Markdown journal."""

__version__ = "0.1.0"
