"""Upload orchestration service: image field extraction and voice replies."""

__version__ = "0.1.0"
