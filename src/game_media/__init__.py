"""Game Media: screenshot, video and text feed service."""

__version__ = "0.1.0"
