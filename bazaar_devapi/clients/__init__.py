"""Expose constructed client wrappers."""

from .developer_api import DeveloperApiClient

__all__ = ["DeveloperApiClient"]
