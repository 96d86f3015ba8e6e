"""Cafe Bazaar developer API bridge: OAuth token lifecycle and purchase validation."""

__version__ = "0.1.0"
