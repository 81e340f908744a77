"""HTTP API for telegram-notifications."""

from .app import create_app

__all__ = ["create_app"]
