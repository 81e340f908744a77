"""Version information for telegram-notifications."""

__version__ = "0.1.0"
