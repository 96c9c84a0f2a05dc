"""Utility modules for the Guardian SDK."""

from guardian.utils.logging import configure_logging, configure_logging_from_settings

__all__ = ["configure_logging", "configure_logging_from_settings"]
