"""
Configuration management for the Guardian SDK.
"""

from guardian.config.settings import GuardianSettings, get_settings

__all__ = ["GuardianSettings", "get_settings"]
