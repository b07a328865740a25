"""Settings and logging setup for shield_policy clients."""

from shield_policy.config.logging import configure_from_settings, configure_logging
from shield_policy.config.settings import ShieldSettings, get_settings

__all__ = ["ShieldSettings", "configure_from_settings", "configure_logging", "get_settings"]
