"""Config services for TCI fitting and reporting parameters."""

from telcoindex.services.config.tci_settings import (
    DEFAULT_SETTINGS_PATH,
    TCISettings,
    TCISettingsManager,
)

__all__ = [
    "DEFAULT_SETTINGS_PATH",
    "TCISettings",
    "TCISettingsManager",
]
