"""Configuration system for docsearch."""

from .factory import ComponentFactory
from .models import CONFIG_FILENAME, BuildConfig, ComponentConfig, DocSearchConfig, load_config
from .settings import Settings, load_settings, settings

__all__ = [
    "BuildConfig",
    "ComponentConfig",
    "ComponentFactory",
    "CONFIG_FILENAME",
    "DocSearchConfig",
    "Settings",
    "load_config",
    "load_settings",
    "settings",
]
