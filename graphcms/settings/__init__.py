"""Settings file and environment configuration."""

from graphcms.settings.loader import load_settings, load_store_config
from graphcms.settings.models import CmsSettings, StoreConfig, StoreSettings, WorkflowSettings

__all__ = [
    "CmsSettings",
    "StoreConfig",
    "StoreSettings",
    "WorkflowSettings",
    "load_settings",
    "load_store_config",
]
