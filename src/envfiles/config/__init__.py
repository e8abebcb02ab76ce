"""Configuration for envfiles

Typed settings read from the environment, optionally seeded from a .env file.

Example:
    from envfiles.config import get_settings

    settings = get_settings()
    settings.loader.directory_path   # ENVFILES_DIRECTORY
"""

from envfiles.config.env_loader import EnvLoader
from envfiles.config.settings import (
    DEFAULT_ENCODING,
    DEFAULT_PATH,
    DEFAULT_PREFIX,
    DEFAULT_SUFFIX,
    LoaderSettings,
    LogSettings,
    MergePolicy,
    Settings,
    get_settings,
    reset_settings,
)

__all__ = [
    "EnvLoader",
    "LoaderSettings",
    "LogSettings",
    "Settings",
    "MergePolicy",
    "get_settings",
    "reset_settings",
    "DEFAULT_ENCODING",
    "DEFAULT_PATH",
    "DEFAULT_PREFIX",
    "DEFAULT_SUFFIX",
]
