"""Infrastructure helpers."""

from .settings import get_settings, load_settings, local_now, AppSettings
from .constants import *  # noqa: F401,F403
from .json_store import JsonFileStore, PersistenceError

__all__ = [
    "get_settings",
    "load_settings",
    "local_now",
    "AppSettings",
    "JsonFileStore",
    "PersistenceError",
]
