"""Storage modules for the countdown tracker."""

from countdown_tracker.storage.base import BaseStorage, EntryStore, get_data_dir
from countdown_tracker.storage.local import LocalCache
from countdown_tracker.storage.remote import RemoteStore

__all__ = [
    "BaseStorage",
    "EntryStore",
    "get_data_dir",
    "LocalCache",
    "RemoteStore",
]
