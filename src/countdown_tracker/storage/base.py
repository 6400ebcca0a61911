"""Store interface and the base class for file-backed storage."""

import json
import os
from pathlib import Path
from typing import Any, Optional, Protocol

from countdown_tracker.models.entries import Snapshot


def get_data_dir() -> Path:
    """
    Get the data directory for storing local files.

    Uses TRACKER_DATA_DIR environment variable if set, otherwise defaults
    to the project root directory.

    Returns:
        Path to the data directory
    """
    env_dir = os.environ.get("TRACKER_DATA_DIR")
    if env_dir:
        return Path(env_dir)
    # Default to project root (parent of src/)
    return Path(__file__).parent.parent.parent.parent


class EntryStore(Protocol):
    """Anything that can load and save a full snapshot."""

    def load(self) -> Snapshot:
        """Load the stored snapshot; a missing store is an empty snapshot."""
        ...

    def save(self, snapshot: Snapshot) -> Optional[str]:
        """Persist the snapshot and return the new version tag, if the store has one."""
        ...


class BaseStorage:
    """Base class for storage implementations."""

    def __init__(self, subdirectory: str, data_dir: Optional[Path] = None):
        """
        Initialize storage with a subdirectory name.

        Args:
            subdirectory: Name of the subdirectory within the data directory
            data_dir: Parent directory; defaults to get_data_dir()
        """
        self.data_dir = (data_dir or get_data_dir()) / subdirectory
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _load_json(self, file_path: Path) -> dict[str, Any] | list[Any] | None:
        """Load JSON from a file, returning None if it doesn't exist."""
        if not file_path.exists():
            return None
        try:
            with open(file_path, "r") as f:
                return json.load(f)
        except (json.JSONDecodeError, IOError):
            return None

    def _save_json(self, file_path: Path, data: dict[str, Any] | list[Any]) -> None:
        """Save data as JSON to a file, replacing it atomically."""
        tmp_path = file_path.with_suffix(file_path.suffix + ".tmp")
        with open(tmp_path, "w") as f:
            json.dump(data, f, indent=2, default=str)
        os.replace(tmp_path, file_path)
