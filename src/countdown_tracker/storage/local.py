"""Local JSON-file cache of the last known snapshot."""

from pathlib import Path
from typing import Optional

from countdown_tracker.exceptions import StoreError
from countdown_tracker.logger import get_logger
from countdown_tracker.models.entries import Snapshot
from countdown_tracker.storage.base import BaseStorage

logger = get_logger("countdown_tracker.storage")


class LocalCache(BaseStorage):
    """Snapshot file kept in ``tracker_data/`` (``snapshot.json`` by default)."""

    FILE_NAME = "snapshot.json"
    PENDING_FILE_NAME = "pending.json"

    def __init__(self, data_dir: Optional[Path] = None, file_name: str = FILE_NAME) -> None:
        """
        Initialize the cache in the tracker_data directory.

        Args:
            data_dir: Parent directory; defaults to get_data_dir()
            file_name: Snapshot file name; PENDING_FILE_NAME holds changes not yet sent
        """
        super().__init__("tracker_data", data_dir)
        self.file_path = self.data_dir / file_name

    def load(self) -> Snapshot:
        """Load the cached snapshot; a missing or unreadable file is empty."""
        data = self._load_json(self.file_path)
        if data is None:
            return Snapshot()
        return Snapshot.from_payload(data)

    def save(self, snapshot: Snapshot) -> Optional[str]:
        try:
            self._save_json(self.file_path, snapshot.to_payload())
        except OSError as e:
            raise StoreError(f"Failed to write local cache {self.file_path}: {e}") from e
        logger.debug(
            f"Local cache saved: {len(snapshot.activity_entries)} activities, "
            f"{len(snapshot.weight_entries)} weights"
        )
        return None

    def clear(self) -> bool:
        """Delete the cache file. Returns True if deleted."""
        if self.file_path.exists():
            self.file_path.unlink()
            return True
        return False
