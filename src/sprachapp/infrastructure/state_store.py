"""
JSON file state store: Infrastructure adapter for the local durable store.

The whole AppData lives under a single key, one file in the data directory.
"""

import logging
import os
import tempfile
from pathlib import Path

from sprachapp.application.study_service import new_app_data
from sprachapp.domain.errors import MalformedBackup
from sprachapp.domain.models import AppData
from sprachapp.domain.ports import StateStore

from .backup import deserialize, serialize

logger = logging.getLogger(__name__)


class JsonFileStateStore(StateStore):
    """
    Keeps the persisted document in one JSON file.

    Writes go to a temp file in the same directory and are moved into place,
    so a crash mid-write never leaves a truncated document behind.
    """

    def __init__(self, path: Path):
        self.path = path

    def load(self) -> AppData | None:
        """
        Raises:
            MalformedBackup: If the stored document is unreadable or corrupt.
                The file is left as is.
        """
        if not self.path.exists():
            return None
        try:
            blob = self.path.read_bytes()
        except OSError as e:
            raise MalformedBackup(f"cannot read file ({e.strerror})", source=str(self.path)) from e
        return deserialize(blob, source=str(self.path))

    def save(self, data: AppData) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=f".{self.path.stem}.", dir=self.path.parent)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(serialize(data))
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
        logger.debug(f"Saved state to {self.path} ({len(data.cards)} cards)")


def load_or_create(store: StateStore, now: int, username: str = "User") -> AppData:
    """Stored state, or a fresh initial state on first launch."""
    data = store.load()
    if data is None:
        logger.info("No saved state found, starting fresh")
        return new_app_data(now, username=username)
    return data
