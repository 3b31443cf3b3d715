"""Sequence store backed by a JSON file."""

import json
import logging
import os
import tempfile
from pathlib import Path

from ...domain.numbering import DEFAULT_STATE_PATH
from ...ports.sequence import SequenceStorePort

logger = logging.getLogger(__name__)


class JsonFileSequenceStore(SequenceStorePort):
    """Counter store persisted as a flat JSON object of key -> integer.

    A missing or unreadable file is treated as an empty store, so a corrupt
    state file silently restarts numbering for every key. Writes go through a
    temporary file; there is no locking between processes.
    """

    def __init__(self, path: Path = DEFAULT_STATE_PATH) -> None:
        self.path = Path(path).expanduser()

    def get(self, key: str) -> int:
        return self._load().get(key, 0)

    def increment(self, key: str) -> int:
        state = self._load()
        value = state.get(key, 0) + 1
        state[key] = value
        self._save(state)
        logger.debug(f"Sequence {key} -> {value} ({self.path})")
        return value

    def _load(self) -> dict[str, int]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable sequence state {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed sequence state {self.path}")
            return {}
        return {
            k: v for k, v in data.items() if isinstance(v, int) and not isinstance(v, bool)
        }

    def _save(self, state: dict[str, int]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".sequence-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(json.dumps(state, indent=2) + "\n")
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
