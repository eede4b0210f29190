"""Bounded assessment history kept in a local JSON file."""
import json
import logging
import os
import tempfile
import threading
from collections import deque
from typing import Deque, List, Optional

from pydantic import ValidationError

from mindcheck.domain.models import AssessmentVerdict
from mindcheck.infrastructure.config import DEFAULT_HISTORY_PATH


logger = logging.getLogger(__name__)


DEFAULT_CAPACITY = 10


class JsonHistoryStore:
    """
    Append-only history of verdicts, capped at `capacity` entries.

    The file holds the whole list oldest-first and is rewritten on every change.
    Read-modify-write is serialised within this process only; two processes
    writing the same file can still lose an update.
    """

    def __init__(self, storage_path: Optional[str] = None, capacity: int = DEFAULT_CAPACITY):
        """
        Initialize JsonHistoryStore.

        Args:
            storage_path: Path to the JSON history file.
                         Defaults to .streamlit/results_history.json
            capacity: Maximum number of entries kept (oldest evicted first)
        """
        if capacity < 1:
            raise ValueError("History capacity must be at least 1")
        self.storage_path = storage_path or DEFAULT_HISTORY_PATH
        self.capacity = capacity
        self._lock = threading.Lock()

    def _read(self) -> Deque[AssessmentVerdict]:
        entries: Deque[AssessmentVerdict] = deque(maxlen=self.capacity)
        try:
            with open(self.storage_path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except FileNotFoundError:
            return entries
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("History file unreadable, starting empty: %s", e)
            return entries

        if not isinstance(raw, list):
            logger.warning("History file is not a list, starting empty")
            return entries

        try:
            entries.extend(AssessmentVerdict.model_validate(item) for item in raw)
        except ValidationError as e:
            logger.warning("History file malformed, starting empty: %s", e)
            entries.clear()
        return entries

    def _write(self, entries: Deque[AssessmentVerdict]) -> None:
        directory = os.path.dirname(os.path.abspath(self.storage_path))
        os.makedirs(directory, exist_ok=True)
        payload = [entry.model_dump(mode="json") for entry in entries]

        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.storage_path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def load(self) -> List[AssessmentVerdict]:
        """All stored verdicts, oldest first."""
        with self._lock:
            return list(self._read())

    def recent(self, limit: Optional[int] = None) -> List[AssessmentVerdict]:
        """Stored verdicts, most recent first."""
        entries = list(reversed(self.load()))
        if limit is not None:
            entries = entries[:limit]
        return entries

    def append(self, verdict: AssessmentVerdict) -> Optional[AssessmentVerdict]:
        """
        Add a verdict, evicting the oldest entry when full.

        Returns:
            The evicted verdict, or None if nothing was evicted
        """
        with self._lock:
            entries = self._read()
            evicted = entries[0] if len(entries) == self.capacity else None
            entries.append(verdict)
            self._write(entries)
        return evicted

    def delete(self, index: int) -> AssessmentVerdict:
        """
        Remove one entry.

        Args:
            index: Position in most-recent-first order (0 is the newest)

        Returns:
            The removed verdict
        """
        with self._lock:
            entries = list(self._read())
            if not 0 <= index < len(entries):
                raise IndexError(f"No history entry at index {index}")
            removed = entries.pop(len(entries) - 1 - index)
            self._write(deque(entries, maxlen=self.capacity))
        return removed

    def clear(self) -> None:
        """Remove every stored verdict."""
        with self._lock:
            self._write(deque(maxlen=self.capacity))
