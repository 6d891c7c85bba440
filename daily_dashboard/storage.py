"""Per-user record collections kept in memory with optional JSONL files.

Layout when a data directory is configured:
- ``<data_dir>/<quoted_user>_tasks.jsonl``
- ``<data_dir>/<quoted_user>_notes.jsonl``

Each collection is loaded on first access and rewritten in full after every
mutation. Lines that fail to parse are skipped and logged.
"""
from __future__ import annotations

import json
import logging
import threading
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar
from urllib.parse import quote

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")


def safe_user_key(user_id: str) -> str:
    """Percent-encode a user id (usually an email) for use in a filename.

    The encoding is one-to-one, so distinct ids never share a file.
    """
    return quote(user_id, safe="@")


class UserCollectionStore(Generic[RecordT]):
    """Base class holding one ordered list of records per user.

    Subclasses set ``suffix`` and implement ``_from_dict``/``_to_dict``.
    Index 0 is the newest record; new records are inserted at the front.
    """

    suffix = "records"

    def __init__(
        self,
        data_dir: Optional[Path] = None,
        *,
        seed: Optional[Callable[[], List[RecordT]]] = None,
    ) -> None:
        self._data_dir = Path(data_dir) if data_dir else None
        self._seed = seed
        self._records: Dict[str, List[RecordT]] = {}
        self._lock = threading.RLock()

    @property
    def data_dir(self) -> Optional[Path]:
        return self._data_dir

    # ------------------------------------------------------------------
    # Subclass hooks
    # ------------------------------------------------------------------

    def _from_dict(self, data: Dict[str, Any]) -> RecordT:
        raise NotImplementedError

    def _to_dict(self, record: RecordT) -> Dict[str, Any]:
        raise NotImplementedError

    def _record_id(self, record: RecordT) -> str:
        return getattr(record, "id")

    # ------------------------------------------------------------------
    # Collection access (callers hold self._lock)
    # ------------------------------------------------------------------

    def _collection(self, user_id: str) -> List[RecordT]:
        records = self._records.get(user_id)
        if records is not None:
            return records

        path = self._user_file(user_id)
        if path is not None and path.exists():
            records = self._read_file(path)
            self._records[user_id] = records
            return records

        records = list(self._seed()) if self._seed is not None else []
        self._records[user_id] = records
        if records:
            logger.info(f"Seeded {len(records)} {self.suffix} for {user_id}")
            self._persist(user_id)
        return records

    def _snapshot(self, user_id: str) -> List[RecordT]:
        """Copies of the user's records; callers may read them without the lock."""
        with self._lock:
            return [replace(record) for record in self._collection(user_id)]

    def _find(self, user_id: str, record_id: str) -> Optional[RecordT]:
        for record in self._collection(user_id):
            if self._record_id(record) == record_id:
                return record
        return None

    def _insert(self, user_id: str, record: RecordT) -> None:
        with self._lock:
            self._collection(user_id).insert(0, record)
            self._persist(user_id)

    def _remove(self, user_id: str, record_id: str) -> bool:
        with self._lock:
            records = self._collection(user_id)
            for index, record in enumerate(records):
                if self._record_id(record) == record_id:
                    del records[index]
                    self._persist(user_id)
                    return True
            return False

    # ------------------------------------------------------------------
    # File storage
    # ------------------------------------------------------------------

    def _user_file(self, user_id: str) -> Optional[Path]:
        if self._data_dir is None:
            return None
        return self._data_dir / f"{safe_user_key(user_id)}_{self.suffix}.jsonl"

    def _read_file(self, path: Path) -> List[RecordT]:
        records: List[RecordT] = []
        with path.open("r", encoding="utf-8") as f:
            for line_number, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    records.append(self._from_dict(json.loads(line)))
                except (ValueError, KeyError, TypeError) as exc:
                    logger.warning(f"Skipping bad line {line_number} in {path.name}: {exc}")
        logger.debug(f"Loaded {len(records)} {self.suffix} from {path}")
        return records

    def _persist(self, user_id: str) -> None:
        path = self._user_file(user_id)
        if path is None:
            return
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(".jsonl.tmp")
        with tmp_path.open("w", encoding="utf-8") as f:
            for record in self._records.get(user_id, []):
                f.write(json.dumps(self._to_dict(record)) + "\n")
        tmp_path.replace(path)
