"""JSON-file persistence gateway.

One file per collection under the data directory, each holding a list of
records. Writes go through a temp file and a move so a crash never leaves
a half-written collection. The engine relies on two guarantees only:
``upsert`` by a unique key and point lookup with ``get``.
"""
from __future__ import annotations

import json
import os
import shutil
import tempfile
import logging
from datetime import datetime
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Iterable, List, Optional, Sequence
from uuid import uuid4

from fitlog.infra.paths import DATA_DIR, collection_file
from fitlog.utilities.errors import PersistenceError

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


def _matches(record: Record, filters: Optional[Dict[str, Any]]) -> bool:
    if not filters:
        return True
    return all(record.get(k) == v for k, v in filters.items())


def _now() -> str:
    return datetime.utcnow().isoformat() + 'Z'


class JsonStore:
    def __init__(self, data_dir: Optional[Path] = None):
        self.data_dir = Path(data_dir or DATA_DIR)
        self._lock = Lock()

    # --- file helpers -----------------------------------------------------
    def _load(self, collection: str) -> List[Record]:
        path = collection_file(self.data_dir, collection)
        if not path.exists():
            return []
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Cannot read collection '{collection}': {e}") from e
        if not isinstance(data, list):
            raise PersistenceError(f"Collection '{collection}' is not a list")
        return data

    def _save(self, collection: str, records: List[Record]) -> None:
        path = collection_file(self.data_dir, collection)
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=str(self.data_dir), prefix=f".{collection}_", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                    json.dump(records, tmp, indent=2, ensure_ascii=False)
                shutil.move(tmp_path, path)
            finally:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
        except OSError as e:
            raise PersistenceError(f"Cannot write collection '{collection}': {e}") from e

    # --- gateway ----------------------------------------------------------
    def upsert(self, collection: str, record: Record, conflict_key: Sequence[str]) -> Record:
        '''Insert ``record`` or overwrite the one sharing every ``conflict_key`` field.'''
        missing = [k for k in conflict_key if record.get(k) in (None, "")]
        if missing:
            raise PersistenceError(f"Upsert into '{collection}' lacks key fields: {missing}")
        key = {k: record[k] for k in conflict_key}
        with self._lock:
            records = self._load(collection)
            stored = dict(record)
            stored["updated_at"] = _now()
            for i, existing in enumerate(records):
                if _matches(existing, key):
                    stored["id"] = existing.get("id") or uuid4().hex
                    stored["created_at"] = existing.get("created_at") or stored["updated_at"]
                    records[i] = stored
                    break
            else:
                stored.setdefault("id", uuid4().hex)
                stored.setdefault("created_at", stored["updated_at"])
                records.append(stored)
            self._save(collection, records)
        return dict(stored)

    def get(self, collection: str, filters: Dict[str, Any]) -> Optional[Record]:
        with self._lock:
            for record in self._load(collection):
                if _matches(record, filters):
                    return dict(record)
        return None

    def insert_many(self, collection: str, records: Iterable[Record]) -> None:
        new_records = []
        for record in records:
            stored = dict(record)
            stored.setdefault("id", uuid4().hex)
            stored.setdefault("created_at", _now())
            new_records.append(stored)
        if not new_records:
            return
        with self._lock:
            existing = self._load(collection)
            self._save(collection, existing + new_records)

    # --- collection helpers (plans, shopping list) -------------------------
    def select(self, collection: str, filters: Optional[Dict[str, Any]] = None) -> List[Record]:
        with self._lock:
            return [dict(r) for r in self._load(collection) if _matches(r, filters)]

    def update(self, collection: str, filters: Dict[str, Any], changes: Dict[str, Any]) -> int:
        with self._lock:
            records = self._load(collection)
            count = 0
            for record in records:
                if _matches(record, filters):
                    record.update(changes)
                    record["updated_at"] = _now()
                    count += 1
            if count:
                self._save(collection, records)
        return count

    def delete(self, collection: str, filters: Dict[str, Any]) -> int:
        with self._lock:
            records = self._load(collection)
            kept = [r for r in records if not _matches(r, filters)]
            removed = len(records) - len(kept)
            if removed:
                self._save(collection, kept)
        if removed:
            logger.info("Deleted %s record(s) from %s", removed, collection)
        return removed


__all__ = ['JsonStore', 'Record']
