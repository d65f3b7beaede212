"""Persistence of the two record collections.

Each collection is one JSON blob under a key, read and written whole. A blob
that cannot be decoded, or records that do not validate, raise ParseError;
nothing is silently dropped.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Callable, Dict, List, Optional, Protocol, Tuple, TypeVar

from paisatrack.config import Settings
from paisatrack.domain import Budget, Transaction
from paisatrack.errors import ParseError
from paisatrack.transforms import (
    budget_from_record,
    budget_to_record,
    transaction_from_record,
    transaction_to_record,
)

logger = logging.getLogger(__name__)

R = TypeVar("R")


class BlobStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryBlobStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileBlobStore:
    """One ``<key>.json`` file per key inside ``directory``."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        target = self._path(key)
        if not target.exists():
            return None
        with target.open("r", encoding="utf-8") as handle:
            return handle.read()

    def set(self, key: str, value: str) -> None:
        target = self._path(key)
        target.parent.mkdir(parents=True, exist_ok=True)
        # readers see the old blob or the new one, never a partial write
        fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{key}.", suffix=".tmp")
        tmp = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            tmp.replace(target)
        except BaseException:
            tmp.unlink(missing_ok=True)
            raise


class Store:
    def __init__(self, blobs: BlobStore, settings: Optional[Settings] = None):
        self.blobs = blobs
        self.settings = settings or Settings()

    def _key(self, collection: str) -> str:
        keys = self.settings.collection_keys
        if collection not in keys:
            raise KeyError(f"Unknown collection {collection!r}")
        return keys[collection]

    def load(self, collection: str) -> List[dict]:
        key = self._key(collection)
        try:
            raw = self.blobs.get(key)
        except UnicodeDecodeError as e:
            logger.error("stored %s blob is not valid UTF-8: %s", collection, e)
            raise ParseError(f"Stored {collection} are corrupted: {e}") from e
        if raw is None:
            logger.debug("collection %s not initialised, returning empty", collection)
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error("stored %s blob is not valid JSON: %s", collection, e)
            raise ParseError(f"Stored {collection} are corrupted: {e}") from e
        if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
            logger.error("stored %s blob is not a list of records", collection)
            raise ParseError(f"Stored {collection} are not a list of records")
        logger.debug("loaded %d %s", len(data), collection)
        return data

    def save(self, collection: str, records: List[dict]) -> None:
        key = self._key(collection)
        self.blobs.set(key, json.dumps(list(records), ensure_ascii=False))
        logger.debug("saved %d %s", len(records), collection)

    def _load_typed(self, collection: str, convert: Callable[[dict], R]) -> Tuple[R, ...]:
        items = []
        for index, record in enumerate(self.load(collection)):
            try:
                items.append(convert(record))
            except ParseError as e:
                logger.error("invalid %s record at index %d: %s", collection, index, e)
                raise ParseError(f"Invalid {collection} record #{index}: {e}") from e
        return tuple(items)

    def load_transactions(self) -> Tuple[Transaction, ...]:
        return self._load_typed("transactions", transaction_from_record)

    def save_transactions(self, trans: Tuple[Transaction, ...]) -> None:
        self.save("transactions", [transaction_to_record(t) for t in trans])

    def load_budgets(self) -> Tuple[Budget, ...]:
        return self._load_typed("budgets", budget_from_record)

    def save_budgets(self, budgets: Tuple[Budget, ...]) -> None:
        self.save("budgets", [budget_to_record(b) for b in budgets])


def open_store(settings: Settings) -> Store:
    return Store(JsonFileBlobStore(settings.data_dir), settings)
