"""Snapshot-backed entity store: the single owner of every collection.

All writes go through :meth:`EntityStore.mutate`, which applies a function to a
working copy of the snapshot under one lock and then durably replaces the
document on disk. Reads take the same lock and hand out copies, so callers never
observe (or hold on to) rows that are mid-mutation.
"""
from __future__ import annotations

import copy
import logging
import os
import tempfile
import threading
from contextlib import suppress
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, TypeVar

from pydantic import ValidationError

from .config import get_settings
from .constants import STARTER_CATEGORIES
from .errors import PersistenceError
from .models import Category, CollectionName, Snapshot

logger = logging.getLogger(__name__)

T = TypeVar("T")


def seeded_snapshot() -> Snapshot:
    """Return an empty snapshot carrying the starter category catalog."""

    return Snapshot(categories=[Category(**entry) for entry in STARTER_CATEGORIES])


class EntityStore:
    """Load/mutate/save lifecycle around one JSON snapshot document."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._lock = threading.RLock()
        self._snapshot: Snapshot | None = None

    # ------------------------------------------------------------------ loading
    def load(self) -> Snapshot:
        """Read the persisted snapshot into memory and return a copy of it.

        A missing document is initialised with the seeded catalog. A document that
        cannot be parsed is moved aside and replaced by an empty seeded snapshot;
        startup never fails because of it.
        """

        with self._lock:
            self._snapshot = self._read_document()
            return self._snapshot.model_copy(deep=True)

    def _read_document(self) -> Snapshot:
        if not self.path.exists():
            snapshot = seeded_snapshot()
            try:
                self._persist(snapshot)
            except PersistenceError:
                logger.warning("Starting with an unsaved seeded snapshot at %s", self.path)
            return snapshot

        try:
            raw = self.path.read_text(encoding="utf-8")
            return Snapshot.model_validate_json(raw)
        except (OSError, ValueError, ValidationError):
            quarantined = self._quarantine()
            logger.error(
                "Snapshot at %s is unreadable; continuing with an empty snapshot (original kept at %s)",
                self.path,
                quarantined,
            )
            return seeded_snapshot()

    def _ensure_loaded(self) -> Snapshot:
        if self._snapshot is None:
            self._snapshot = self._read_document()
        return self._snapshot

    def _quarantine(self) -> Path | None:
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%f")
        target = self.path.with_name(f"{self.path.name}.corrupt-{stamp}")
        try:
            os.replace(self.path, target)
        except OSError:
            logger.exception("Could not move corrupt snapshot %s aside", self.path)
            return None
        return target

    # ------------------------------------------------------------------ writing
    def _persist(self, snapshot: Snapshot, result: Any = None) -> None:
        payload = snapshot.model_dump_json(indent=2)
        directory = self.path.parent
        tmp_path: str | None = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=directory)
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, self.path)
        except OSError as exc:
            if tmp_path is not None:
                with suppress(OSError):
                    os.unlink(tmp_path)
            logger.exception("Failed to persist snapshot to %s", self.path)
            raise PersistenceError("Unable to persist changes", result=result) from exc

    def mutate(self, fn: Callable[[Snapshot], T]) -> T:
        """Apply ``fn`` atomically and persist the result before returning.

        ``fn`` runs against a working copy; if it raises, the live snapshot is
        untouched. If the disk write fails the in-memory snapshot keeps the change
        and :class:`PersistenceError` is raised with the mutation's result attached.
        """

        with self._lock:
            working = self._ensure_loaded().model_copy(deep=True)
            result = fn(working)
            self._snapshot = working
            detached = copy.deepcopy(result)
            self._persist(working, result=detached)
            return detached

    # ------------------------------------------------------------------ reading
    def read(self, fn: Callable[[Snapshot], T]) -> T:
        """Run a read-only function against a consistent snapshot."""

        with self._lock:
            return copy.deepcopy(fn(self._ensure_loaded()))

    def get(self, collection: CollectionName | str, record_id: str) -> Any | None:
        with self._lock:
            row = self._ensure_loaded().find(collection, record_id)
            return row.model_copy(deep=True) if row is not None else None

    def query(
        self,
        collection: CollectionName | str,
        predicate: Callable[[Any], bool] | None = None,
    ) -> list[Any]:
        with self._lock:
            rows = self._ensure_loaded().collection(collection)
            return [row.model_copy(deep=True) for row in rows if predicate is None or predicate(row)]

    def snapshot(self) -> Snapshot:
        with self._lock:
            return self._ensure_loaded().model_copy(deep=True)


_store: EntityStore | None = None
_store_lock = threading.Lock()


def init_store(path: Path | str | None = None) -> EntityStore:
    """Create (or replace) the process-wide store and load it from disk."""

    global _store
    with _store_lock:
        target = Path(path) if path is not None else get_settings().data_path
        store = EntityStore(target)
        store.load()
        _store = store
        return store


def get_store() -> EntityStore:
    """FastAPI dependency returning the process-wide store."""

    if _store is None:
        return init_store()
    return _store


__all__ = ["EntityStore", "get_store", "init_store", "seeded_snapshot"]
