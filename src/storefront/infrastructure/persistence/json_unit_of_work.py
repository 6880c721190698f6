"""JSON-file-backed UnitOfWork.

The whole store is one JSON document:

    {"version": 7, "categories": [...], "products": [...], "orders": [...]}

Each transaction reads the last committed document into a private working
copy, so it never sees another transaction's uncommitted writes. Commit
is optimistic: under a short exclusive lock file the on-disk version is
compared with the version the transaction started from; if someone else
committed in between, the commit fails with ``WriteError`` and nothing is
written. The new document replaces the old one with an atomic rename, so
readers only ever see complete committed documents.

A lock file older than ``stale_lock_after`` seconds is treated as left
behind by a crashed process and removed.
"""

from __future__ import annotations

import json
import os
import time
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import structlog

from storefront.domain.exceptions import WriteError
from storefront.domain.repository.unit_of_work import Transaction, UnitOfWork
from storefront.infrastructure.persistence.json_category_repository import (
    JsonCategoryRepository,
)
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)

logger = structlog.get_logger(__name__)

_LOCK_POLL_INTERVAL = 0.01
_DEFAULT_STALE_LOCK_AFTER = 30.0


class JsonTransaction(Transaction):

    def __init__(self, uow: JsonUnitOfWork, document: dict) -> None:
        self._uow = uow
        self._document = document
        self._base_version: int = document.get("version", 0)
        self._open = True
        self.products = JsonProductRepository(document)
        self.categories = JsonCategoryRepository(document)
        self.orders = JsonOrderRepository(document)

    @property
    def is_open(self) -> bool:
        return self._open

    def commit(self) -> None:
        self._assert_open()
        try:
            self._uow._write(self._document, self._base_version)
        finally:
            self._open = False

    def rollback(self) -> None:
        self._assert_open()
        self._open = False
        self._document = {}

    def _assert_open(self) -> None:
        if not self._open:
            raise WriteError("Transaction is already closed")


class JsonUnitOfWork(UnitOfWork):

    def __init__(
        self,
        file_path: Path,
        commit_timeout: float = 5.0,
        stale_lock_after: float = _DEFAULT_STALE_LOCK_AFTER,
    ) -> None:
        self._file_path = file_path
        self._lock_path = file_path.with_name(file_path.name + ".lock")
        self._commit_timeout = commit_timeout
        self._stale_lock_after = stale_lock_after
        self._ensure_file()

    def begin(self) -> JsonTransaction:
        return JsonTransaction(self, self._load())

    # --- Commit path ----------------------------------------------------------

    def _write(self, document: dict, base_version: int) -> None:
        with self._commit_lock():
            current = self._load().get("version", 0)
            if current != base_version:
                logger.warning(
                    "commit_conflict",
                    store=str(self._file_path),
                    expected_version=base_version,
                    found_version=current,
                )
                raise WriteError(
                    "The store was modified by another transaction; "
                    "nothing was written, please retry"
                )
            document["version"] = base_version + 1
            self._persist(document)

    @contextmanager
    def _commit_lock(self) -> Iterator[None]:
        deadline = time.monotonic() + self._commit_timeout
        while True:
            try:
                fd = os.open(self._lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
                break
            except FileExistsError:
                if self._break_stale_lock():
                    continue
                if time.monotonic() >= deadline:
                    raise WriteError(
                        f"Timed out after {self._commit_timeout}s waiting to commit"
                    ) from None
                time.sleep(_LOCK_POLL_INTERVAL)
        try:
            os.write(fd, f"{os.getpid()} {time.time():.3f}\n".encode())
            yield
        finally:
            os.close(fd)
            self._lock_path.unlink(missing_ok=True)

    def _break_stale_lock(self) -> bool:
        """Remove a lock left behind by a committer that never released it.

        A commit holds the lock for milliseconds, so a lock older than
        ``stale_lock_after`` seconds belongs to a process that died.
        """
        try:
            age = time.time() - self._lock_path.stat().st_mtime
            if age < self._stale_lock_after:
                return False
            holder = self._lock_path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return True
        self._lock_path.unlink(missing_ok=True)
        logger.warning(
            "stale_commit_lock_broken",
            store=str(self._file_path),
            holder=holder or None,
            age_seconds=round(age, 1),
        )
        return True

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> dict:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist(self, document: dict) -> None:
        tmp_path = self._file_path.with_name(self._file_path.name + ".tmp")
        tmp_path.write_text(json.dumps(document, indent=2) + "\n", encoding="utf-8")
        os.replace(tmp_path, self._file_path)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._persist({"version": 0, "categories": [], "products": [], "orders": []})
