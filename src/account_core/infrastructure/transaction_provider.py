from __future__ import annotations

import logging
import threading
from contextvars import ContextVar
from itertools import count
from typing import TYPE_CHECKING, Any

from account_core.application.ports import (
    TransactionHandle,
    TransactionOutcome,
    TransactionProvider,
)

if TYPE_CHECKING:
    from collections.abc import Hashable

logger = logging.getLogger(__name__)

_transaction_ids = count(1)


class InMemoryDatabase:
    """Committed rows kept as ``{table: {key: row}}``.

    Reads and writes issued while a transaction of this database is active
    on the calling thread go through that transaction's write set; outside
    a transaction they hit committed state directly (used by fixtures).

    Rows are stored as given. Repositories copy on the way in and out.
    """

    def __init__(self) -> None:
        self._tables: dict[str, dict[Hashable, Any]] = {}
        self._lock = threading.Lock()
        # Per database, so transactions on different databases can nest
        self._current: ContextVar[InMemoryTransaction | None] = ContextVar(
            f"account_core_in_memory_transaction_{id(self)}", default=None
        )

    def read(self, table: str, key: Hashable) -> Any | None:
        transaction = self.active_transaction()
        if transaction is not None and (table, key) in transaction.writes:
            return transaction.writes[(table, key)]
        with self._lock:
            return self._tables.get(table, {}).get(key)

    def write(self, table: str, key: Hashable, row: Any) -> None:
        transaction = self.active_transaction()
        if transaction is not None:
            transaction.writes[(table, key)] = row
            return
        with self._lock:
            self._tables.setdefault(table, {})[key] = row

    def scan(self, table: str) -> list[Any]:
        """Return every row of ``table`` as seen by the calling thread."""
        with self._lock:
            rows = dict(self._tables.get(table, {}))
        transaction = self.active_transaction()
        if transaction is not None:
            for (written_table, key), row in transaction.writes.items():
                if written_table == table:
                    rows[key] = row
        return list(rows.values())

    def apply(self, writes: dict[tuple[str, Hashable], Any]) -> None:
        """Publish a write set atomically."""
        with self._lock:
            for (table, key), row in writes.items():
                self._tables.setdefault(table, {})[key] = row

    def active_transaction(self) -> InMemoryTransaction | None:
        """The unfinished transaction of this database on the calling thread, if any."""
        transaction = self._current.get()
        if transaction is None or transaction.outcome is not None:
            return None
        return transaction

    def bind(self, transaction: InMemoryTransaction) -> None:
        self._current.set(transaction)

    def unbind(self, transaction: InMemoryTransaction) -> None:
        if self._current.get() is transaction:
            self._current.set(None)


class InMemoryTransaction(TransactionHandle):
    """Write-set buffer for one transaction.

    NOT thread-safe: a transaction belongs to the thread that began it.
    """

    def __init__(self, database: InMemoryDatabase) -> None:
        self.id = next(_transaction_ids)
        self.database = database
        self.writes: dict[tuple[str, Hashable], Any] = {}
        self._outcome: TransactionOutcome | None = None

    @property
    def outcome(self) -> TransactionOutcome | None:
        return self._outcome

    def __repr__(self) -> str:
        return (
            f"InMemoryTransaction(id={self.id}, writes={len(self.writes)}, "
            f"outcome={self._outcome})"
        )


class InMemoryTransactionProvider(TransactionProvider):
    """Transaction provider over an InMemoryDatabase.

    Implementation notes:
    - begin() binds the transaction to the calling thread (contextvars);
      one in-memory transaction per database may be active per thread
    - Writes are buffered; commit() publishes them in one step
    - rollback() discards the buffer, so committed state is untouched
    - Isolation is read-committed; per-account serialization comes from
      the AccountLockManager held around the transaction
    """

    def __init__(self, database: InMemoryDatabase) -> None:
        self._database = database

    @property
    def database(self) -> InMemoryDatabase:
        return self._database

    def begin(self) -> InMemoryTransaction:
        active = self._database.active_transaction()
        if active is not None:
            raise RuntimeError(f"Transaction {active.id} is already active on this thread")

        transaction = InMemoryTransaction(self._database)
        self._database.bind(transaction)
        logger.debug("Began transaction %s", transaction.id)
        return transaction

    def commit(self, handle: TransactionHandle) -> None:
        transaction = self._require_active(handle)
        self._database.apply(transaction.writes)
        self._finish(transaction, TransactionOutcome.COMMITTED)

    def rollback(self, handle: TransactionHandle) -> None:
        transaction = self._require_active(handle)
        transaction.writes.clear()
        self._finish(transaction, TransactionOutcome.ROLLED_BACK)

    def _require_active(self, handle: TransactionHandle) -> InMemoryTransaction:
        if not isinstance(handle, InMemoryTransaction) or handle.database is not self._database:
            raise RuntimeError(f"Transaction handle {handle!r} was not issued by this provider")
        if handle.outcome is not None:
            raise RuntimeError(f"Transaction {handle.id} already finished: {handle.outcome.value}")
        return handle

    def _finish(self, transaction: InMemoryTransaction, outcome: TransactionOutcome) -> None:
        transaction._outcome = outcome
        self._database.unbind(transaction)
        logger.debug("Transaction %s %s", transaction.id, outcome.value)
