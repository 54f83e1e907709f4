from collections.abc import Callable, Iterable, Iterator

from eth_typing import ChecksumAddress
from sqlalchemy import delete, select
from sqlalchemy.orm import Session, sessionmaker

from flashpool.database.models import KeyValueTable
from flashpool.logging import logger
from flashpool.types.aliases import StorageKey


class SqliteStore:
    """
    A `KeyValueStore` persisted in a SQL database through SQLAlchemy.

    Writes made during a unit of work are buffered in memory and flushed in a single database
    transaction by `commit`, or by `commit_all` together with every other store on the same
    database. Snapshots only copy the buffer, so restoring one never touches the database.
    """

    def __init__(self, session_factory: sessionmaker[Session], namespace: str) -> None:
        self._session_factory = session_factory
        self.namespace = namespace
        # Pending writes, a value of None marks a pending removal
        self._pending: dict[StorageKey, bytes | None] = {}

    @classmethod
    def factory(
        cls,
        session_factory: sessionmaker[Session],
    ) -> Callable[[ChecksumAddress], "SqliteStore"]:
        """
        Build a store factory for `Chain`, giving each contract the namespace of its address.
        """

        def _build(address: ChecksumAddress) -> SqliteStore:
            return cls(session_factory=session_factory, namespace=address)

        return _build

    def get(self, key: StorageKey) -> bytes | None:
        if key in self._pending:
            return self._pending[key]

        with self._session_factory() as session:
            row = session.get(KeyValueTable, (self.namespace, key))
            return None if row is None else row.value

    def set(self, key: StorageKey, value: bytes) -> None:
        self._pending[key] = value

    def remove(self, key: StorageKey) -> None:
        self._pending[key] = None

    def scan(self, prefix: StorageKey) -> Iterator[tuple[StorageKey, bytes]]:
        with self._session_factory() as session:
            merged: dict[StorageKey, bytes | None] = {
                row.key: row.value
                for row in session.scalars(
                    select(KeyValueTable).where(
                        KeyValueTable.namespace == self.namespace,
                        KeyValueTable.key.startswith(prefix, autoescape=True),
                    )
                )
            }
        merged.update(
            (key, value) for key, value in self._pending.items() if key.startswith(prefix)
        )

        for key in sorted(merged):
            value = merged[key]
            if value is not None:
                yield key, value

    def snapshot(self) -> dict[StorageKey, bytes | None]:
        return self._pending.copy()

    def restore(self, snapshot: dict[StorageKey, bytes | None]) -> None:
        self._pending = snapshot.copy()

    def _write_pending(self, session: Session) -> None:
        for key, value in self._pending.items():
            if value is None:
                session.execute(
                    delete(KeyValueTable).where(
                        KeyValueTable.namespace == self.namespace,
                        KeyValueTable.key == key,
                    )
                )
            else:
                session.merge(KeyValueTable(namespace=self.namespace, key=key, value=value))

    def commit(self) -> None:
        self.commit_all([self])

    @staticmethod
    def commit_all(stores: Iterable["SqliteStore"]) -> None:
        """
        Flush the pending writes of every store sharing a session factory in one transaction.

        Pending writes are cleared only after every transaction has committed. If any flush fails,
        every store keeps its pending writes and the caller is expected to restore a snapshot.
        """

        by_session_factory: dict[sessionmaker[Session], list[SqliteStore]] = {}
        for store in stores:
            if store._pending:
                by_session_factory.setdefault(store._session_factory, []).append(store)

        for session_factory, group in by_session_factory.items():
            with session_factory.begin() as session:
                for store in group:
                    store._write_pending(session)

        for group in by_session_factory.values():
            for store in group:
                logger.debug(
                    f"Flushed {len(store._pending)} writes for namespace {store.namespace}"
                )
                store._pending.clear()
