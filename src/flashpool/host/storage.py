from collections.abc import Iterator
from typing import Any, Protocol

from flashpool.types.aliases import StorageKey


class KeyValueStore(Protocol):
    """
    Byte-valued storage owned by a single contract.

    Stores take part in the host's unit of work: the host calls `snapshot` before the first call of
    a unit of work, `restore` with that snapshot if anything inside it fails, and `commit` once it
    succeeds.
    """

    def get(self, key: StorageKey) -> bytes | None: ...

    def set(self, key: StorageKey, value: bytes) -> None: ...

    def remove(self, key: StorageKey) -> None: ...

    def scan(self, prefix: StorageKey) -> Iterator[tuple[StorageKey, bytes]]:
        """
        Iterate over all keys beginning with `prefix`, in ascending key order.
        """
        ...

    def snapshot(self) -> Any: ...

    def restore(self, snapshot: Any) -> None: ...

    def commit(self) -> None: ...


class MemoryStore:
    """
    An in-memory `KeyValueStore`. Snapshots are shallow copies, which is sufficient because values
    are immutable `bytes`.
    """

    def __init__(self, initial: dict[StorageKey, bytes] | None = None) -> None:
        self._data: dict[StorageKey, bytes] = dict(initial) if initial is not None else {}

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(keys={len(self._data)})"

    def get(self, key: StorageKey) -> bytes | None:
        return self._data.get(key)

    def set(self, key: StorageKey, value: bytes) -> None:
        self._data[key] = value

    def remove(self, key: StorageKey) -> None:
        self._data.pop(key, None)

    def scan(self, prefix: StorageKey) -> Iterator[tuple[StorageKey, bytes]]:
        for key in sorted(self._data):
            if key.startswith(prefix):
                yield key, self._data[key]

    def snapshot(self) -> dict[StorageKey, bytes]:
        return self._data.copy()

    def restore(self, snapshot: dict[StorageKey, bytes]) -> None:
        self._data = snapshot.copy()

    def commit(self) -> None: ...
