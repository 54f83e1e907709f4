"""
Typed access to the pool's persisted state.

Values are stored as JSON produced by pydantic. Integers are written as decimal strings, since
128-bit values exceed the range many JSON consumers accept for numbers.
"""

from collections.abc import Callable, Iterator
from decimal import Decimal
from typing import Annotated, Any

from eth_typing import ChecksumAddress
from pydantic import PlainSerializer, TypeAdapter

from flashpool.denomination import Denomination
from flashpool.exceptions import StateNotFound
from flashpool.host.storage import KeyValueStore
from flashpool.types.aliases import StorageKey

StoredUint128 = Annotated[int, PlainSerializer(lambda value: str(value), return_type=str)]


class Item[T]:
    """
    A single value stored under a fixed key.
    """

    def __init__(self, key: StorageKey, value_type: Any) -> None:
        self.key = key
        self._adapter: TypeAdapter[T] = TypeAdapter(value_type)

    def may_load(self, store: KeyValueStore) -> T | None:
        raw = store.get(self.key)
        return None if raw is None else self._adapter.validate_json(raw)

    def load(self, store: KeyValueStore) -> T:
        raw = store.get(self.key)
        if raw is None:
            raise StateNotFound(self.key)
        return self._adapter.validate_json(raw)

    def save(self, store: KeyValueStore, value: T) -> None:
        store.set(self.key, self._adapter.dump_json(value))


class Map[V]:
    """
    Values stored under a common namespace, keyed by address.
    """

    def __init__(self, namespace: str, value_type: Any) -> None:
        self.namespace = namespace
        self._prefix = f"{namespace}/"
        self._adapter: TypeAdapter[V] = TypeAdapter(value_type)

    def _key(self, address: ChecksumAddress) -> StorageKey:
        return f"{self._prefix}{address}"

    def may_load(self, store: KeyValueStore, address: ChecksumAddress) -> V | None:
        raw = store.get(self._key(address))
        return None if raw is None else self._adapter.validate_json(raw)

    def save(self, store: KeyValueStore, address: ChecksumAddress, value: V) -> None:
        store.set(self._key(address), self._adapter.dump_json(value))

    def update(
        self,
        store: KeyValueStore,
        address: ChecksumAddress,
        action: Callable[[V | None], V],
    ) -> V:
        value = action(self.may_load(store, address))
        self.save(store, address, value)
        return value

    def items(self, store: KeyValueStore) -> Iterator[tuple[ChecksumAddress, V]]:
        """
        Iterate over every entry in address order. Keys hold checksummed addresses, so entries are
        ordered by the lowercase address rather than by key.
        """

        entries = [
            (ChecksumAddress(key.removeprefix(self._prefix)), raw)
            for key, raw in store.scan(self._prefix)
        ]
        for address, raw in sorted(entries, key=lambda entry: entry[0].lower()):
            yield address, self._adapter.validate_json(raw)


ADMIN: Item[ChecksumAddress | None] = Item("admin", ChecksumAddress | None)
FEE: Item[Decimal] = Item("fee", Decimal)
LOAN_DENOM: Item[Denomination] = Item("loan_denom", Denomination)

# Share count held by each provider
PROVISIONS: Map[int] = Map("provision", StoredUint128)
TOTAL_PROVIDED: Item[int] = Item("total_provided", StoredUint128)
