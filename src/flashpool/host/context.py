import dataclasses
from typing import Any, Protocol

from eth_typing import ChecksumAddress

from flashpool.host.effects import Coin, Response
from flashpool.host.storage import KeyValueStore
from flashpool.types.aliases import BlockNumber, Denom


class Querier(Protocol):
    """
    Read-only access to balances and other contracts.
    """

    def native_balance(self, address: ChecksumAddress, denom: Denom) -> int: ...

    def query_contract(self, contract: ChecksumAddress, msg: Any) -> Any: ...


@dataclasses.dataclass(slots=True, frozen=True, kw_only=True)
class Env:
    contract_address: ChecksumAddress
    block_height: BlockNumber


@dataclasses.dataclass(slots=True, frozen=True, kw_only=True)
class MessageInfo:
    sender: ChecksumAddress
    funds: tuple[Coin, ...] = ()


@dataclasses.dataclass(slots=True, frozen=True, kw_only=True)
class QueryContext:
    store: KeyValueStore
    querier: Querier
    env: Env


@dataclasses.dataclass(slots=True, frozen=True, kw_only=True)
class ExecutionContext:
    store: KeyValueStore
    querier: Querier
    env: Env
    info: MessageInfo


class Contract(Protocol):
    """
    A program deployed on the host. Each contract owns one key-value store, passed in through the
    context of every call.
    """

    def instantiate(self, ctx: ExecutionContext, msg: Any) -> Response: ...

    def execute(self, ctx: ExecutionContext, msg: Any) -> Response: ...

    def query(self, ctx: QueryContext, msg: Any) -> Any: ...
