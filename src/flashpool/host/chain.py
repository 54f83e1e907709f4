import contextlib
import dataclasses
from collections.abc import Callable, Generator, Iterable
from typing import Any

from eth_typing import ChecksumAddress

from flashpool.config import settings
from flashpool.exceptions import CallDepthExceeded, FlashPoolValueError, UnknownContract
from flashpool.functions import derive_address
from flashpool.host.bank import NativeLedger
from flashpool.host.context import Contract, Env, ExecutionContext, MessageInfo, QueryContext
from flashpool.host.effects import BankSend, Coin, ContractCall, Effect, Response
from flashpool.host.sqlite_storage import SqliteStore
from flashpool.host.storage import KeyValueStore, MemoryStore
from flashpool.logging import logger
from flashpool.types.aliases import Denom


@dataclasses.dataclass(slots=True, frozen=True, kw_only=True)
class ExecutedCall:
    """
    A record of one contract call made during a unit of work, in execution order.
    """

    sender: ChecksumAddress
    contract: ChecksumAddress
    msg: Any
    response: Response


class ChainQuerier:
    def __init__(self, chain: "Chain") -> None:
        self._chain = chain

    def native_balance(self, address: ChecksumAddress, denom: Denom) -> int:
        return self._chain.bank.balance(address, denom)

    def query_contract(self, contract: ChecksumAddress, msg: Any) -> Any:
        return self._chain.query(contract, msg)


class Chain:
    """
    A deterministic, single-threaded host for contracts.

    Every externally submitted message runs as one unit of work: the target contract executes,
    then the effects it returns are carried out in order, depth-first, so that the effects of a
    nested call complete before the next effect of its caller. If anything raises, the native
    ledger, every contract store and the contract registry are restored to their state before the
    unit of work began, and the exception propagates unchanged.
    """

    def __init__(
        self,
        *,
        store_factory: Callable[[ChecksumAddress], KeyValueStore] | None = None,
        max_call_depth: int | None = None,
    ) -> None:
        self.bank = NativeLedger()
        self.block_height = 1
        self.max_call_depth = (
            max_call_depth if max_call_depth is not None else settings.host.max_call_depth
        )
        self.querier = ChainQuerier(self)
        self._store_factory = store_factory if store_factory is not None else self._memory_store
        self._contracts: dict[ChecksumAddress, Contract] = {}
        self._stores: dict[ChecksumAddress, KeyValueStore] = {}
        self._unit_of_work_active = False

    @staticmethod
    def _memory_store(_: ChecksumAddress) -> KeyValueStore:
        return MemoryStore()

    def __contains__(self, address: object) -> bool:
        return address in self._contracts

    @staticmethod
    def create_address(label: str) -> ChecksumAddress:
        return derive_address(label)

    def _env(self, contract: ChecksumAddress) -> Env:
        return Env(contract_address=contract, block_height=self.block_height)

    def _contract(self, address: ChecksumAddress) -> Contract:
        try:
            return self._contracts[address]
        except KeyError:
            raise UnknownContract(address) from None

    def store(self, address: ChecksumAddress) -> KeyValueStore:
        """
        Get the store owned by the contract at `address`.
        """

        self._contract(address)
        return self._stores[address]

    def mint(self, address: ChecksumAddress, coins: Iterable[Coin]) -> None:
        """
        Credit native coins to `address` out of thin air. Used to set up genesis balances.
        """

        for coin in coins:
            self.bank.adjust(address, coin.denom, coin.amount)

    @contextlib.contextmanager
    def unit_of_work(self) -> Generator[None, None, None]:
        if self._unit_of_work_active:
            raise FlashPoolValueError(message="A unit of work is already in progress.")

        self._unit_of_work_active = True
        bank_snapshot = self.bank.snapshot()
        store_snapshots = {address: store.snapshot() for address, store in self._stores.items()}
        known_contracts = set(self._contracts)
        try:
            yield
            self._commit_stores()
        except Exception as exc:
            self.bank.restore(bank_snapshot)
            for address in set(self._contracts) - known_contracts:
                del self._contracts[address]
                del self._stores[address]
            for address, snapshot in store_snapshots.items():
                self._stores[address].restore(snapshot)
            logger.info(f"Unit of work at height {self.block_height} reverted: {exc!r}")
            raise
        else:
            self.block_height += 1
        finally:
            self._unit_of_work_active = False

    def _commit_stores(self) -> None:
        sqlite_stores: list[SqliteStore] = []
        for store in self._stores.values():
            if isinstance(store, SqliteStore):
                sqlite_stores.append(store)
            else:
                store.commit()
        SqliteStore.commit_all(sqlite_stores)

    def instantiate(
        self,
        contract: Contract,
        msg: Any,
        *,
        sender: ChecksumAddress,
        label: str,
        funds: Iterable[Coin] = (),
    ) -> ChecksumAddress:
        """
        Deploy `contract` at the address derived from `label` and run its instantiation as one unit
        of work.
        """

        address = self.create_address(label)
        if address in self._contracts:
            raise FlashPoolValueError(message=f"A contract is already deployed at {address}.")

        funds = tuple(funds)
        calls: list[ExecutedCall] = []
        with self.unit_of_work():
            self._contracts[address] = contract
            self._stores[address] = self._store_factory(address)
            self._transfer_funds(sender, address, funds)
            response = contract.instantiate(
                ExecutionContext(
                    store=self._stores[address],
                    querier=self.querier,
                    env=self._env(address),
                    info=MessageInfo(sender=sender, funds=funds),
                ),
                msg,
            )
            calls.append(
                ExecutedCall(sender=sender, contract=address, msg=msg, response=response)
            )
            for effect in response.effects:
                self._dispatch(emitter=address, effect=effect, depth=1, calls=calls)

        logger.debug(f"Instantiated {type(contract).__name__} at {address}")
        return address

    def execute(
        self,
        sender: ChecksumAddress,
        contract: ChecksumAddress,
        msg: Any,
        funds: Iterable[Coin] = (),
    ) -> tuple[ExecutedCall, ...]:
        """
        Submit `msg` to `contract` as one unit of work, returning every call made, in execution
        order.
        """

        calls: list[ExecutedCall] = []
        with self.unit_of_work():
            self._call(
                sender=sender,
                contract=contract,
                msg=msg,
                funds=tuple(funds),
                depth=1,
                calls=calls,
            )
        return tuple(calls)

    def query(self, contract: ChecksumAddress, msg: Any) -> Any:
        return self._contract(contract).query(
            QueryContext(
                store=self._stores[contract],
                querier=self.querier,
                env=self._env(contract),
            ),
            msg,
        )

    def _transfer_funds(
        self,
        sender: ChecksumAddress,
        recipient: ChecksumAddress,
        funds: tuple[Coin, ...],
    ) -> None:
        for coin in funds:
            self.bank.transfer(coin.denom, coin.amount, sender, recipient)

    def _call(
        self,
        *,
        sender: ChecksumAddress,
        contract: ChecksumAddress,
        msg: Any,
        funds: tuple[Coin, ...],
        depth: int,
        calls: list[ExecutedCall],
    ) -> None:
        if depth > self.max_call_depth:
            raise CallDepthExceeded(self.max_call_depth)

        target = self._contract(contract)
        self._transfer_funds(sender, contract, funds)

        logger.debug(f"CALL[{depth}]: {sender} -> {contract} {type(msg).__name__}")
        response = target.execute(
            ExecutionContext(
                store=self._stores[contract],
                querier=self.querier,
                env=self._env(contract),
                info=MessageInfo(sender=sender, funds=funds),
            ),
            msg,
        )
        calls.append(ExecutedCall(sender=sender, contract=contract, msg=msg, response=response))

        for effect in response.effects:
            self._dispatch(emitter=contract, effect=effect, depth=depth, calls=calls)

    def _dispatch(
        self,
        *,
        emitter: ChecksumAddress,
        effect: Effect,
        depth: int,
        calls: list[ExecutedCall],
    ) -> None:
        match effect:
            case BankSend(to_address=to_address, coins=coins):
                self._transfer_funds(emitter, to_address, coins)
            case ContractCall(contract=contract, msg=msg, funds=funds):
                self._call(
                    sender=emitter,
                    contract=contract,
                    msg=msg,
                    funds=funds,
                    depth=depth + 1,
                    calls=calls,
                )
