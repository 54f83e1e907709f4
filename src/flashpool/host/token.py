"""
A fungible token contract with a transfer-and-notify hook, used for pools configured with a
tokenized denomination.
"""

from typing import Any

from eth_typing import ChecksumAddress
from pydantic import BaseModel, ConfigDict

from flashpool.exceptions import InsufficientFunds, UnsupportedMessage
from flashpool.functions import checked_add, checked_sub, validate_address
from flashpool.host.context import ExecutionContext, QueryContext
from flashpool.host.effects import ContractCall, Response
from flashpool.host.storage import KeyValueStore
from flashpool.logging import logger
from flashpool.validation.evm_values import ValidatedUint128

BALANCE_PREFIX = "balance/"


class _Message(BaseModel):
    model_config = ConfigDict(frozen=True)


class TokenInstantiate(_Message):
    symbol: str
    initial_balances: tuple[tuple[str, ValidatedUint128], ...] = ()


class TokenTransfer(_Message):
    recipient: str
    amount: ValidatedUint128


class TokenSend(_Message):
    """
    Transfer `amount` to `contract`, then notify it with a `TokenReceive` carrying `msg`.
    """

    contract: str
    amount: ValidatedUint128
    msg: Any = None


class TokenReceive(_Message):
    """
    The hook delivered to a contract after it receives tokens through `TokenSend`. The token
    contract is the sender of this message, `sender` is the account that initiated the send.
    """

    sender: ChecksumAddress
    amount: ValidatedUint128
    msg: Any = None


class TokenBalance(_Message):
    address: str


class TokenInfo(_Message): ...


def _balance_key(address: ChecksumAddress) -> str:
    return f"{BALANCE_PREFIX}{address}"


class TokenContract:
    """
    A token with balances held in the contract's own store.
    """

    def _load_balance(self, store: KeyValueStore, address: ChecksumAddress) -> int:
        raw = store.get(_balance_key(address))
        return 0 if raw is None else int(raw)

    def _save_balance(self, store: KeyValueStore, address: ChecksumAddress, amount: int) -> None:
        store.set(_balance_key(address), str(amount).encode())

    def _move(
        self,
        store: KeyValueStore,
        sender: ChecksumAddress,
        recipient: ChecksumAddress,
        amount: int,
    ) -> None:
        sender_balance = self._load_balance(store, sender)
        if sender_balance < amount:
            raise InsufficientFunds(
                holder=sender,
                denom=self._load_symbol(store),
                balance=sender_balance,
                amount=amount,
            )
        self._save_balance(store, sender, checked_sub(sender_balance, amount))
        self._save_balance(
            store, recipient, checked_add(self._load_balance(store, recipient), amount)
        )
        logger.debug(f"TOKEN: {sender} -> {recipient} {amount}")

    def _load_symbol(self, store: KeyValueStore) -> str:
        raw = store.get("symbol")
        return "" if raw is None else raw.decode()

    def instantiate(self, ctx: ExecutionContext, msg: TokenInstantiate) -> Response:
        ctx.store.set("symbol", msg.symbol.encode())
        for holder, amount in msg.initial_balances:
            address = validate_address(holder)
            self._save_balance(
                ctx.store, address, checked_add(self._load_balance(ctx.store, address), amount)
            )
        return Response().add_attribute("method", "instantiate").add_attribute("symbol", msg.symbol)

    def execute(self, ctx: ExecutionContext, msg: Any) -> Response:
        match msg:
            case TokenTransfer(recipient=recipient, amount=amount):
                self._move(ctx.store, ctx.info.sender, validate_address(recipient), amount)
                return (
                    Response()
                    .add_attribute("method", "transfer")
                    .add_attribute("recipient", recipient)
                    .add_attribute("amount", amount)
                )
            case TokenSend(contract=contract, amount=amount, msg=payload):
                receiver = validate_address(contract)
                self._move(ctx.store, ctx.info.sender, receiver, amount)
                return (
                    Response()
                    .add_attribute("method", "send")
                    .add_attribute("contract", receiver)
                    .add_attribute("amount", amount)
                    .add_effect(
                        ContractCall(
                            contract=receiver,
                            msg=TokenReceive(sender=ctx.info.sender, amount=amount, msg=payload),
                        )
                    )
                )
            case _:
                raise UnsupportedMessage(msg)

    def query(self, ctx: QueryContext, msg: Any) -> Any:
        match msg:
            case TokenBalance(address=address):
                return self._load_balance(ctx.store, validate_address(address))
            case TokenInfo():
                return self._load_symbol(ctx.store)
            case _:
                raise UnsupportedMessage(msg)
