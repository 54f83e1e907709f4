"""
Borrower contracts for exercising a pool.

A borrower is told it holds a loan either by a `ReceiveLoan` call carrying native coins, or by a
token `TokenReceive` hook whose payload is a `ReceiveLoan`. Whatever it does in reaction runs before
the pool checks its balance.
"""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict

from flashpool.exceptions import UnsupportedMessage
from flashpool.host.context import ExecutionContext, QueryContext
from flashpool.host.effects import BankSend, Coin, ContractCall, Effect, Response
from flashpool.host.token import TokenReceive, TokenTransfer
from flashpool.logging import logger
from flashpool.pool.messages import ReceiveLoan
from flashpool.pool.state import Item, StoredUint128
from flashpool.validation.evm_values import ValidatedUint128

REPAY_AMOUNT: Item[int] = Item("amount", StoredUint128)
REPAY_DENOM: Item[str] = Item("denom", str)


class _Message(BaseModel):
    model_config = ConfigDict(frozen=True)


class ReceiverInstantiate(_Message):
    amount: ValidatedUint128
    denom: str = ""


class UpdateRepayment(_Message):
    amount: ValidatedUint128
    denom: str = ""


class SimpleLoanReceiver:
    """
    Returns a fixed amount to whoever lends to it, regardless of the amount lent.

    Native loans are repaid in `denom` with a bank transfer to the lender. Token loans are repaid
    with a transfer on the token contract that delivered the loan, and `denom` is not used.
    """

    def instantiate(self, ctx: ExecutionContext, msg: ReceiverInstantiate) -> Response:
        REPAY_AMOUNT.save(ctx.store, msg.amount)
        REPAY_DENOM.save(ctx.store, msg.denom)
        return Response().add_attribute("method", "instantiate")

    def execute(self, ctx: ExecutionContext, msg: Any) -> Response:
        match msg:
            case ReceiveLoan():
                amount = REPAY_AMOUNT.load(ctx.store)
                denom = REPAY_DENOM.load(ctx.store)
                logger.debug(f"RECEIVER: repaying {amount} {denom} to {ctx.info.sender}")
                return Response().add_effect(
                    BankSend(to_address=ctx.info.sender, coins=(Coin(denom, amount),))
                )
            case TokenReceive(sender=lender, msg=ReceiveLoan()):
                amount = REPAY_AMOUNT.load(ctx.store)
                logger.debug(f"RECEIVER: repaying {amount} of token {ctx.info.sender} to {lender}")
                return Response().add_effect(
                    ContractCall(
                        contract=ctx.info.sender,
                        msg=TokenTransfer(recipient=lender, amount=amount),
                    )
                )
            case UpdateRepayment(amount=amount, denom=denom):
                REPAY_AMOUNT.save(ctx.store, amount)
                REPAY_DENOM.save(ctx.store, denom)
                return Response().add_attribute("method", "update_repayment")
            case _:
                raise UnsupportedMessage(msg)

    def query(self, ctx: QueryContext, msg: Any) -> Any:
        raise UnsupportedMessage(msg)


class ScriptedLoanReceiver:
    """
    Emits the same effects in reaction to every message it is sent.
    """

    def __init__(self, effects: Iterable[Effect] = ()) -> None:
        self.effects = tuple(effects)

    def instantiate(self, ctx: ExecutionContext, msg: Any) -> Response:
        return Response().add_attribute("method", "instantiate")

    def execute(self, ctx: ExecutionContext, msg: Any) -> Response:
        response = Response().add_attribute("method", "scripted")
        for effect in self.effects:
            response.add_effect(effect)
        return response

    def query(self, ctx: QueryContext, msg: Any) -> Any:
        raise UnsupportedMessage(msg)
