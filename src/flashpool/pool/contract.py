from typing import Any

from eth_typing import ChecksumAddress

from flashpool.denomination import (
    NativeDenomination,
    TokenDenomination,
    match_incoming,
    transfer_effect,
    validate_denomination,
)
from flashpool.exceptions import (
    NativeExpected,
    TokenizedExpected,
    Unauthorized,
    UnsupportedMessage,
)
from flashpool.functions import validate_address
from flashpool.host.context import ExecutionContext, QueryContext
from flashpool.host.effects import Response
from flashpool.host.token import TokenReceive
from flashpool.logging import logger
from flashpool.pool import admin, loan, shares
from flashpool.pool.messages import (
    AssertBalance,
    Balance,
    Entitled,
    GetConfig,
    InstantiateMsg,
    Loan,
    Provide,
    Provided,
    ProviderEntry,
    Providers,
    TotalProvided,
    UpdateConfig,
    Withdraw,
)
from flashpool.pool.oracle import available_balance
from flashpool.pool.state import LOAN_DENOM, PROVISIONS, TOTAL_PROVIDED


class FlashLoanPool:
    """
    A single-asset pool that lends its balance for the span of one unit of work and shares the fees
    among its providers.

    The contract keeps no state of its own. Everything lives in the store passed with each call.
    """

    def instantiate(self, ctx: ExecutionContext, msg: InstantiateMsg) -> Response:
        admin_address = validate_address(msg.admin) if msg.admin is not None else None
        loan_denom = validate_denomination(msg.loan_denom)

        admin.save_config(ctx.store, admin_address, msg.fee, loan_denom)
        TOTAL_PROVIDED.save(ctx.store, 0)

        logger.info(
            f"Configured pool {ctx.env.contract_address} for {loan_denom}, fee {msg.fee}, "
            f"admin {admin_address}"
        )
        return (
            Response()
            .add_attribute("method", "instantiate")
            .add_attribute("admin", admin_address)
            .add_attribute("fee", msg.fee)
        )

    def execute(self, ctx: ExecutionContext, msg: Any) -> Response:
        match msg:
            case UpdateConfig(admin=new_admin, fee=new_fee):
                updated_admin, updated_fee = admin.update_config(
                    ctx.store, ctx.info.sender, new_admin, new_fee
                )
                return (
                    Response()
                    .add_attribute("method", "update_config")
                    .add_attribute("new_admin", updated_admin)
                    .add_attribute("new_fee", updated_fee)
                )
            case Loan(receiver=receiver, amount=amount):
                return loan.issue_loan(ctx, receiver, amount)
            case AssertBalance(amount=expected):
                return loan.assert_balance(ctx, expected)
            case Provide():
                return self._provide_native(ctx)
            case Withdraw():
                return self._withdraw(ctx)
            case TokenReceive(sender=sender, amount=amount):
                # The payload is intentionally ignored, any token transfer to the pool is a deposit
                return self._provide_token(ctx, sender, amount)
            case _:
                raise UnsupportedMessage(msg)

    def _provide_native(self, ctx: ExecutionContext) -> Response:
        loan_denom = LOAN_DENOM.load(ctx.store)
        match loan_denom:
            case TokenDenomination():
                raise TokenizedExpected
            case NativeDenomination(symbol=symbol):
                provided = match_incoming(ctx.info.funds, symbol)

        return self._provide(ctx, ctx.info.sender, provided)

    def _provide_token(self, ctx: ExecutionContext, sender: str, amount: int) -> Response:
        loan_denom = LOAN_DENOM.load(ctx.store)
        match loan_denom:
            case NativeDenomination():
                raise NativeExpected
            case TokenDenomination(address=token):
                # Only the configured token contract can vouch for a transfer to the pool
                if ctx.info.sender != token:
                    raise Unauthorized

        return self._provide(ctx, validate_address(sender), amount)

    def _provide(self, ctx: ExecutionContext, provider: ChecksumAddress, amount: int) -> Response:
        loan_denom = LOAN_DENOM.load(ctx.store)

        # The deposit has already been credited, so this balance includes it
        balance = available_balance(ctx.querier, ctx.env.contract_address, loan_denom)
        minted = shares.provide(ctx.store, provider, amount, balance)

        return (
            Response()
            .add_attribute("method", "provide")
            .add_attribute("provider", provider)
            .add_attribute("provided", minted)
        )

    def _withdraw(self, ctx: ExecutionContext) -> Response:
        provider = ctx.info.sender
        loan_denom = LOAN_DENOM.load(ctx.store)
        balance = available_balance(ctx.querier, ctx.env.contract_address, loan_denom)

        entitled = shares.withdraw(ctx.store, provider, balance)

        return (
            Response()
            .add_attribute("method", "withdraw")
            .add_attribute("receiver", provider)
            .add_attribute("amount", entitled)
            .add_effect(transfer_effect(loan_denom, provider, entitled))
        )

    def query(self, ctx: QueryContext, msg: Any) -> Any:
        match msg:
            case GetConfig():
                return admin.load_config(ctx.store)
            case Provided(address=address):
                return PROVISIONS.may_load(ctx.store, validate_address(address)) or 0
            case TotalProvided():
                return TOTAL_PROVIDED.load(ctx.store)
            case Entitled(address=address):
                provided = PROVISIONS.may_load(ctx.store, validate_address(address))
                if provided is None:
                    return 0
                return shares.compute_entitled(
                    shares=provided,
                    total_provided=TOTAL_PROVIDED.load(ctx.store),
                    balance=available_balance(
                        ctx.querier, ctx.env.contract_address, LOAN_DENOM.load(ctx.store)
                    ),
                )
            case Balance():
                return available_balance(
                    ctx.querier, ctx.env.contract_address, LOAN_DENOM.load(ctx.store)
                )
            case Providers():
                return tuple(
                    ProviderEntry(address=address, shares=provided)
                    for address, provided in PROVISIONS.items(ctx.store)
                )
            case _:
                raise UnsupportedMessage(msg)
