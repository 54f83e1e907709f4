"""
Flash loan settlement.

A loan is issued and verified within one unit of work. `issue_loan` records nothing; it returns two
effects, the transfer to the borrower and a call from the pool to itself asserting the expected
balance. The host runs the borrower's reaction to the transfer before the assertion, and discards
the whole unit of work if the assertion, or anything before it, fails.
"""

import enum

from eth_typing import ChecksumAddress

from flashpool.denomination import transfer_effect
from flashpool.exceptions import NotReturned
from flashpool.functions import checked_add, decimal_mul_floor, validate_address
from flashpool.host.context import ExecutionContext
from flashpool.host.effects import ContractCall, Response
from flashpool.logging import logger
from flashpool.pool.messages import AssertBalance, ReceiveLoan
from flashpool.pool.oracle import available_balance
from flashpool.pool.state import FEE, LOAN_DENOM


class LoanPhase(enum.Enum):
    ISSUED = "issued"
    PENDING_ASSERTION = "pending assertion"
    SETTLED = "settled"
    REVERTED = "reverted"


def issue_loan(ctx: ExecutionContext, receiver: str, amount: int) -> Response:
    """
    Lend `amount` to `receiver`. Anyone may request a loan.
    """

    fee = FEE.load(ctx.store)
    loan_denom = LOAN_DENOM.load(ctx.store)
    receiver_address: ChecksumAddress = validate_address(receiver)
    pool_address = ctx.env.contract_address

    available = available_balance(ctx.querier, pool_address, loan_denom)

    # Expect everything back plus the fee applied to the amount borrowed. For example, if the pool
    # holds 200 and the fee is 0.03, a loan of 100 should leave the pool holding 203.
    expected = checked_add(available, decimal_mul_floor(amount, fee))

    logger.debug(
        f"LOAN [{LoanPhase.ISSUED.value}]: {amount} {loan_denom} to {receiver_address}, "
        f"balance {available}, expecting {expected}"
    )

    return (
        Response()
        .add_attribute("method", "loan")
        .add_attribute("receiver", receiver_address)
        .add_attribute("amount", amount)
        .add_attribute("expected", expected)
        .add_attribute("phase", LoanPhase.ISSUED.value)
        .add_effect(
            transfer_effect(loan_denom, receiver_address, amount, payload=ReceiveLoan()),
        )
        .add_effect(
            ContractCall(contract=pool_address, msg=AssertBalance(amount=expected)),
        )
    )


def assert_balance(ctx: ExecutionContext, expected: int) -> Response:
    """
    Check that the pool holds exactly `expected`.
    """

    loan_denom = LOAN_DENOM.load(ctx.store)
    available = available_balance(ctx.querier, ctx.env.contract_address, loan_denom)

    logger.debug(
        f"LOAN [{LoanPhase.PENDING_ASSERTION.value}]: expecting {expected}, holding {available}"
    )
    if available != expected:
        raise NotReturned(expected=expected, available=available)

    logger.debug(f"LOAN [{LoanPhase.SETTLED.value}]: balance {available}")
    return (
        Response()
        .add_attribute("method", "assert_balances")
        .add_attribute("phase", LoanPhase.SETTLED.value)
    )
