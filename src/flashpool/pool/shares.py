"""
Share accounting for pool providers.

A provider's claim on the pool is `shares / total_provided` of the live balance. All divisions round
toward zero, so the sum of every provider's entitlement never exceeds the balance actually held.
"""

from eth_typing import ChecksumAddress

from flashpool.exceptions import NoProvisions
from flashpool.functions import checked_add, checked_sub, muldiv
from flashpool.host.storage import KeyValueStore
from flashpool.logging import logger
from flashpool.pool.state import PROVISIONS, TOTAL_PROVIDED


def compute_shares_to_mint(
    total_provided: int,
    deposited: int,
    pre_deposit_balance: int,
) -> int:
    """
    Calculate the shares minted for a deposit of `deposited`, priced at the balance held before the
    deposit arrived.

    The first depositor, or any depositor into a pool with no balance, receives one share per unit
    deposited. Any balance already held when the first shares are minted accrues to that depositor.
    """

    if total_provided == 0 or pre_deposit_balance == 0:
        return deposited

    return muldiv(total_provided, deposited, pre_deposit_balance)


def compute_entitled(
    shares: int,
    total_provided: int,
    balance: int,
) -> int:
    """
    Calculate the amount redeemable for `shares` out of `balance`.
    """

    if total_provided == 0:
        return 0

    return muldiv(balance, shares, total_provided)


def provide(
    store: KeyValueStore,
    provider: ChecksumAddress,
    deposited: int,
    balance_after_deposit: int,
) -> int:
    """
    Mint shares to `provider` for a deposit that has already been credited to the pool, returning
    the number of shares minted.

    The mint is priced against the balance before the deposit, otherwise the depositor would be
    buying shares with their own just-deposited funds.
    """

    pre_deposit_balance = checked_sub(balance_after_deposit, deposited)
    total_provided = TOTAL_PROVIDED.load(store)

    minted = compute_shares_to_mint(
        total_provided=total_provided,
        deposited=deposited,
        pre_deposit_balance=pre_deposit_balance,
    )

    PROVISIONS.update(
        store,
        provider,
        lambda shares: checked_add(shares or 0, minted),
    )
    TOTAL_PROVIDED.save(store, checked_add(total_provided, minted))

    logger.debug(
        f"PROVIDE: {provider} deposited {deposited} at balance {pre_deposit_balance} / "
        f"{total_provided} shares, minted {minted}"
    )
    return minted


def withdraw(
    store: KeyValueStore,
    provider: ChecksumAddress,
    balance: int,
) -> int:
    """
    Burn all shares held by `provider` and return the amount they redeem for out of `balance`.

    The share entry is zeroed here, before the caller emits any transfer, so a reentrant withdraw
    from the recipient finds nothing left to claim.
    """

    shares = PROVISIONS.may_load(store, provider)
    if not shares:
        raise NoProvisions

    total_provided = TOTAL_PROVIDED.load(store)
    entitled = compute_entitled(shares=shares, total_provided=total_provided, balance=balance)

    PROVISIONS.save(store, provider, 0)
    TOTAL_PROVIDED.save(store, checked_sub(total_provided, shares))

    logger.debug(
        f"WITHDRAW: {provider} burned {shares} / {total_provided} shares at balance {balance}, "
        f"entitled to {entitled}"
    )
    return entitled
