from decimal import Decimal

from eth_typing import ChecksumAddress

from flashpool.denomination import Denomination
from flashpool.exceptions import Unauthorized
from flashpool.functions import decimal_to_atomics, validate_address
from flashpool.host.storage import KeyValueStore
from flashpool.logging import logger
from flashpool.pool.messages import ConfigResponse
from flashpool.pool.state import ADMIN, FEE, LOAN_DENOM


def save_config(
    store: KeyValueStore,
    admin: ChecksumAddress | None,
    fee: Decimal,
    loan_denom: Denomination,
) -> None:
    # Rejects negative fees and fees that cannot be represented exactly
    decimal_to_atomics(fee)

    ADMIN.save(store, admin)
    FEE.save(store, fee)
    LOAN_DENOM.save(store, loan_denom)


def load_config(store: KeyValueStore) -> ConfigResponse:
    return ConfigResponse(
        admin=ADMIN.load(store),
        fee=FEE.load(store),
        loan_denom=LOAN_DENOM.load(store),
    )


def update_config(
    store: KeyValueStore,
    sender: ChecksumAddress,
    new_admin: str | None,
    new_fee: Decimal,
) -> tuple[ChecksumAddress | None, Decimal]:
    """
    Replace the admin and fee. Only the current admin may do this, so once the admin has been set
    to None the configuration is frozen.

    The fee is not bounded above.
    """

    admin = ADMIN.load(store)
    if admin is None or sender != admin:
        raise Unauthorized

    validated_admin = validate_address(new_admin) if new_admin is not None else None
    decimal_to_atomics(new_fee)

    ADMIN.save(store, validated_admin)
    FEE.save(store, new_fee)

    logger.info(f"Pool admin set to {validated_admin}, fee set to {new_fee}")
    return validated_admin, new_fee
