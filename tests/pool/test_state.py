from decimal import Decimal

import pytest

from flashpool.constants import MAX_UINT128
from flashpool.denomination import NativeDenomination, TokenDenomination
from flashpool.exceptions import StateNotFound
from flashpool.host import Chain, MemoryStore
from flashpool.pool.state import ADMIN, FEE, LOAN_DENOM, PROVISIONS, TOTAL_PROVIDED


def test_item_load_missing():
    store = MemoryStore()
    assert TOTAL_PROVIDED.may_load(store) is None
    with pytest.raises(StateNotFound, match="total_provided"):
        TOTAL_PROVIDED.load(store)


def test_integers_stored_as_strings():
    store = MemoryStore()
    TOTAL_PROVIDED.save(store, MAX_UINT128)
    assert store.get("total_provided") == f'"{MAX_UINT128}"'.encode()
    assert TOTAL_PROVIDED.load(store) == MAX_UINT128


def test_config_items():
    store = MemoryStore()
    admin = Chain.create_address("admin")
    token = Chain.create_address("token")

    ADMIN.save(store, None)
    assert ADMIN.load(store) is None
    ADMIN.save(store, admin)
    assert ADMIN.load(store) == admin

    FEE.save(store, Decimal("0.000000000000000001"))
    assert FEE.load(store) == Decimal("1E-18")

    LOAN_DENOM.save(store, NativeDenomination(symbol="ustake"))
    assert LOAN_DENOM.load(store) == NativeDenomination(symbol="ustake")
    LOAN_DENOM.save(store, TokenDenomination(address=token))
    assert LOAN_DENOM.load(store) == TokenDenomination(address=token)


def test_map():
    store = MemoryStore()
    addresses = sorted(
        (Chain.create_address(f"provider-{i}") for i in range(20)),
        key=str.lower,
    )

    for i, address in enumerate(reversed(addresses)):
        PROVISIONS.save(store, address, i)

    assert PROVISIONS.may_load(store, Chain.create_address("nobody")) is None
    assert [address for address, _ in PROVISIONS.items(store)] == addresses

    assert PROVISIONS.update(store, addresses[0], lambda shares: (shares or 0) + 10) == 29
    assert PROVISIONS.update(
        store, Chain.create_address("nobody"), lambda shares: (shares or 0) + 1
    ) == 1
