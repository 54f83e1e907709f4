import hypothesis
import hypothesis.strategies
import pytest

from flashpool.constants import MAX_UINT128
from flashpool.exceptions import ArithmeticOverflow, ArithmeticUnderflow, NoProvisions
from flashpool.host import Chain, MemoryStore
from flashpool.pool.shares import compute_entitled, compute_shares_to_mint, provide, withdraw
from flashpool.pool.state import PROVISIONS, TOTAL_PROVIDED

ALICE = Chain.create_address("alice")
BOB = Chain.create_address("bob")


@pytest.fixture
def store() -> MemoryStore:
    store = MemoryStore()
    TOTAL_PROVIDED.save(store, 0)
    return store


def test_first_depositor_rule():
    assert compute_shares_to_mint(total_provided=0, deposited=100, pre_deposit_balance=0) == 100
    assert compute_shares_to_mint(total_provided=0, deposited=100, pre_deposit_balance=200) == 100
    assert compute_shares_to_mint(total_provided=100, deposited=100, pre_deposit_balance=0) == 100


def test_shares_priced_at_pre_deposit_balance():
    assert compute_shares_to_mint(total_provided=100, deposited=100, pre_deposit_balance=300) == 33
    assert compute_shares_to_mint(total_provided=100, deposited=101, pre_deposit_balance=100) == 101
    assert compute_shares_to_mint(total_provided=10, deposited=1, pre_deposit_balance=11) == 0


def test_compute_entitled():
    assert compute_entitled(shares=100, total_provided=133, balance=400) == 300
    assert compute_entitled(shares=33, total_provided=33, balance=100) == 100
    assert compute_entitled(shares=0, total_provided=0, balance=1_000) == 0
    assert compute_entitled(shares=10, total_provided=0, balance=1_000) == 0


@hypothesis.given(
    shares=hypothesis.strategies.lists(
        hypothesis.strategies.integers(min_value=0, max_value=2**64),
        min_size=1,
        max_size=20,
    ),
    balance=hypothesis.strategies.integers(min_value=0, max_value=2**64),
)
def test_entitlements_never_exceed_balance(shares: list[int], balance: int):
    total = sum(shares)
    entitlements = [compute_entitled(s, total, balance) for s in shares]
    assert sum(entitlements) <= balance
    if total > 0:
        # Floor rounding loses less than one unit per provider
        assert balance - sum(entitlements) < len(shares)


def test_provide_and_withdraw(store: MemoryStore):
    assert provide(store, ALICE, deposited=100, balance_after_deposit=100) == 100
    assert provide(store, BOB, deposited=50, balance_after_deposit=150) == 50
    assert provide(store, ALICE, deposited=150, balance_after_deposit=300) == 150

    assert PROVISIONS.may_load(store, ALICE) == 250
    assert PROVISIONS.may_load(store, BOB) == 50
    assert TOTAL_PROVIDED.load(store) == 300

    assert withdraw(store, BOB, balance=600) == 100
    assert PROVISIONS.may_load(store, BOB) == 0
    assert TOTAL_PROVIDED.load(store) == 250

    with pytest.raises(NoProvisions):
        withdraw(store, BOB, balance=500)


def test_provide_rejects_inconsistent_balance(store: MemoryStore):
    with pytest.raises(ArithmeticUnderflow):
        provide(store, ALICE, deposited=100, balance_after_deposit=99)


def test_provide_overflow(store: MemoryStore):
    provide(store, ALICE, deposited=MAX_UINT128, balance_after_deposit=MAX_UINT128)
    with pytest.raises(ArithmeticOverflow):
        provide(store, BOB, deposited=MAX_UINT128, balance_after_deposit=MAX_UINT128)


def test_withdraw_unknown_provider(store: MemoryStore):
    with pytest.raises(NoProvisions):
        withdraw(store, ALICE, balance=0)
