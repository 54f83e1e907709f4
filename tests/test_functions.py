from decimal import Decimal

import hypothesis
import hypothesis.strategies
import pytest
from eth_utils.address import is_checksum_address

from flashpool.constants import MAX_UINT128, MIN_UINT128
from flashpool.exceptions import (
    ArithmeticOverflow,
    ArithmeticUnderflow,
    DivideByZero,
    EVMRevertError,
    FlashPoolValueError,
    InvalidReference,
)
from flashpool.functions import (
    checked_add,
    checked_sub,
    decimal_mul_floor,
    decimal_to_atomics,
    derive_address,
    muldiv,
    validate_address,
)


def test_checked_add():
    assert checked_add(1, 2) == 3
    assert checked_add(MAX_UINT128, 0) == MAX_UINT128
    with pytest.raises(ArithmeticOverflow):
        checked_add(MAX_UINT128, 1)


def test_checked_sub():
    assert checked_sub(3, 2) == 1
    with pytest.raises(ArithmeticUnderflow):
        checked_sub(2, 3)


def test_muldiv():
    assert muldiv(400, 100, 133) == 300
    assert muldiv(MAX_UINT128, MAX_UINT128, MAX_UINT128) == MAX_UINT128
    with pytest.raises(DivideByZero):
        muldiv(1, 1, 0)
    with pytest.raises(ArithmeticOverflow):
        muldiv(MAX_UINT128, 2, 1)


@hypothesis.given(
    a=hypothesis.strategies.integers(min_value=MIN_UINT128, max_value=MAX_UINT128),
    b=hypothesis.strategies.integers(min_value=MIN_UINT128, max_value=MAX_UINT128),
    denominator=hypothesis.strategies.integers(min_value=MIN_UINT128, max_value=MAX_UINT128),
)
def test_muldiv_fuzzing(a: int, b: int, denominator: int):
    if denominator == 0 or (a * b) // denominator > MAX_UINT128:
        with pytest.raises(EVMRevertError):
            muldiv(a, b, denominator)
    else:
        assert muldiv(a, b, denominator) == (a * b) // denominator


def test_decimal_to_atomics():
    assert decimal_to_atomics(Decimal("0")) == 0
    assert decimal_to_atomics(Decimal("0.03")) == 3 * 10**16
    assert decimal_to_atomics(Decimal("1")) == 10**18
    assert decimal_to_atomics(Decimal("2.5E+2")) == 250 * 10**18
    assert decimal_to_atomics(Decimal("0.000000000000000001")) == 1

    for invalid in ["-0.01", "0.0000000000000000001", "NaN", "Infinity"]:
        with pytest.raises(FlashPoolValueError):
            decimal_to_atomics(Decimal(invalid))


def test_decimal_mul_floor():
    assert decimal_mul_floor(100, Decimal("0.03")) == 3
    assert decimal_mul_floor(100, Decimal("0.01")) == 1
    assert decimal_mul_floor(99, Decimal("0.01")) == 0
    assert decimal_mul_floor(100, Decimal("1")) == 100
    assert decimal_mul_floor(0, Decimal("0.5")) == 0


def test_derive_address():
    address = derive_address("pool")
    assert address == derive_address("pool")
    assert address != derive_address("pool2")
    assert is_checksum_address(address)


def test_validate_address():
    address = derive_address("alice")
    assert validate_address(address.lower()) == address
    assert validate_address(address) == address

    for invalid in ["", "alice", "0x1234", address + "00"]:
        with pytest.raises(InvalidReference):
            validate_address(invalid)
