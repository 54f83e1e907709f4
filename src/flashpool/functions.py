from decimal import Decimal

from eth_typing import ChecksumAddress
from eth_utils.crypto import keccak

from flashpool.checksum_cache import get_checksum_address
from flashpool.constants import DECIMAL_FRACTIONAL, DECIMAL_PLACES, MAX_UINT128, MIN_UINT128
from flashpool.exceptions import (
    ArithmeticOverflow,
    ArithmeticUnderflow,
    DivideByZero,
    FlashPoolValueError,
    InvalidReference,
)


def checked_add(a: int, b: int) -> int:
    """
    Add two uint128 values, raising instead of wrapping when the sum exceeds MAX_UINT128.
    """

    result = a + b
    if result > MAX_UINT128:
        raise ArithmeticOverflow(f"{a} + {b} overflows uint128")
    return result


def checked_sub(a: int, b: int) -> int:
    """
    Subtract two uint128 values, raising instead of wrapping when the result would be negative.
    """

    result = a - b
    if result < MIN_UINT128:
        raise ArithmeticUnderflow(f"{a} - {b} underflows uint128")
    return result


def muldiv(
    a: int,
    b: int,
    denominator: int,
) -> int:
    """
    Calculates floor(a*b/denominator) with full precision. Throws if the result does not fit in a
    uint128 or denominator == 0.

    Python integers do not overflow, so the 256-bit intermediate product of two uint128 values is
    always exact and only the final result needs checking.
    """

    if denominator == 0:
        raise DivideByZero

    result = (a * b) // denominator

    if result > MAX_UINT128:
        msg = "result > MAX_UINT128"
        raise ArithmeticOverflow(msg)

    return result


def decimal_to_atomics(value: Decimal) -> int:
    """
    Convert a fixed-point decimal into its integer representation with 18 fractional digits.

    The conversion is exact: values with more fractional digits, negative values, and non-finite
    values are rejected.
    """

    if not value.is_finite() or value < 0:
        raise FlashPoolValueError(message=f"{value} is not a non-negative finite decimal")

    _, digits, exponent = value.as_tuple()
    assert isinstance(exponent, int)
    if -exponent > DECIMAL_PLACES:
        raise FlashPoolValueError(
            message=f"{value} has more than {DECIMAL_PLACES} fractional digits"
        )

    coefficient = int("".join(str(digit) for digit in digits))
    return coefficient * 10 ** (exponent + DECIMAL_PLACES)


def decimal_mul_floor(amount: int, rate: Decimal) -> int:
    """
    Multiply an integer amount by a fixed-point rate, rounding toward zero.

    e.g. decimal_mul_floor(100, Decimal("0.03")) == 3
    """

    return muldiv(amount, decimal_to_atomics(rate), DECIMAL_FRACTIONAL)


def derive_address(label: str) -> ChecksumAddress:
    """
    Generate a deterministic address from a human-readable label, using the least significant 20
    bytes of its keccak hash.
    """

    return get_checksum_address(keccak(text=label)[-20:])


def validate_address(address: str) -> ChecksumAddress:
    """
    Resolve `address` into its checksummed form, raising `InvalidReference` if it is not a valid
    20-byte hex address.
    """

    try:
        return get_checksum_address(address)
    except (TypeError, ValueError):
        raise InvalidReference(address) from None
