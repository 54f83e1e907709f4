__all__ = (
    "DECIMAL_FRACTIONAL",
    "DECIMAL_PLACES",
    "MAX_UINT128",
    "MIN_UINT128",
)

import typing


def _min_uint(_: int) -> int:
    return 0


def _max_uint(bits: int) -> int:
    return typing.cast("int", 2**bits - 1)


MIN_UINT128 = _min_uint(128)
MAX_UINT128 = _max_uint(128)

# Fixed-point decimals (fee rates) carry 18 fractional digits
DECIMAL_PLACES = 18
DECIMAL_FRACTIONAL = 10**DECIMAL_PLACES
