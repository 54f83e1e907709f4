from flashpool.exceptions.base import FlashPoolError, FlashPoolValueError
from flashpool.exceptions.evm import (
    ArithmeticOverflow,
    ArithmeticUnderflow,
    DivideByZero,
    EVMRevertError,
)
from flashpool.exceptions.host import (
    CallDepthExceeded,
    HostError,
    InsufficientFunds,
    UnknownContract,
    UnsupportedMessage,
)
from flashpool.exceptions.pool import (
    FlashLoanPoolError,
    InvalidReference,
    NativeExpected,
    NoProvisions,
    NotReturned,
    StateNotFound,
    TokenizedExpected,
    Unauthorized,
    WrongFunds,
)

from . import evm, host, pool

__all__ = (
    "ArithmeticOverflow",
    "ArithmeticUnderflow",
    "CallDepthExceeded",
    "DivideByZero",
    "EVMRevertError",
    "FlashLoanPoolError",
    "FlashPoolError",
    "FlashPoolValueError",
    "HostError",
    "InsufficientFunds",
    "InvalidReference",
    "NativeExpected",
    "NoProvisions",
    "NotReturned",
    "StateNotFound",
    "TokenizedExpected",
    "Unauthorized",
    "UnknownContract",
    "UnsupportedMessage",
    "WrongFunds",
    "evm",
    "host",
    "pool",
)
