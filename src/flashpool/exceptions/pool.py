from typing import Any

from flashpool.exceptions.base import FlashPoolError


class FlashLoanPoolError(FlashPoolError):
    """
    Exception raised by the flash loan pool contract.
    """


class Unauthorized(FlashLoanPoolError):
    """
    Raised when the sender is not allowed to perform the requested operation.
    """

    def __init__(self) -> None:
        super().__init__(message="Unauthorized")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, ()


class InvalidReference(FlashLoanPoolError):
    """
    Raised when an address or asset reference cannot be resolved.
    """

    def __init__(self, reference: str) -> None:
        self.reference = reference
        super().__init__(message=f"Invalid reference: {reference!r}")

    def __reduce__(self) -> tuple[Any, ...]:
        # Pickling will raise an exception if a reduction method is not defined
        return self.__class__, (self.reference,)


class WrongFunds(FlashLoanPoolError):
    """
    Raised when the funds attached to a deposit are not exactly one non-zero coin of the pool's
    denomination.
    """

    def __init__(self, denom: str) -> None:
        self.denom = denom
        super().__init__(message=f"Invalid funds. Expected denom ({denom})")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.denom,)


class TokenizedExpected(FlashLoanPoolError):
    def __init__(self) -> None:
        super().__init__(
            message="Attempted to provide native tokens when tokenized assets were expected"
        )

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, ()


class NativeExpected(FlashLoanPoolError):
    def __init__(self) -> None:
        super().__init__(
            message="Attempted to provide tokenized assets when native tokens were expected"
        )

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, ()


class NotReturned(FlashLoanPoolError):
    """
    Raised by the deferred balance assertion when a loan plus its fee was not returned.
    """

    def __init__(self, expected: int, available: int) -> None:
        self.expected = expected
        self.available = available
        super().__init__(
            message=f"Funds + fee was not returned: expected {expected}, have {available}"
        )

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.expected, self.available)


class NoProvisions(FlashLoanPoolError):
    def __init__(self) -> None:
        super().__init__(message="Can not withdraw without providing first")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, ()


class StateNotFound(FlashLoanPoolError):
    """
    Raised when a required storage item has never been written.
    """

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(message=f"No value stored at key {key!r}")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.key,)
