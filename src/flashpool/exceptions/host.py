from typing import Any

from eth_typing import ChecksumAddress

from flashpool.exceptions.base import FlashPoolError


class HostError(FlashPoolError):
    """
    Exception raised by the simulated host environment.
    """


class InsufficientFunds(HostError):
    """
    Raised when a transfer would debit more than the holder owns.
    """

    def __init__(self, holder: ChecksumAddress, denom: str, balance: int, amount: int) -> None:
        self.holder = holder
        self.denom = denom
        self.balance = balance
        self.amount = amount
        super().__init__(
            message=f"{holder} holds {balance} {denom}, cannot debit {amount}",
        )

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.holder, self.denom, self.balance, self.amount)


class UnknownContract(HostError):
    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__(message=f"No contract deployed at {address}")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.address,)


class UnsupportedMessage(HostError):
    """
    Raised when a contract receives a message it does not handle.
    """

    def __init__(self, msg: object) -> None:
        self.msg = msg
        super().__init__(message=f"Unsupported message {type(msg).__name__}")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.msg,)


class CallDepthExceeded(HostError):
    def __init__(self, depth: int) -> None:
        self.depth = depth
        super().__init__(message=f"Maximum call depth {depth} exceeded")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.depth,)
