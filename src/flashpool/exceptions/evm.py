from flashpool.exceptions.base import FlashPoolError


class EVMRevertError(FlashPoolError):
    """
    Raised when an integer operation would fault on a fixed-width machine.
    """

    def __init__(self, error: str) -> None:
        self.error = error
        super().__init__(message=f"Revert: {error}")

    def __reduce__(self) -> tuple[type["EVMRevertError"], tuple[str]]:
        return self.__class__, (self.error,)


class ArithmeticOverflow(EVMRevertError):
    def __init__(self, error: str = "Overflow") -> None:
        super().__init__(error=error)


class ArithmeticUnderflow(EVMRevertError):
    def __init__(self, error: str = "Underflow") -> None:
        super().__init__(error=error)


class DivideByZero(EVMRevertError):
    def __init__(self, error: str = "Division by zero") -> None:
        super().__init__(error=error)
