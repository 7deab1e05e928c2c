from typing import Any

from swaprouter.exceptions.base import SwapRouterError


class EVMRevertError(SwapRouterError):
    """
    Raised when a simulated EVM contract operation would revert.
    """

    def __init__(self, error: str) -> None:
        self.error = error
        super().__init__(message=f"EVM Revert: {error}")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.error,)


class InvalidUint256(EVMRevertError):
    def __init__(self) -> None:
        super().__init__(error="Not a valid uint256")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, ()
