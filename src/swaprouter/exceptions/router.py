from typing import Any

from swaprouter.exceptions.base import SwapRouterError

"""
Exceptions defined here are raised while encoding router calls.
"""


class RouterError(SwapRouterError):
    """
    Exception raised inside calldata encoding helpers.
    """


class InvalidAddress(RouterError):
    def __init__(self, address: Any) -> None:
        self.address = address
        super().__init__(message=f"{address} is not a valid address.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.address,)


class InvalidBytes32(RouterError):
    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(message=f"{value} is not valid bytes32.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.value,)


class UnsupportedTradeShape(RouterError):
    def __init__(self, trades: Any) -> None:
        self.trades = trades
        super().__init__(message=f"Cannot encode swaps for {type(trades).__name__}.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.trades,)


class NonTokenPermit(RouterError):
    def __init__(self) -> None:
        super().__init__(message="A permit can only be supplied for a token input.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, ()
