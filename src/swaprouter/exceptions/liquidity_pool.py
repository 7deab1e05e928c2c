from typing import Any

from swaprouter.exceptions.base import SwapRouterError


class LiquidityPoolError(SwapRouterError):
    """
    Exception raised inside liquidity pool helpers.
    """


class InvalidPoolState(LiquidityPoolError):
    """
    Raised when a pool is built with a current tick that does not bracket its square root price.
    """

    def __init__(self, sqrt_price_x96: int, tick: int) -> None:
        self.sqrt_price_x96 = sqrt_price_x96
        self.tick = tick
        super().__init__(message=f"Price {sqrt_price_x96} is outside the bounds of tick {tick}.")

    def __reduce__(self) -> tuple[Any, ...]:
        # Pickling will raise an exception if a reduction method is not defined
        return self.__class__, (self.sqrt_price_x96, self.tick)


class TokenNotInPool(LiquidityPoolError):
    def __init__(self, token: str) -> None:
        """
        Raised when a swap amount is denominated in a token the pool does not hold.
        """

        self.token = token
        super().__init__(message=f"Token {token} is not held by this pool.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.token,)


class InsufficientInputAmount(LiquidityPoolError):
    def __init__(self) -> None:
        """
        Raised if a swap input amount is too small to produce any output.
        """

        super().__init__(message="The swap input is insufficient to produce any output.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, ()


class IncompleteSwap(LiquidityPoolError):
    """
    Raised if a swap would stop at the price limit before consuming the input or delivering the
    requested output.
    """

    def __init__(self, amount_in: int, amount_out: int) -> None:
        self.amount_in = amount_in
        self.amount_out = amount_out
        super().__init__(message="Insufficient liquidity to swap for the requested amount.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.amount_in, self.amount_out)
