from swaprouter.exceptions.base import SwapRouterError, SwapRouterTypeError, SwapRouterValueError
from swaprouter.exceptions.evm import EVMRevertError, InvalidUint256
from swaprouter.exceptions.liquidity_pool import (
    IncompleteSwap,
    InsufficientInputAmount,
    InvalidPoolState,
    LiquidityPoolError,
    TokenNotInPool,
)
from swaprouter.exceptions.router import (
    InvalidAddress,
    InvalidBytes32,
    NonTokenPermit,
    RouterError,
    UnsupportedTradeShape,
)
from swaprouter.exceptions.trade import (
    CurrencyMismatch,
    DuplicatePools,
    InputCurrencyMismatch,
    InvalidRoute,
    InvalidSlippageTolerance,
    NoRoutesProvided,
    OutputCurrencyMismatch,
    TokenMismatch,
    TradeError,
    TradeTypeMismatch,
)

from . import evm, liquidity_pool, router, trade

__all__ = (
    "CurrencyMismatch",
    "DuplicatePools",
    "EVMRevertError",
    "IncompleteSwap",
    "InputCurrencyMismatch",
    "InsufficientInputAmount",
    "InvalidAddress",
    "InvalidBytes32",
    "InvalidPoolState",
    "InvalidRoute",
    "InvalidSlippageTolerance",
    "InvalidUint256",
    "LiquidityPoolError",
    "NoRoutesProvided",
    "NonTokenPermit",
    "OutputCurrencyMismatch",
    "RouterError",
    "SwapRouterError",
    "SwapRouterTypeError",
    "SwapRouterValueError",
    "TokenMismatch",
    "TokenNotInPool",
    "TradeError",
    "TradeTypeMismatch",
    "UnsupportedTradeShape",
    "evm",
    "liquidity_pool",
    "router",
    "trade",
)
