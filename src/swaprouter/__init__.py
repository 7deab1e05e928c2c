from .checksum_cache import get_checksum_address
from .config import settings
from .version import __version__

# isort: split

from .currency import CurrencyAmount, Erc20Token, NativeCurrency, Percent, Price
from .logging import logger
from .router import (
    FeeOptions,
    LocalAccessTokenIssuer,
    MethodParameters,
    SwapOptions,
    SwapRouter,
    encode_postsign_multicall_extended,
    encode_presign_multicall_extended,
)
from .trade import Trade, TradeType
from .uniswap import RouteV3, TickInfo, UniswapV3Pool

__all__ = (
    "CurrencyAmount",
    "Erc20Token",
    "FeeOptions",
    "LocalAccessTokenIssuer",
    "MethodParameters",
    "NativeCurrency",
    "Percent",
    "Price",
    "RouteV3",
    "SwapOptions",
    "SwapRouter",
    "TickInfo",
    "Trade",
    "TradeType",
    "UniswapV3Pool",
    "__version__",
    "encode_postsign_multicall_extended",
    "encode_presign_multicall_extended",
    "get_checksum_address",
    "logger",
    "settings",
)
