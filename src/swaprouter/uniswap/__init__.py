from swaprouter.uniswap.route import Protocol, RouteV3
from swaprouter.uniswap.v3_functions import (
    TICK_SPACINGS,
    FeeAmount,
    decode_v3_path,
    encode_sqrt_ratio_x96,
    encode_v3_path,
    generate_v3_pool_address,
    nearest_usable_tick,
)
from swaprouter.uniswap.v3_libraries.tick_list import TickInfo
from swaprouter.uniswap.v3_liquidity_pool import UniswapV3Pool

__all__ = (
    "TICK_SPACINGS",
    "FeeAmount",
    "Protocol",
    "RouteV3",
    "TickInfo",
    "UniswapV3Pool",
    "decode_v3_path",
    "encode_sqrt_ratio_x96",
    "encode_v3_path",
    "generate_v3_pool_address",
    "nearest_usable_tick",
)
