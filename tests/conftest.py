import logging
import math
from collections.abc import Callable

import pytest

from swaprouter.currency import CurrencyAmount, Erc20Token, NativeCurrency
from swaprouter.logging import logger
from swaprouter.uniswap import UniswapV3Pool
from swaprouter.uniswap.v3_functions import (
    TICK_SPACINGS,
    FeeAmount,
    encode_sqrt_ratio_x96,
    nearest_usable_tick,
)
from swaprouter.uniswap.v3_libraries.tick_list import TickInfo
from swaprouter.uniswap.v3_libraries.tick_math import MAX_TICK, MIN_TICK

WETH_ADDRESS = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"


@pytest.fixture(scope="session", autouse=True)
def _set_swaprouter_logging():
    """
    Set the logging level to DEBUG for the test run
    """
    logger.setLevel(logging.DEBUG)


@pytest.fixture
def ether() -> NativeCurrency:
    return NativeCurrency.on_chain(1)


@pytest.fixture
def weth() -> Erc20Token:
    return Erc20Token(chain_id=1, address=WETH_ADDRESS, symbol="WETH", name="Wrapped Ether")


@pytest.fixture
def token0() -> Erc20Token:
    return Erc20Token(
        chain_id=1,
        address="0x0000000000000000000000000000000000000001",
        symbol="t0",
        name="token0",
    )


@pytest.fixture
def token1() -> Erc20Token:
    return Erc20Token(
        chain_id=1,
        address="0x0000000000000000000000000000000000000002",
        symbol="t1",
        name="token1",
    )


@pytest.fixture
def token2() -> Erc20Token:
    return Erc20Token(
        chain_id=1,
        address="0x0000000000000000000000000000000000000003",
        symbol="t2",
        name="token2",
    )


def _full_range_ticks(liquidity: int, fee: int) -> list[TickInfo]:
    tick_spacing = TICK_SPACINGS[fee]
    return [
        TickInfo(
            index=nearest_usable_tick(MIN_TICK, tick_spacing),
            liquidity_net=liquidity,
            liquidity_gross=liquidity,
        ),
        TickInfo(
            index=nearest_usable_tick(MAX_TICK, tick_spacing),
            liquidity_net=-liquidity,
            liquidity_gross=liquidity,
        ),
    ]


@pytest.fixture
def make_pool() -> Callable[..., UniswapV3Pool]:
    """
    Build a pool at a 1:1 price with full range liquidity.
    """

    def _make_pool(
        token_a: Erc20Token,
        token_b: Erc20Token,
        liquidity: int = 1_000_000,
        fee: int = FeeAmount.MEDIUM,
    ) -> UniswapV3Pool:
        return UniswapV3Pool(
            token_a=token_a,
            token_b=token_b,
            fee=fee,
            sqrt_price_x96=encode_sqrt_ratio_x96(1, 1),
            liquidity=liquidity,
            tick=0,
            ticks=_full_range_ticks(liquidity, fee),
        )

    return _make_pool


@pytest.fixture
def v2_style_pool() -> Callable[..., UniswapV3Pool]:
    """
    Build a full range pool with the price and liquidity of a constant product pool holding the
    given reserves.
    """

    def _v2_style_pool(
        reserve0: CurrencyAmount,
        reserve1: CurrencyAmount,
        fee: int = FeeAmount.MEDIUM,
    ) -> UniswapV3Pool:
        liquidity = math.isqrt(reserve0.quotient * reserve1.quotient)
        return UniswapV3Pool(
            token_a=reserve0.currency,
            token_b=reserve1.currency,
            fee=fee,
            sqrt_price_x96=encode_sqrt_ratio_x96(reserve1.quotient, reserve0.quotient),
            liquidity=liquidity,
            ticks=_full_range_ticks(liquidity, fee),
        )

    return _v2_style_pool
