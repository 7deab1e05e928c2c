import dataclasses
from collections.abc import Iterable

from eth_typing import ChecksumAddress

from swaprouter.config import settings
from swaprouter.currency import CurrencyAmount, Erc20Token, Price
from swaprouter.exceptions import (
    EVMRevertError,
    IncompleteSwap,
    InsufficientInputAmount,
    InvalidPoolState,
    SwapRouterValueError,
    TokenNotInPool,
)
from swaprouter.logging import logger
from swaprouter.types.aliases import ChainId, Fee, Liquidity, Tick
from swaprouter.uniswap.v3_functions import TICK_SPACINGS, generate_v3_pool_address
from swaprouter.uniswap.v3_libraries.liquidity_math import add_delta
from swaprouter.uniswap.v3_libraries.swap_math import compute_swap_step
from swaprouter.uniswap.v3_libraries.tick_list import (
    TickInfo,
    next_initialized_tick_within_one_word,
    validate_ticks,
)
from swaprouter.uniswap.v3_libraries.tick_math import (
    MAX_SQRT_RATIO,
    MAX_TICK,
    MIN_SQRT_RATIO,
    MIN_TICK,
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
)

Q192 = 2**192


@dataclasses.dataclass(slots=True, eq=False)
class SwapState:
    amount_specified_remaining: int
    amount_calculated: int
    sqrt_price_x96: int
    tick: Tick
    liquidity: Liquidity


@dataclasses.dataclass(slots=True, eq=False)
class StepComputations:
    sqrt_price_start_x96: int = 0
    sqrt_price_next_x96: int = 0
    tick_next: Tick = 0
    initialized: bool = False
    amount_in: int = 0
    amount_out: int = 0
    fee_amount: int = 0


class UniswapV3Pool:
    """
    An in-memory concentrated liquidity pool, used to quote swaps along a route.

    The state (price, in-range liquidity, current tick, and initialized ticks) is supplied by the
    caller and never mutated. Quoting a swap returns the amount together with a new pool holding
    the post-swap state.
    """

    def __init__(
        self,
        token_a: Erc20Token,
        token_b: Erc20Token,
        fee: Fee,
        sqrt_price_x96: int,
        liquidity: Liquidity,
        tick: Tick | None = None,
        ticks: Iterable[TickInfo] = (),
    ) -> None:
        if fee not in TICK_SPACINGS:
            raise SwapRouterValueError(message=f"Unsupported fee {fee}")

        self.token0, self.token1 = (
            (token_a, token_b) if token_a.sorts_before(token_b) else (token_b, token_a)
        )
        self.fee = fee
        self.tick_spacing = TICK_SPACINGS[fee]
        self.sqrt_price_x96 = sqrt_price_x96
        self.liquidity = liquidity
        self.tick = get_tick_at_sqrt_ratio(sqrt_price_x96) if tick is None else tick

        if not (
            get_sqrt_ratio_at_tick(self.tick)
            <= sqrt_price_x96
            <= get_sqrt_ratio_at_tick(self.tick + 1)
        ):
            raise InvalidPoolState(sqrt_price_x96=sqrt_price_x96, tick=self.tick)

        self.ticks = tuple(sorted(ticks, key=lambda tick_info: tick_info.index))
        validate_ticks(self.ticks, self.tick_spacing)
        self._liquidity_net: dict[Tick, int] = {t.index: t.liquidity_net for t in self.ticks}

        deployment = settings.pool_deployment(self.chain_id)
        self.address: ChecksumAddress = generate_v3_pool_address(
            token_addresses=(self.token0.address, self.token1.address),
            fee=fee,
            factory_or_deployer_address=deployment.factory,
            init_hash=deployment.init_code_hash,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UniswapV3Pool):
            return NotImplemented
        return self.address == other.address

    def __hash__(self) -> int:
        return hash(self.address)

    def __repr__(self) -> str:
        return (
            f"UniswapV3Pool(address={self.address}, "
            f"token0={self.token0.symbol}, token1={self.token1.symbol}, fee={self.fee})"
        )

    @property
    def chain_id(self) -> ChainId:
        return self.token0.chain_id

    @property
    def token0_price(self) -> Price:
        """
        The current mid price of the pool in terms of token0, i.e. the ratio of token1 over token0.
        """

        return Price(self.token0, self.token1, Q192, self.sqrt_price_x96**2)

    @property
    def token1_price(self) -> Price:
        """
        The current mid price of the pool in terms of token1, i.e. the ratio of token0 over token1.
        """

        return Price(self.token1, self.token0, self.sqrt_price_x96**2, Q192)

    def involves_token(self, token: Erc20Token) -> bool:
        return token in (self.token0, self.token1)

    def price_of(self, token: Erc20Token) -> Price:
        if token == self.token0:
            return self.token0_price
        if token == self.token1:
            return self.token1_price
        raise TokenNotInPool(token=str(token))

    def _with_state(self, sqrt_price_x96: int, liquidity: Liquidity, tick: Tick) -> "UniswapV3Pool":
        return UniswapV3Pool(
            token_a=self.token0,
            token_b=self.token1,
            fee=self.fee,
            sqrt_price_x96=sqrt_price_x96,
            liquidity=liquidity,
            tick=tick,
            ticks=self.ticks,
        )

    def _calculate_swap(
        self,
        *,
        zero_for_one: bool,
        amount_specified: int,
        sqrt_price_limit_x96: int | None = None,
    ) -> tuple[int, int, int, Liquidity, Tick]:
        """
        Simulate a swap against the current state.

        Returns a tuple (amount_specified_used, amount_calculated, sqrt_price_x96, liquidity, tick).
        A positive `amount_specified` is an exact input, a negative one is an exact output. The
        calculated amount is negative for tokens sent to the swapper and positive for tokens
        deposited.

        ref: https://github.com/Uniswap/v3-core/blob/main/contracts/UniswapV3Pool.sol
        """

        if amount_specified == 0:
            raise EVMRevertError(error="AS")

        if sqrt_price_limit_x96 is None:
            sqrt_price_limit_x96 = MIN_SQRT_RATIO + 1 if zero_for_one else MAX_SQRT_RATIO - 1

        if zero_for_one and not (MIN_SQRT_RATIO < sqrt_price_limit_x96 < self.sqrt_price_x96):
            raise EVMRevertError(error="SPL")
        if not zero_for_one and not (self.sqrt_price_x96 < sqrt_price_limit_x96 < MAX_SQRT_RATIO):
            raise EVMRevertError(error="SPL")

        exact_input = amount_specified > 0
        state = SwapState(
            amount_specified_remaining=amount_specified,
            amount_calculated=0,
            sqrt_price_x96=self.sqrt_price_x96,
            tick=self.tick,
            liquidity=self.liquidity,
        )

        while (
            state.amount_specified_remaining != 0 and state.sqrt_price_x96 != sqrt_price_limit_x96
        ):
            step = StepComputations(sqrt_price_start_x96=state.sqrt_price_x96)
            step.tick_next, step.initialized = next_initialized_tick_within_one_word(
                ticks=self.ticks,
                tick=state.tick,
                less_than_or_equal=zero_for_one,
                tick_spacing=self.tick_spacing,
            )

            # The tick list is not aware of the global tick bounds
            step.tick_next = (
                max(MIN_TICK, step.tick_next) if zero_for_one else min(MAX_TICK, step.tick_next)
            )
            step.sqrt_price_next_x96 = get_sqrt_ratio_at_tick(step.tick_next)

            target_beyond_limit = (
                step.sqrt_price_next_x96 < sqrt_price_limit_x96
                if zero_for_one
                else step.sqrt_price_next_x96 > sqrt_price_limit_x96
            )
            state.sqrt_price_x96, step.amount_in, step.amount_out, step.fee_amount = (
                compute_swap_step(
                    sqrt_ratio_x96_current=state.sqrt_price_x96,
                    sqrt_ratio_x96_target=(
                        sqrt_price_limit_x96 if target_beyond_limit else step.sqrt_price_next_x96
                    ),
                    liquidity=state.liquidity,
                    amount_remaining=state.amount_specified_remaining,
                    fee_pips=self.fee,
                )
            )

            if exact_input:
                state.amount_specified_remaining -= step.amount_in + step.fee_amount
                state.amount_calculated -= step.amount_out
            else:
                state.amount_specified_remaining += step.amount_out
                state.amount_calculated += step.amount_in + step.fee_amount

            if state.sqrt_price_x96 == step.sqrt_price_next_x96:
                # Crossing an initialized tick changes the in-range liquidity
                if step.initialized:
                    liquidity_net = self._liquidity_net[step.tick_next]
                    state.liquidity = add_delta(
                        state.liquidity, -liquidity_net if zero_for_one else liquidity_net
                    )
                state.tick = step.tick_next - 1 if zero_for_one else step.tick_next
            elif state.sqrt_price_x96 != step.sqrt_price_start_x96:
                state.tick = get_tick_at_sqrt_ratio(state.sqrt_price_x96)

        return (
            amount_specified - state.amount_specified_remaining,
            state.amount_calculated,
            state.sqrt_price_x96,
            state.liquidity,
            state.tick,
        )

    async def get_output_amount(
        self,
        input_amount: CurrencyAmount,
        sqrt_price_limit_x96: int | None = None,
    ) -> tuple[CurrencyAmount, "UniswapV3Pool"]:
        """
        Quote the output of swapping an exact input amount, returning the output amount and the
        pool state after the swap.
        """

        if not self.involves_token(input_amount.currency):
            raise TokenNotInPool(token=str(input_amount.currency))

        zero_for_one = input_amount.currency == self.token0
        amount_in_used, amount_calculated, sqrt_price_x96, liquidity, tick = self._calculate_swap(
            zero_for_one=zero_for_one,
            amount_specified=input_amount.quotient,
            sqrt_price_limit_x96=sqrt_price_limit_x96,
        )
        if amount_in_used != input_amount.quotient:
            raise IncompleteSwap(amount_in=amount_in_used, amount_out=-amount_calculated)

        output_amount = CurrencyAmount.from_raw_amount(
            self.token1 if zero_for_one else self.token0,
            -amount_calculated,
        )
        if output_amount.quotient == 0:
            raise InsufficientInputAmount

        logger.debug(f"{self}: {input_amount.quotient} in -> {output_amount.quotient} out")
        return output_amount, self._with_state(sqrt_price_x96, liquidity, tick)

    async def get_input_amount(
        self,
        output_amount: CurrencyAmount,
        sqrt_price_limit_x96: int | None = None,
    ) -> tuple[CurrencyAmount, "UniswapV3Pool"]:
        """
        Quote the input required to receive an exact output amount, returning the input amount and
        the pool state after the swap.
        """

        if not self.involves_token(output_amount.currency):
            raise TokenNotInPool(token=str(output_amount.currency))

        zero_for_one = output_amount.currency == self.token1
        amount_out_used, amount_calculated, sqrt_price_x96, liquidity, tick = self._calculate_swap(
            zero_for_one=zero_for_one,
            amount_specified=-output_amount.quotient,
            sqrt_price_limit_x96=sqrt_price_limit_x96,
        )
        if -amount_out_used != output_amount.quotient:
            raise IncompleteSwap(amount_in=amount_calculated, amount_out=-amount_out_used)

        input_amount = CurrencyAmount.from_raw_amount(
            self.token0 if zero_for_one else self.token1,
            amount_calculated,
        )

        logger.debug(f"{self}: {input_amount.quotient} in -> {output_amount.quotient} out")
        return input_amount, self._with_state(sqrt_price_x96, liquidity, tick)
