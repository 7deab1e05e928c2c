import enum
import functools
import math
from collections.abc import Sequence
from dataclasses import dataclass
from fractions import Fraction
from typing import Self

from swaprouter.currency import Currency, CurrencyAmount, Percent, Price, currency_equals
from swaprouter.exceptions import (
    DuplicatePools,
    InputCurrencyMismatch,
    InvalidSlippageTolerance,
    NoRoutesProvided,
    OutputCurrencyMismatch,
)
from swaprouter.logging import logger
from swaprouter.uniswap.route import RouteV3


class TradeType(enum.Enum):
    EXACT_INPUT = 0
    EXACT_OUTPUT = 1


@dataclass(slots=True, frozen=True)
class Swap:
    """
    The realized exchange along one route of a trade.
    """

    route: RouteV3
    input_amount: CurrencyAmount
    output_amount: CurrencyAmount


def _validate_slippage_tolerance(slippage_tolerance: Percent) -> None:
    if slippage_tolerance.less_than(0):
        raise InvalidSlippageTolerance(slippage_tolerance=slippage_tolerance)


class Trade:
    """
    One or more swaps sharing an input currency, an output currency and a trade type, treated as a
    single logical trade.

    Trades are immutable. Aggregate amounts and prices are computed once on first access.
    """

    def __init__(
        self,
        routes: Sequence[tuple[RouteV3, CurrencyAmount, CurrencyAmount]],
        trade_type: TradeType,
    ) -> None:
        if not routes:
            raise NoRoutesProvided

        swaps = tuple(
            Swap(route=route, input_amount=input_amount, output_amount=output_amount)
            for route, input_amount, output_amount in routes
        )

        input_currency = swaps[0].input_amount.currency
        output_currency = swaps[0].output_amount.currency
        if any(swap.route.input.wrapped != input_currency.wrapped for swap in swaps):
            raise InputCurrencyMismatch
        if any(swap.route.output.wrapped != output_currency.wrapped for swap in swaps):
            raise OutputCurrencyMismatch

        pools = [pool for swap in swaps for pool in swap.route.pools]
        if len(pools) != len({pool.address for pool in pools}):
            raise DuplicatePools

        self.swaps: tuple[Swap, ...] = swaps
        self.trade_type = trade_type

    def __repr__(self) -> str:
        return f"Trade({self.trade_type.name}, swaps={len(self.swaps)})"

    @classmethod
    def create_unchecked_trade(
        cls,
        route: RouteV3,
        input_amount: CurrencyAmount,
        output_amount: CurrencyAmount,
        trade_type: TradeType,
    ) -> Self:
        """
        Build a single-swap trade from amounts that are already known, without quoting the route.
        """

        return cls(routes=[(route, input_amount, output_amount)], trade_type=trade_type)

    @staticmethod
    async def _quote_route(
        route: RouteV3,
        amount: CurrencyAmount,
        trade_type: TradeType,
    ) -> tuple[RouteV3, CurrencyAmount, CurrencyAmount]:
        """
        Walk the route forward from an exact input, or backward from an exact output, returning the
        route with its input and output amounts.
        """

        token_amount = amount.wrapped
        match trade_type:
            case TradeType.EXACT_INPUT:
                if not currency_equals(amount.currency, route.input):
                    raise InputCurrencyMismatch
                for pool in route.pools:
                    token_amount, _ = await pool.get_output_amount(token_amount)
                return (
                    route,
                    CurrencyAmount(route.input, amount.fraction),
                    CurrencyAmount(route.output, token_amount.fraction),
                )
            case TradeType.EXACT_OUTPUT:
                if not currency_equals(amount.currency, route.output):
                    raise OutputCurrencyMismatch
                for pool in reversed(route.pools):
                    token_amount, _ = await pool.get_input_amount(token_amount)
                return (
                    route,
                    CurrencyAmount(route.input, token_amount.fraction),
                    CurrencyAmount(route.output, amount.fraction),
                )

    @classmethod
    async def from_route(
        cls,
        route: RouteV3,
        amount: CurrencyAmount,
        trade_type: TradeType,
    ) -> Self:
        """
        Build a trade along a single route. The amount is the exact input (EXACT_INPUT) or the exact
        output (EXACT_OUTPUT), and the other side is quoted from the route's pools.
        """

        return cls(routes=[await cls._quote_route(route, amount, trade_type)], trade_type=trade_type)

    @classmethod
    async def from_routes(
        cls,
        routes: Sequence[tuple[RouteV3, CurrencyAmount]],
        trade_type: TradeType,
    ) -> Self:
        """
        Build a trade split across several routes. Routes are quoted one at a time in the given
        order, which is also the order of the resulting swaps.
        """

        quoted = []
        for route, amount in routes:
            quoted.append(await cls._quote_route(route, amount, trade_type))
            logger.debug(f"Quoted {route}: {quoted[-1][1].quotient} -> {quoted[-1][2].quotient}")
        return cls(routes=quoted, trade_type=trade_type)

    @property
    def routes(self) -> list[RouteV3]:
        return [swap.route for swap in self.swaps]

    @property
    def input_currency(self) -> Currency:
        return self.swaps[0].input_amount.currency

    @property
    def output_currency(self) -> Currency:
        return self.swaps[0].output_amount.currency

    @functools.cached_property
    def input_amount(self) -> CurrencyAmount:
        total = CurrencyAmount.from_raw_amount(self.input_currency, 0)
        for swap in self.swaps:
            total = total.add(swap.input_amount)
        return total

    @functools.cached_property
    def output_amount(self) -> CurrencyAmount:
        total = CurrencyAmount.from_raw_amount(self.output_currency, 0)
        for swap in self.swaps:
            total = total.add(swap.output_amount)
        return total

    @functools.cached_property
    def execution_price(self) -> Price:
        """
        The price expressed as the ratio of the output amount to the input amount.
        """

        return Price(
            self.input_amount.currency,
            self.output_amount.currency,
            self.input_amount.quotient,
            self.output_amount.quotient,
        )

    @functools.cached_property
    def price_impact(self) -> Percent:
        """
        The fractional shortfall of the output against the output the current pool prices imply for
        the same input.
        """

        spot_output = Fraction(0)
        for swap in self.swaps:
            spot_output += swap.route.mid_price.quote(swap.input_amount).fraction
        return Percent((spot_output - self.output_amount.fraction) / spot_output)

    def minimum_amount_out(
        self,
        slippage_tolerance: Percent,
        amount_out: CurrencyAmount | None = None,
    ) -> CurrencyAmount:
        """
        Get the minimum amount that must be received from this trade for the given slippage
        tolerance. An exact output is returned unchanged.
        """

        _validate_slippage_tolerance(slippage_tolerance)
        if amount_out is None:
            amount_out = self.output_amount

        if self.trade_type is TradeType.EXACT_OUTPUT:
            return amount_out

        return CurrencyAmount.from_raw_amount(
            amount_out.currency,
            math.floor(amount_out.quotient / (1 + slippage_tolerance.fraction)),
        )

    def maximum_amount_in(
        self,
        slippage_tolerance: Percent,
        amount_in: CurrencyAmount | None = None,
    ) -> CurrencyAmount:
        """
        Get the maximum amount in that can be spent via this trade for the given slippage tolerance.
        An exact input is returned unchanged.
        """

        _validate_slippage_tolerance(slippage_tolerance)
        if amount_in is None:
            amount_in = self.input_amount

        if self.trade_type is TradeType.EXACT_INPUT:
            return amount_in

        return CurrencyAmount.from_raw_amount(
            amount_in.currency,
            math.ceil(amount_in.quotient * (1 + slippage_tolerance.fraction)),
        )

    def worst_execution_price(self, slippage_tolerance: Percent) -> Price:
        """
        Return the execution price after accounting for slippage tolerance.
        """

        return Price(
            self.input_amount.currency,
            self.output_amount.currency,
            self.maximum_amount_in(slippage_tolerance).quotient,
            self.minimum_amount_out(slippage_tolerance).quotient,
        )
