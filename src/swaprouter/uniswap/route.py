import enum
import functools
from collections.abc import Sequence

from swaprouter.currency import Currency, Erc20Token, Price
from swaprouter.exceptions import InvalidRoute
from swaprouter.uniswap.v3_liquidity_pool import UniswapV3Pool


class Protocol(enum.Enum):
    V3 = "V3"


class RouteV3:
    """
    An ordered path of concentrated liquidity pools from an input currency to an output currency.

    Native currencies are accepted as the route endpoints, but the path itself is expressed in
    wrapped tokens since pools only hold tokens.
    """

    protocol = Protocol.V3

    def __init__(
        self,
        pools: Sequence[UniswapV3Pool],
        input: Currency,  # noqa: A002
        output: Currency,
    ) -> None:
        if not pools:
            raise InvalidRoute(message="A route must contain at least one pool.")

        chain_id = pools[0].chain_id
        if any(pool.chain_id != chain_id for pool in pools):
            raise InvalidRoute(message="All pools in a route must be on the same chain.")

        wrapped_input = input.wrapped
        if not pools[0].involves_token(wrapped_input):
            raise InvalidRoute(message=f"The first pool does not hold the input {input}.")
        if not pools[-1].involves_token(output.wrapped):
            raise InvalidRoute(message=f"The last pool does not hold the output {output}.")

        token_path: list[Erc20Token] = [wrapped_input]
        for pool in pools:
            current = token_path[-1]
            if not pool.involves_token(current):
                raise InvalidRoute(message=f"{pool} does not continue the path from {current}.")
            token_path.append(pool.token1 if current == pool.token0 else pool.token0)

        if token_path[-1] != output.wrapped:
            raise InvalidRoute(message=f"The path does not end at the output {output}.")

        self.pools: tuple[UniswapV3Pool, ...] = tuple(pools)
        self.token_path: tuple[Erc20Token, ...] = tuple(token_path)
        self.input = input
        self.output = output

    def __repr__(self) -> str:
        return f"RouteV3({' -> '.join(token.symbol or token.address for token in self.token_path)})"

    @property
    def chain_id(self) -> int:
        return self.pools[0].chain_id

    @functools.cached_property
    def mid_price(self) -> Price:
        """
        The product of each pool's current price along the path, expressed in the route's input and
        output currencies.
        """

        price: Price | None = None
        for pool, token in zip(self.pools, self.token_path, strict=False):
            pool_price = pool.token0_price if token == pool.token0 else pool.token1_price
            price = pool_price if price is None else price.multiply(pool_price)

        assert price is not None
        return Price(self.input, self.output, price.denominator, price.numerator)
