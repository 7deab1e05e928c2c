import enum
import math
from collections.abc import Iterable
from typing import TYPE_CHECKING

import eth_abi.abi
import eth_abi.packed
from eth_typing import ChecksumAddress
from eth_utils.crypto import keccak
from hexbytes import HexBytes

from swaprouter.checksum_cache import get_checksum_address
from swaprouter.exceptions import SwapRouterValueError
from swaprouter.functions import create2_address
from swaprouter.types.aliases import Fee, Tick
from swaprouter.uniswap.v3_libraries.tick_math import MAX_TICK, MIN_TICK

if TYPE_CHECKING:
    from swaprouter.uniswap.route import RouteV3

ADDRESS_BYTES = 20
FEE_BYTES = 3


class FeeAmount(enum.IntEnum):
    """
    Fee tiers supported by the pool factory, in hundredths of a basis point.
    """

    LOWEST = 100
    LOW = 500
    MEDIUM = 3000
    HIGH = 10000


TICK_SPACINGS: dict[Fee, int] = {
    FeeAmount.LOWEST: 1,
    FeeAmount.LOW: 10,
    FeeAmount.MEDIUM: 60,
    FeeAmount.HIGH: 200,
}


def decode_v3_path(path: bytes) -> list[ChecksumAddress | int]:
    """
    Decode the `path` bytes used by the router contracts. `path` is a close-packed encoding of 20
    byte token addresses, interleaved with 3 byte fees.
    """

    if (
        len(path) < ADDRESS_BYTES + FEE_BYTES + ADDRESS_BYTES
        or len(path) % (ADDRESS_BYTES + FEE_BYTES) != ADDRESS_BYTES
    ):
        raise SwapRouterValueError(message="Invalid path.")

    decoded_path: list[ChecksumAddress | int] = []
    offset = 0
    while True:
        decoded_path.append(get_checksum_address(path[offset : offset + ADDRESS_BYTES]))
        offset += ADDRESS_BYTES
        if offset == len(path):
            return decoded_path
        decoded_path.append(int.from_bytes(path[offset : offset + FEE_BYTES], byteorder="big"))
        offset += FEE_BYTES


def encode_v3_path(route: "RouteV3", exact_output: bool) -> HexBytes:
    """
    Pack the token/fee sequence of a route into the `path` bytes consumed by the router.

    Exact output swaps are executed from the final output token backward, so the path is reversed.
    """

    types: list[str] = ["address"]
    values: list[str | int] = [route.token_path[0].address]
    for pool, token in zip(route.pools, route.token_path[1:], strict=True):
        types.extend(("uint24", "address"))
        values.extend((pool.fee, token.address))

    if exact_output:
        types.reverse()
        values.reverse()

    return HexBytes(eth_abi.packed.encode_packed(types, values))


def encode_sqrt_ratio_x96(amount1: int, amount0: int) -> int:
    """
    Get the Q64.96 square root price for a pool holding `amount1` of token1 against `amount0` of
    token0.
    """

    return math.isqrt((amount1 << 192) // amount0)


def nearest_usable_tick(tick: Tick, tick_spacing: int) -> Tick:
    """
    Round a tick to the nearest multiple of the tick spacing that lies within the tick bounds.
    Ties round up.
    """

    if tick_spacing <= 0:
        raise SwapRouterValueError(message="Tick spacing must be positive.")
    if not (MIN_TICK <= tick <= MAX_TICK):
        raise SwapRouterValueError(message=f"Tick {tick} is out of bounds.")

    rounded = (2 * tick + tick_spacing) // (2 * tick_spacing) * tick_spacing
    if rounded < MIN_TICK:
        return rounded + tick_spacing
    if rounded > MAX_TICK:
        return rounded - tick_spacing
    return rounded


def generate_v3_pool_address(
    token_addresses: Iterable[str],
    fee: Fee,
    factory_or_deployer_address: str,
    init_hash: str,
) -> ChecksumAddress:
    """
    Generate the deterministic pool address from the token addresses and fee.

    Adapted from https://github.com/Uniswap/v3-periphery/blob/main/contracts/libraries/PoolAddress.sol
    """

    token_addresses = sorted(address.lower() for address in token_addresses)

    return create2_address(
        deployer=factory_or_deployer_address,
        salt=keccak(
            eth_abi.abi.encode(
                types=("address", "address", "uint24"),
                args=(*token_addresses, fee),
            )
        ),
        init_code_hash=init_hash,
    )
