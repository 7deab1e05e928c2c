import bisect
from collections.abc import Sequence

import pydantic

from swaprouter.exceptions import SwapRouterValueError
from swaprouter.types.aliases import Tick
from swaprouter.validation.evm_values import ValidatedInt24, ValidatedInt128, ValidatedUint128

"""
Lookup of initialized ticks held in a sorted in-memory list.

The pool contracts store initialized ticks in a bitmap split into 256-tick words. The search below
reproduces the word-bounded `nextInitializedTickWithinOneWord` behavior over a sorted list, so a
swap loop sees the same sequence of step targets it would see on-chain.
"""


class TickInfo(pydantic.BaseModel, frozen=True):
    index: ValidatedInt24
    liquidity_net: ValidatedInt128
    liquidity_gross: ValidatedUint128


def validate_ticks(ticks: Sequence[TickInfo], tick_spacing: int) -> None:
    if any(tick.index % tick_spacing != 0 for tick in ticks):
        raise SwapRouterValueError(message="Every tick must be a multiple of the tick spacing.")
    if any(a.index >= b.index for a, b in zip(ticks, ticks[1:], strict=False)):
        raise SwapRouterValueError(message="Ticks must be sorted and unique.")
    if sum(tick.liquidity_net for tick in ticks) != 0:
        raise SwapRouterValueError(message="The net liquidity of all ticks must be zero.")


def next_initialized_tick(ticks: Sequence[TickInfo], tick: Tick, less_than_or_equal: bool) -> Tick:
    """
    Find the nearest initialized tick at or below `tick` (less_than_or_equal=True), or strictly
    above it.
    """

    indexes = [t.index for t in ticks]
    if less_than_or_equal:
        position = bisect.bisect_right(indexes, tick)
        if position == 0:
            raise SwapRouterValueError(message=f"No initialized tick at or below {tick}.")
        return indexes[position - 1]

    position = bisect.bisect_right(indexes, tick)
    if position == len(indexes):
        raise SwapRouterValueError(message=f"No initialized tick above {tick}.")
    return indexes[position]


def next_initialized_tick_within_one_word(
    ticks: Sequence[TickInfo],
    tick: Tick,
    less_than_or_equal: bool,
    tick_spacing: int,
) -> tuple[Tick, bool]:
    """
    Return the next tick to step to and whether it is initialized, never leaving the bitmap word
    that holds the current (compressed) tick.
    """

    compressed = tick // tick_spacing

    if less_than_or_equal:
        word_start = ((compressed >> 8) << 8) * tick_spacing
        if not ticks or tick < ticks[0].index:
            return word_start, False
        index = next_initialized_tick(ticks, tick, less_than_or_equal)
        next_tick = max(word_start, index)
        return next_tick, next_tick == index

    word_end = (((((compressed + 1) >> 8) + 1) << 8) - 1) * tick_spacing
    if not ticks or tick >= ticks[-1].index:
        return word_end, False
    index = next_initialized_tick(ticks, tick, less_than_or_equal)
    next_tick = min(word_end, index)
    return next_tick, next_tick == index
