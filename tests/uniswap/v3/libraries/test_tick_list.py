import pydantic
import pytest

from swaprouter.exceptions import SwapRouterValueError
from swaprouter.uniswap.v3_libraries.tick_list import (
    TickInfo,
    next_initialized_tick,
    next_initialized_tick_within_one_word,
    validate_ticks,
)

TICK_SPACING = 60


def _tick(index: int, liquidity_net: int) -> TickInfo:
    return TickInfo(index=index, liquidity_net=liquidity_net, liquidity_gross=abs(liquidity_net))


TICKS = (_tick(-120, 10), _tick(0, -5), _tick(120, -5))


def test_validate_ticks():
    validate_ticks(TICKS, TICK_SPACING)
    validate_ticks((), TICK_SPACING)


@pytest.mark.parametrize(
    "ticks",
    [
        pytest.param((_tick(-61, 10), _tick(60, -10)), id="not a multiple of the spacing"),
        pytest.param((_tick(60, -10), _tick(-60, 10)), id="unsorted"),
        pytest.param((_tick(-60, 10), _tick(-60, -10)), id="duplicate"),
        pytest.param((_tick(-60, 10), _tick(60, -5)), id="net liquidity not zero"),
    ],
)
def test_validate_ticks_rejects(ticks):
    with pytest.raises(SwapRouterValueError):
        validate_ticks(ticks, TICK_SPACING)


@pytest.mark.parametrize(
    "fields",
    [
        {"index": 2**23, "liquidity_net": 0, "liquidity_gross": 0},
        {"index": 0, "liquidity_net": 2**127, "liquidity_gross": 0},
        {"index": 0, "liquidity_net": 0, "liquidity_gross": -1},
    ],
)
def test_tick_info_validation(fields):
    with pytest.raises(pydantic.ValidationError):
        TickInfo(**fields)


class TestNextInitializedTick:
    @pytest.mark.parametrize(
        ("tick", "expected"),
        [(-120, -120), (-61, -120), (0, 0), (119, 0), (120, 120), (5000, 120)],
    )
    def test_at_or_below(self, tick, expected):
        assert next_initialized_tick(TICKS, tick, less_than_or_equal=True) == expected

    @pytest.mark.parametrize(
        ("tick", "expected"),
        [(-5000, -120), (-121, -120), (-120, 0), (0, 120), (119, 120)],
    )
    def test_above(self, tick, expected):
        assert next_initialized_tick(TICKS, tick, less_than_or_equal=False) == expected

    def test_no_tick_below(self):
        with pytest.raises(SwapRouterValueError):
            next_initialized_tick(TICKS, -121, less_than_or_equal=True)

    def test_no_tick_above(self):
        with pytest.raises(SwapRouterValueError):
            next_initialized_tick(TICKS, 120, less_than_or_equal=False)


class TestNextInitializedTickWithinOneWord:
    @pytest.mark.parametrize(
        ("tick", "expected"),
        [
            (119, (0, True)),
            (0, (0, True)),
            (-1, (-120, True)),
            # Below the lowest initialized tick, the search stops at the start of the word
            (-121, (-256 * TICK_SPACING, False)),
        ],
    )
    def test_at_or_below(self, tick, expected):
        assert (
            next_initialized_tick_within_one_word(
                TICKS, tick, less_than_or_equal=True, tick_spacing=TICK_SPACING
            )
            == expected
        )

    @pytest.mark.parametrize(
        ("tick", "expected"),
        [
            (-121, (-120, True)),
            (0, (120, True)),
            (60, (120, True)),
            # At or above the highest initialized tick, the search stops at the end of the word
            (120, (255 * TICK_SPACING, False)),
        ],
    )
    def test_above(self, tick, expected):
        assert (
            next_initialized_tick_within_one_word(
                TICKS, tick, less_than_or_equal=False, tick_spacing=TICK_SPACING
            )
            == expected
        )

    def test_stops_at_word_boundary(self):
        ticks = (_tick(-267 * TICK_SPACING, 10), _tick(267 * TICK_SPACING, -10))

        assert next_initialized_tick_within_one_word(
            ticks, -1, less_than_or_equal=True, tick_spacing=TICK_SPACING
        ) == (-256 * TICK_SPACING, False)
        assert next_initialized_tick_within_one_word(
            ticks, 0, less_than_or_equal=False, tick_spacing=TICK_SPACING
        ) == (255 * TICK_SPACING, False)

    def test_empty_tick_list(self):
        assert next_initialized_tick_within_one_word(
            (), 0, less_than_or_equal=True, tick_spacing=TICK_SPACING
        ) == (0, False)
        assert next_initialized_tick_within_one_word(
            (), 0, less_than_or_equal=False, tick_spacing=TICK_SPACING
        ) == (255 * TICK_SPACING, False)
