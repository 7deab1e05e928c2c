from decimal import Decimal, localcontext

import pytest

from swaprouter.constants import MAX_UINT128, MAX_UINT256
from swaprouter.exceptions import EVMRevertError
from swaprouter.uniswap.v3_libraries.sqrt_price_math import (
    get_amount0_delta,
    get_amount1_delta,
    get_next_sqrt_price_from_input,
    get_next_sqrt_price_from_output,
)

# Adapted from Typescript tests on Uniswap V3 Github repo
# ref: https://github.com/Uniswap/v3-core/blob/main/test/SqrtPriceMath.spec.ts

PRICE_256 = 20282409603651670423947251286016  # 256 * 2**96


def expand_to_18_decimals(x: int) -> int:
    return x * 10**18


def encode_price_sqrt(reserve1: int, reserve0: int) -> int:
    """
    Returns the sqrt price as a Q64.96 value
    """

    # Match the decimal places and BigNumber rounding mode "3" (ROUND_FLOOR) used by the Uniswap
    # test utilities
    with localcontext(prec=40, rounding="ROUND_FLOOR"):
        return int((Decimal(reserve1) / Decimal(reserve0)).sqrt() * Decimal(2**96))


class TestGetNextSqrtPriceFromInput:
    def test_zero_price(self):
        with pytest.raises(EVMRevertError, match="sqrt_price_x96 > 0"):
            get_next_sqrt_price_from_input(0, 1, expand_to_18_decimals(1) // 10, False)

    def test_zero_liquidity(self):
        with pytest.raises(EVMRevertError, match="liquidity > 0"):
            get_next_sqrt_price_from_input(1, 0, expand_to_18_decimals(1) // 10, True)

    def test_input_overflows_price(self):
        with pytest.raises(EVMRevertError):
            get_next_sqrt_price_from_input(2**160 - 1, 1024, 1024, False)

    def test_input_cannot_underflow_price(self):
        assert get_next_sqrt_price_from_input(1, 1, 2**255, True) == 1

    @pytest.mark.parametrize("zero_for_one", [True, False])
    def test_zero_input_returns_price(self, zero_for_one):
        price = encode_price_sqrt(1, 1)
        assert (
            get_next_sqrt_price_from_input(
                price, expand_to_18_decimals(1) // 10, 0, zero_for_one
            )
            == price
        )

    def test_minimum_price_for_max_inputs(self):
        sqrt_p = 2**160 - 1
        max_amount_no_overflow = MAX_UINT256 - ((MAX_UINT128 << 96) // sqrt_p)
        assert get_next_sqrt_price_from_input(sqrt_p, MAX_UINT128, max_amount_no_overflow, True) == 1

    @pytest.mark.parametrize(
        ("zero_for_one", "sqrt_q"),
        [
            (False, 87150978765690771352898345369),
            (True, 72025602285694852357767227579),
        ],
    )
    def test_input_of_one_tenth(self, zero_for_one, sqrt_q):
        assert (
            get_next_sqrt_price_from_input(
                encode_price_sqrt(1, 1),
                expand_to_18_decimals(1),
                expand_to_18_decimals(1) // 10,
                zero_for_one,
            )
            == sqrt_q
        )

    def test_input_above_uint96(self):
        assert (
            get_next_sqrt_price_from_input(
                encode_price_sqrt(1, 1), expand_to_18_decimals(10), 2**100, True
            )
            == 624999999995069620
        )

    def test_large_input_returns_one(self):
        assert (
            get_next_sqrt_price_from_input(encode_price_sqrt(1, 1), 1, MAX_UINT256 // 2, True) == 1
        )


class TestGetNextSqrtPriceFromOutput:
    def test_zero_price(self):
        with pytest.raises(EVMRevertError, match="sqrt_price_x96 > 0"):
            get_next_sqrt_price_from_output(0, 1, expand_to_18_decimals(1) // 10, False)

    def test_zero_liquidity(self):
        with pytest.raises(EVMRevertError, match="liquidity > 0"):
            get_next_sqrt_price_from_output(1, 0, expand_to_18_decimals(1) // 10, True)

    @pytest.mark.parametrize(
        ("amount_out", "zero_for_one"),
        [
            # virtual reserves of token0 are exactly 4
            (4, False),
            (5, False),
            # virtual reserves of token1 are exactly 262144
            (262144, True),
            (262145, True),
        ],
    )
    def test_output_exceeds_reserves(self, amount_out, zero_for_one):
        with pytest.raises(EVMRevertError):
            get_next_sqrt_price_from_output(PRICE_256, 1024, amount_out, zero_for_one)

    def test_output_just_below_reserves(self):
        assert get_next_sqrt_price_from_output(PRICE_256, 1024, 262143, True) == (
            77371252455336267181195264
        )

    @pytest.mark.parametrize("zero_for_one", [True, False])
    def test_zero_output_returns_price(self, zero_for_one):
        price = encode_price_sqrt(1, 1)
        assert (
            get_next_sqrt_price_from_output(
                price, expand_to_18_decimals(1) // 10, 0, zero_for_one
            )
            == price
        )

    @pytest.mark.parametrize(
        ("zero_for_one", "sqrt_q"),
        [
            (False, 88031291682515930659493278152),
            (True, 71305346262837903834189555302),
        ],
    )
    def test_output_of_one_tenth(self, zero_for_one, sqrt_q):
        assert (
            get_next_sqrt_price_from_output(
                encode_price_sqrt(1, 1),
                expand_to_18_decimals(1),
                expand_to_18_decimals(1) // 10,
                zero_for_one,
            )
            == sqrt_q
        )

    @pytest.mark.parametrize("zero_for_one", [True, False])
    def test_impossible_output(self, zero_for_one):
        with pytest.raises(EVMRevertError):
            get_next_sqrt_price_from_output(encode_price_sqrt(1, 1), 1, MAX_UINT256, zero_for_one)


@pytest.mark.parametrize("func", [get_amount0_delta, get_amount1_delta])
def test_amount_delta_zero_liquidity(func):
    assert func(encode_price_sqrt(1, 1), encode_price_sqrt(2, 1), 0, True) == 0
    assert func(encode_price_sqrt(1, 1), encode_price_sqrt(1, 1), 0, True) == 0


def test_get_amount0_delta():
    args = (encode_price_sqrt(1, 1), encode_price_sqrt(121, 100), expand_to_18_decimals(1))
    assert get_amount0_delta(*args, True) == 90909090909090910
    assert get_amount0_delta(*args, False) == 90909090909090909

    # The price order does not matter
    assert get_amount0_delta(args[1], args[0], args[2], True) == 90909090909090910

    # Works for prices that overflow
    args = (encode_price_sqrt(2**90, 1), encode_price_sqrt(2**96, 1), expand_to_18_decimals(1))
    assert get_amount0_delta(*args, True) == get_amount0_delta(*args, False) + 1


def test_get_amount1_delta():
    args = (encode_price_sqrt(1, 1), encode_price_sqrt(121, 100), expand_to_18_decimals(1))
    # 0.1 token1 for a price move from 1 to 1.21
    assert get_amount1_delta(*args, True) == 100000000000000000
    assert get_amount1_delta(*args, False) == 99999999999999999


def test_swap_computation():
    sqrt_p = 1025574284609383690408304870162715216695788925244
    liquidity = 50015962439936049619261659728067971248

    sqrt_q = get_next_sqrt_price_from_input(sqrt_p, liquidity, 406, True)
    assert sqrt_q == 1025574284609383582644711336373707553698163132913
    assert get_amount0_delta(sqrt_q, sqrt_p, liquidity, True) == 406
