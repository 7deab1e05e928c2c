from swaprouter.constants import MAX_UINT160, MAX_UINT256, MIN_UINT256
from swaprouter.exceptions import EVMRevertError

"""
Overflow-checked integer helpers.

Python integers never overflow, so each helper only verifies that its operands and result fit the
fixed-width types used by the pool contracts.

ref: https://github.com/Uniswap/v3-core/blob/main/contracts/libraries/FullMath.sol
"""


def _check_uint256(value: int, name: str) -> None:
    if not (MIN_UINT256 <= value <= MAX_UINT256):
        raise EVMRevertError(error=f"Invalid value for {name}.")


def mulmod(x: int, y: int, k: int) -> int:
    if k == 0:
        raise EVMRevertError(error="division by zero")
    return (x * y) % k


def muldiv(a: int, b: int, denominator: int) -> int:
    """
    Calculate floor(a * b / denominator) for uint256 operands.
    """

    _check_uint256(a, "a")
    _check_uint256(b, "b")
    _check_uint256(denominator, "denominator")

    if denominator == 0:
        raise EVMRevertError(error="DIVISION BY ZERO")

    result = (a * b) // denominator
    if result > MAX_UINT256:
        raise EVMRevertError(error="Invalid result, does not fit in uint256")
    return result


def muldiv_rounding_up(a: int, b: int, denominator: int) -> int:
    result = muldiv(a, b, denominator)
    if mulmod(a, b, denominator) == 0:
        return result
    if result == MAX_UINT256:
        raise EVMRevertError(error="Rounded result does not fit in uint256")
    return result + 1


def div_rounding_up(x: int, y: int) -> int:
    """
    Divide two uint256 values, rounding any remainder up.
    """

    return x // y + (x % y > 0)


def to_uint160(x: int) -> int:
    if x > MAX_UINT160:
        raise EVMRevertError(error=f"{x} greater than maximum uint160 value")
    return x
