from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import eth_abi.abi
from hexbytes import HexBytes

from swaprouter.constants import ZERO_BYTES32
from swaprouter.exceptions import SwapRouterTypeError, SwapRouterValueError
from swaprouter.functions import (
    extract_argument_types_from_function_prototype,
    function_selector,
)
from swaprouter.logging import logger
from swaprouter.types.aliases import Deadline
from swaprouter.validation.evm_values import validate_bytes32

"""
Encoders for the access-token gated multicall.

Every variant of `multicall` begins with the four fields of an access token signature
(v, r, s, expiry). The presign encoding is the exact parameter block an issuer signs over, which is
the full ABI encoding with those four head words removed. The postsign encoding is the complete
calldata once a signature is known, so that:

    postsign == selector + encode(v) + r + s + encode(expiry) + presign.parameters
"""

MULTICALL = "multicall(uint8,bytes32,bytes32,uint256,bytes[])"
MULTICALL_WITH_DEADLINE = "multicall(uint8,bytes32,bytes32,uint256,uint256,bytes[])"
MULTICALL_WITH_PREVIOUS_BLOCKHASH = "multicall(uint8,bytes32,bytes32,uint256,bytes32,bytes[])"

ACCESS_TOKEN_FIELD_COUNT = 4
WORD_SIZE = 32

type Calls = bytes | str | Sequence[bytes | str]
type Validation = Deadline | None


@dataclass(slots=True, frozen=True)
class PresignedFunctionCall:
    function_signature: HexBytes
    parameters: HexBytes


def _normalize_calls(calls: Calls) -> list[HexBytes]:
    if isinstance(calls, (bytes, str)):
        calls = [calls]
    return [HexBytes(call) for call in calls]


def _select_multicall(validation: Validation) -> tuple[str, list[Any]]:
    """
    Pick the multicall overload for a validity bound, returning its prototype and the arguments
    that follow the access token fields (excluding the calls).
    """

    match validation:
        case None:
            return MULTICALL, []
        case bool():
            raise SwapRouterTypeError(message="A validity bound cannot be a boolean.")
        case str() if validation.startswith("0x"):
            return MULTICALL_WITH_PREVIOUS_BLOCKHASH, [HexBytes(validate_bytes32(validation))]
        case int():
            return MULTICALL_WITH_DEADLINE, [validation]
        case str():
            try:
                return MULTICALL_WITH_DEADLINE, [int(validation, 10)]
            except ValueError:
                raise SwapRouterValueError(
                    message=f"{validation!r} is neither a deadline nor a block hash."
                ) from None
        case _:
            raise SwapRouterTypeError(
                message=f"Unsupported validity bound type {type(validation).__name__}"
            )


def _encode_presign(function_prototype: str, arguments: list[Any]) -> PresignedFunctionCall:
    encoded = eth_abi.abi.encode(
        types=extract_argument_types_from_function_prototype(function_prototype),
        args=[0, HexBytes(ZERO_BYTES32), HexBytes(ZERO_BYTES32), 0, *arguments],
    )
    return PresignedFunctionCall(
        function_signature=function_selector(function_prototype),
        parameters=HexBytes(encoded[ACCESS_TOKEN_FIELD_COUNT * WORD_SIZE :]),
    )


def _encode_postsign(
    function_prototype: str,
    v: int,
    r: str | bytes,
    s: str | bytes,
    expiry: int,
    arguments: list[Any],
) -> HexBytes:
    return HexBytes(
        function_selector(function_prototype)
        + eth_abi.abi.encode(
            types=extract_argument_types_from_function_prototype(function_prototype),
            args=[v, HexBytes(r), HexBytes(s), expiry, *arguments],
        )
    )


def encode_presign_multicall(calls: Calls) -> PresignedFunctionCall:
    return _encode_presign(MULTICALL, [_normalize_calls(calls)])


def encode_postsign_multicall(
    v: int,
    r: str | bytes,
    s: str | bytes,
    expiry: int,
    calls: Calls,
) -> HexBytes:
    return _encode_postsign(MULTICALL, v, r, s, expiry, [_normalize_calls(calls)])


def encode_presign_multicall_extended(
    calls: Calls,
    validation: Validation = None,
) -> PresignedFunctionCall:
    """
    Produce the selector and parameters an access token issuer signs over.

    The overload depends on the validity bound: none, a deadline (int or decimal string), or a
    previous block hash (0x-prefixed, 32 bytes).
    """

    if validation is None:
        return encode_presign_multicall(calls)

    function_prototype, bound = _select_multicall(validation)
    logger.debug(f"Encoding presign {function_prototype}")
    return _encode_presign(function_prototype, [*bound, _normalize_calls(calls)])


def encode_postsign_multicall_extended(
    v: int,
    r: str | bytes,
    s: str | bytes,
    expiry: int,
    calls: Calls,
    validation: Validation = None,
) -> HexBytes:
    """
    Produce the complete multicall calldata carrying an access token signature.
    """

    if validation is None:
        return encode_postsign_multicall(v, r, s, expiry, calls)

    function_prototype, bound = _select_multicall(validation)
    logger.debug(f"Encoding postsign {function_prototype}")
    return _encode_postsign(function_prototype, v, r, s, expiry, [*bound, _normalize_calls(calls)])
