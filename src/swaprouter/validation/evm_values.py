import re
from typing import Annotated, Any

from eth_typing import ChecksumAddress
from eth_utils.address import is_checksum_address
from pydantic import Field

from swaprouter.checksum_cache import get_checksum_address
from swaprouter.constants import (
    MAX_INT24,
    MAX_INT128,
    MAX_UINT8,
    MAX_UINT128,
    MAX_UINT256,
    MIN_INT24,
    MIN_INT128,
    MIN_UINT8,
    MIN_UINT128,
    MIN_UINT256,
)
from swaprouter.exceptions import InvalidAddress, InvalidBytes32

type ValidatedInt24 = Annotated[int, Field(strict=True, ge=MIN_INT24, le=MAX_INT24)]
type ValidatedInt128 = Annotated[int, Field(strict=True, ge=MIN_INT128, le=MAX_INT128)]

type ValidatedUint8 = Annotated[int, Field(strict=True, ge=MIN_UINT8, le=MAX_UINT8)]
type ValidatedUint128 = Annotated[int, Field(strict=True, ge=MIN_UINT128, le=MAX_UINT128)]
type ValidatedUint256 = Annotated[int, Field(strict=True, ge=MIN_UINT256, le=MAX_UINT256)]

type ValidatedBytes32 = Annotated[str, Field(pattern=r"^0x[0-9a-fA-F]{64}$")]

_HEX_ADDRESS = re.compile(r"^0x[0-9a-fA-F]{40}$")
_BYTES32 = re.compile(r"^0x[0-9a-fA-F]{64}$")


def validate_and_parse_address(address: Any) -> ChecksumAddress:
    """
    Validate a hex address string and return its checksummed form. Mixed-case input must carry a
    valid checksum.
    """

    if not isinstance(address, str) or _HEX_ADDRESS.match(address) is None:
        raise InvalidAddress(address=address)
    hex_digits = address[2:]
    if hex_digits not in {hex_digits.lower(), hex_digits.upper()} and not is_checksum_address(
        address
    ):
        raise InvalidAddress(address=address)
    return get_checksum_address(address)


def validate_bytes32(value: Any) -> str:
    """
    Validate a 0x-prefixed 32 byte hex string, returning it lower-cased.
    """

    if not isinstance(value, str) or _BYTES32.match(value) is None:
        raise InvalidBytes32(value=value)
    return value.lower()
