from collections.abc import Sequence
from typing import Any

import eth_abi.abi
from eth_typing import ChecksumAddress
from eth_utils.crypto import keccak
from hexbytes import HexBytes

from swaprouter.checksum_cache import get_checksum_address
from swaprouter.exceptions import SwapRouterValueError


def create2_address(
    deployer: str | bytes,
    salt: bytes | str,
    init_code_hash: bytes | str,
) -> ChecksumAddress:
    """
    Generate the deterministic CREATE2 address for a given deployer, salt, and the keccak hash of
    the contract creation (init) bytecode.

    References:
        - https://eips.ethereum.org/EIPS/eip-1014
    """
    return get_checksum_address(
        keccak(HexBytes(0xFF) + HexBytes(deployer) + HexBytes(salt) + HexBytes(init_code_hash))[
            -20:
        ],  # Contract address is the least significant 20 bytes from the 32 byte hash
    )


def function_selector(function_prototype: str) -> HexBytes:
    """
    Get the 4-byte selector for a function prototype, e.g. 'refundETH()' -> 0x12210e8a
    """

    return HexBytes(keccak(text=function_prototype)[:4])


def encode_function_calldata(
    function_prototype: str, function_arguments: Sequence[Any] | None = None
) -> HexBytes:
    """
    Encode the calldata to execute a call to the given function prototype, with ordered arguments.
    The resulting bytes array will include the 4-byte function selector, followed by the
    ABI-encoded arguments.
    """

    if function_arguments is None:
        function_arguments = ()

    return HexBytes(
        function_selector(function_prototype)
        + eth_abi.abi.encode(
            types=extract_argument_types_from_function_prototype(function_prototype),
            args=function_arguments,
        )
    )


def extract_argument_types_from_function_prototype(function_prototype: str) -> list[str]:
    """
    Extract the argument types from the function prototype. Tuple arguments are kept whole.

    e.g. the argument types for 'function(address,uint256)' are ['address','uint256'], and the
    argument types for 'function((address,uint24),bytes[])' are ['(address,uint24)','bytes[]']
    """

    start = function_prototype.find("(")
    if start == -1 or not function_prototype.endswith(")"):
        raise SwapRouterValueError(message=f"Malformed function prototype {function_prototype!r}")

    argument_types: list[str] = []
    depth = 0
    current = ""
    for char in function_prototype[start + 1 : -1]:
        match char:
            case "(":
                depth += 1
            case ")":
                depth -= 1
            case "," if depth == 0:
                argument_types.append(current)
                current = ""
                continue
        current += char

    if current:
        argument_types.append(current)
    return argument_types
