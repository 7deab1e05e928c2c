import functools

from cchecksum import to_checksum_address
from eth_typing import ChecksumAddress


@functools.lru_cache(maxsize=1024)
def get_checksum_address(address: str | bytes) -> ChecksumAddress:
    """
    Return the EIP-55 checksummed form of a 20 byte address.
    """

    return to_checksum_address(address)
