from dataclasses import dataclass
from typing import Any

from eth_typing import ChecksumAddress

from swaprouter.checksum_cache import get_checksum_address
from swaprouter.constants import MAX_UINT8, WRAPPED_NATIVE_TOKENS
from swaprouter.exceptions import SwapRouterValueError
from swaprouter.types.aliases import ChainId


@dataclass(slots=True, frozen=True, eq=False)
class Erc20Token:
    """
    A fungible token contract deployed at a fixed address on a single chain.
    """

    chain_id: ChainId
    address: ChecksumAddress
    decimals: int = 18
    symbol: str = ""
    name: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "address", get_checksum_address(self.address))
        if not (0 <= self.decimals <= MAX_UINT8):
            raise SwapRouterValueError(message=f"Invalid decimals {self.decimals}")

    @property
    def is_native(self) -> bool:
        return False

    @property
    def wrapped(self) -> "Erc20Token":
        return self

    def sorts_before(self, other: "Erc20Token") -> bool:
        """
        Check if this token's address sorts before the other's, which is the order pools use.
        """

        if self.chain_id != other.chain_id:
            raise SwapRouterValueError(message="Tokens are on different chains.")
        if self.address == other.address:
            raise SwapRouterValueError(message="Tokens have the same address.")
        return self.address.lower() < other.address.lower()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Erc20Token):
            return NotImplemented
        return self.chain_id == other.chain_id and self.address == other.address

    def __hash__(self) -> int:
        return hash((self.chain_id, self.address))

    def __repr__(self) -> str:
        return f"Erc20Token(chain_id={self.chain_id}, address={self.address}, symbol={self.symbol!r})"


@dataclass(slots=True, frozen=True, eq=False)
class NativeCurrency:
    """
    The native asset of a chain. It cannot be held by pools, so routes and pool math use its
    wrapped token instead.
    """

    chain_id: ChainId
    decimals: int = 18
    symbol: str = "ETH"
    name: str = "Ether"

    @classmethod
    def on_chain(cls, chain_id: ChainId | None = None) -> "NativeCurrency":
        if chain_id is None:
            from swaprouter.config import settings

            chain_id = settings.default_chain_id
        return cls(chain_id=chain_id)

    @property
    def is_native(self) -> bool:
        return True

    @property
    def wrapped(self) -> Erc20Token:
        try:
            address = WRAPPED_NATIVE_TOKENS[self.chain_id]
        except KeyError:
            raise SwapRouterValueError(
                message=f"No wrapped native token is known for chain {self.chain_id}"
            ) from None
        return Erc20Token(
            chain_id=self.chain_id,
            address=address,
            decimals=18,
            symbol=f"W{self.symbol}",
            name=f"Wrapped {self.name}",
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NativeCurrency):
            return NotImplemented
        return self.chain_id == other.chain_id

    def __hash__(self) -> int:
        return hash(("native", self.chain_id))


type Currency = Erc20Token | NativeCurrency


def currency_equals(a: Any, b: Any) -> bool:
    """
    Compare two currencies, never treating a native currency as equal to its wrapped token.
    """

    return type(a) is type(b) and a == b
