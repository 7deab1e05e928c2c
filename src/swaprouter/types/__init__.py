from swaprouter.types.aliases import (
    BlockHash,
    ChainId,
    Deadline,
    Fee,
    Liquidity,
    Tick,
)

__all__ = (
    "BlockHash",
    "ChainId",
    "Deadline",
    "Fee",
    "Liquidity",
    "Tick",
)
