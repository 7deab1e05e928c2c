from . import full_math as FullMath
from . import liquidity_math as LiquidityMath
from . import sqrt_price_math as SqrtPriceMath
from . import swap_math as SwapMath
from . import tick_list as TickList
from . import tick_math as TickMath

__all__ = (
    "FullMath",
    "LiquidityMath",
    "SqrtPriceMath",
    "SwapMath",
    "TickList",
    "TickMath",
)
