from swaprouter.router.access_token import (
    AccessToken,
    AccessTokenIssuer,
    FunctionCall,
    LocalAccessTokenIssuer,
)
from swaprouter.router.multicall import (
    PresignedFunctionCall,
    encode_postsign_multicall,
    encode_postsign_multicall_extended,
    encode_presign_multicall,
    encode_presign_multicall_extended,
)
from swaprouter.router.payments import (
    FeeOptions,
    encode_refund_eth,
    encode_sweep_token,
    encode_unwrap_weth9,
)
from swaprouter.router.self_permit import AllowedPermit, PermitOptions, StandardPermit, encode_permit
from swaprouter.router.swap_router import (
    EncodedSwaps,
    MethodParameters,
    SignedMethodParameters,
    SwapOptions,
    SwapRouter,
)

__all__ = (
    "AccessToken",
    "AccessTokenIssuer",
    "AllowedPermit",
    "EncodedSwaps",
    "FeeOptions",
    "FunctionCall",
    "LocalAccessTokenIssuer",
    "MethodParameters",
    "PermitOptions",
    "PresignedFunctionCall",
    "SignedMethodParameters",
    "StandardPermit",
    "SwapOptions",
    "SwapRouter",
    "encode_permit",
    "encode_postsign_multicall",
    "encode_postsign_multicall_extended",
    "encode_presign_multicall",
    "encode_presign_multicall_extended",
    "encode_refund_eth",
    "encode_sweep_token",
    "encode_unwrap_weth9",
)
