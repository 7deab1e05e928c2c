import pydantic
from hexbytes import HexBytes

from swaprouter.currency import Erc20Token
from swaprouter.functions import encode_function_calldata
from swaprouter.validation.evm_values import ValidatedBytes32, ValidatedUint8, ValidatedUint256

SELF_PERMIT = "selfPermit(address,uint256,uint256,uint8,bytes32,bytes32)"
SELF_PERMIT_ALLOWED = "selfPermitAllowed(address,uint256,uint256,uint8,bytes32,bytes32)"


class StandardPermit(pydantic.BaseModel, frozen=True):
    """
    An EIP-2612 permit approving `amount` until `deadline`.
    """

    v: ValidatedUint8
    r: ValidatedBytes32
    s: ValidatedBytes32
    amount: ValidatedUint256
    deadline: ValidatedUint256


class AllowedPermit(pydantic.BaseModel, frozen=True):
    """
    A DAI-style permit granting an unlimited allowance, identified by the holder's `nonce`.
    """

    v: ValidatedUint8
    r: ValidatedBytes32
    s: ValidatedBytes32
    nonce: ValidatedUint256
    expiry: ValidatedUint256


type PermitOptions = StandardPermit | AllowedPermit


def encode_permit(token: Erc20Token, options: PermitOptions) -> HexBytes:
    """
    Encode a call letting the router spend `token` on the caller's behalf using a signed permit.
    """

    match options:
        case AllowedPermit(nonce=nonce, expiry=expiry):
            return encode_function_calldata(
                SELF_PERMIT_ALLOWED,
                [
                    token.address,
                    nonce,
                    expiry,
                    options.v,
                    HexBytes(options.r),
                    HexBytes(options.s),
                ],
            )
        case StandardPermit(amount=amount, deadline=deadline):
            return encode_function_calldata(
                SELF_PERMIT,
                [
                    token.address,
                    amount,
                    deadline,
                    options.v,
                    HexBytes(options.r),
                    HexBytes(options.s),
                ],
            )
