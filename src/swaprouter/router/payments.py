import math
from dataclasses import dataclass

from hexbytes import HexBytes

from swaprouter.currency import Erc20Token, Percent
from swaprouter.functions import encode_function_calldata
from swaprouter.validation.evm_values import validate_and_parse_address

"""
Encoders for the router's payment helpers: unwrapping the wrapped native token, sweeping leftover
tokens, and refunding unspent native currency.

When a recipient is given, the overloads carrying an explicit recipient are used. Otherwise the
recipient-less overloads are used and the router pays the caller.
"""

UNWRAP_WETH9 = "unwrapWETH9(uint256,address)"
UNWRAP_WETH9_TO_SENDER = "unwrapWETH9(uint256)"
UNWRAP_WETH9_WITH_FEE = "unwrapWETH9WithFee(uint256,address,uint256,address)"
UNWRAP_WETH9_WITH_FEE_TO_SENDER = "unwrapWETH9WithFee(uint256,uint256,address)"
SWEEP_TOKEN = "sweepToken(address,uint256,address)"
SWEEP_TOKEN_TO_SENDER = "sweepToken(address,uint256)"
SWEEP_TOKEN_WITH_FEE = "sweepTokenWithFee(address,uint256,address,uint256,address)"
SWEEP_TOKEN_WITH_FEE_TO_SENDER = "sweepTokenWithFee(address,uint256,uint256,address)"
REFUND_ETH = "refundETH()"


@dataclass(slots=True, frozen=True)
class FeeOptions:
    """
    A fee taken from the output of a swap, paid to `recipient`.
    """

    fee: Percent
    recipient: str


def encode_fee_bips(fee: Percent) -> int:
    return math.floor(fee.fraction * 10_000)


def encode_unwrap_weth9(
    amount_minimum: int,
    recipient: str | None = None,
    fee_options: FeeOptions | None = None,
) -> HexBytes:
    if recipient is not None:
        recipient = validate_and_parse_address(recipient)
        if fee_options is not None:
            return encode_function_calldata(
                UNWRAP_WETH9_WITH_FEE,
                [
                    amount_minimum,
                    recipient,
                    encode_fee_bips(fee_options.fee),
                    validate_and_parse_address(fee_options.recipient),
                ],
            )
        return encode_function_calldata(UNWRAP_WETH9, [amount_minimum, recipient])

    if fee_options is not None:
        return encode_function_calldata(
            UNWRAP_WETH9_WITH_FEE_TO_SENDER,
            [
                amount_minimum,
                encode_fee_bips(fee_options.fee),
                validate_and_parse_address(fee_options.recipient),
            ],
        )
    return encode_function_calldata(UNWRAP_WETH9_TO_SENDER, [amount_minimum])


def encode_sweep_token(
    token: Erc20Token,
    amount_minimum: int,
    recipient: str | None = None,
    fee_options: FeeOptions | None = None,
) -> HexBytes:
    if recipient is not None:
        recipient = validate_and_parse_address(recipient)
        if fee_options is not None:
            return encode_function_calldata(
                SWEEP_TOKEN_WITH_FEE,
                [
                    token.address,
                    amount_minimum,
                    recipient,
                    encode_fee_bips(fee_options.fee),
                    validate_and_parse_address(fee_options.recipient),
                ],
            )
        return encode_function_calldata(SWEEP_TOKEN, [token.address, amount_minimum, recipient])

    if fee_options is not None:
        return encode_function_calldata(
            SWEEP_TOKEN_WITH_FEE_TO_SENDER,
            [
                token.address,
                amount_minimum,
                encode_fee_bips(fee_options.fee),
                validate_and_parse_address(fee_options.recipient),
            ],
        )
    return encode_function_calldata(SWEEP_TOKEN_TO_SENDER, [token.address, amount_minimum])


def encode_refund_eth() -> HexBytes:
    return encode_function_calldata(REFUND_ETH)
