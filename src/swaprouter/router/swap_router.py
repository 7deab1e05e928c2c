from collections.abc import Sequence
from dataclasses import dataclass

from hexbytes import HexBytes

from swaprouter.constants import ADDRESS_THIS, MSG_SENDER
from swaprouter.currency import CurrencyAmount, Percent, currency_equals
from swaprouter.exceptions import (
    InvalidSlippageTolerance,
    NonTokenPermit,
    TokenMismatch,
    TradeTypeMismatch,
    UnsupportedTradeShape,
)
from swaprouter.functions import encode_function_calldata
from swaprouter.logging import logger
from swaprouter.router.access_token import AccessToken, AccessTokenIssuer, FunctionCall
from swaprouter.router.multicall import (
    Validation,
    encode_postsign_multicall_extended,
    encode_presign_multicall_extended,
)
from swaprouter.router.payments import (
    FeeOptions,
    encode_refund_eth,
    encode_sweep_token,
    encode_unwrap_weth9,
)
from swaprouter.router.self_permit import PermitOptions, encode_permit
from swaprouter.trade import Trade, TradeType
from swaprouter.uniswap.v3_functions import encode_v3_path
from swaprouter.validation.evm_values import validate_and_parse_address

EXACT_INPUT_SINGLE = "exactInputSingle((address,address,uint24,address,uint256,uint256,uint160))"
EXACT_OUTPUT_SINGLE = "exactOutputSingle((address,address,uint24,address,uint256,uint256,uint160))"
EXACT_INPUT = "exactInput((bytes,address,uint256,uint256))"
EXACT_OUTPUT = "exactOutput((bytes,address,uint256,uint256))"

# Native input is refunded above this price impact, where a swap may stop at the price limit
REFUND_ETH_PRICE_IMPACT_THRESHOLD = Percent(50, 100)

type AnyTrade = Trade | Sequence[Trade]


@dataclass(slots=True, frozen=True)
class SwapOptions:
    """
    Options for producing the arguments to send calls to the router.

    `recipient` defaults to the transaction sender. `deadline_or_previous_blockhash` is either a
    deadline in epoch seconds, or a 0x-prefixed 32 byte block hash the transaction must follow.
    """

    slippage_tolerance: Percent
    recipient: str | None = None
    deadline_or_previous_blockhash: Validation = None
    input_token_permit: PermitOptions | None = None
    fee: FeeOptions | None = None


@dataclass(slots=True, frozen=True)
class EncodedSwaps:
    calls: list[HexBytes]
    sample_trade: Trade
    router_must_custody: bool
    input_is_native: bool
    output_is_native: bool
    total_amount_in: CurrencyAmount
    minimum_amount_out: CurrencyAmount
    quote_amount_out: CurrencyAmount


@dataclass(slots=True, frozen=True)
class MethodParameters:
    """
    The presign multicall for a swap. `function_signature` and `parameters` are the bytes an access
    token issuer signs over, `value` is the native currency to attach to the transaction.
    """

    function_signature: HexBytes
    parameters: HexBytes
    calls: list[HexBytes]
    value: int


@dataclass(slots=True, frozen=True)
class SignedMethodParameters:
    calldata: HexBytes
    calls: list[HexBytes]
    value: int
    access_token: AccessToken


class SwapRouter:
    """
    Builds the calls to execute trades through the access-token gated swap router.
    """

    @staticmethod
    def _unbundle(trades: AnyTrade) -> list[Trade]:
        match trades:
            case Trade():
                return [
                    Trade.create_unchecked_trade(
                        route=swap.route,
                        input_amount=swap.input_amount,
                        output_amount=swap.output_amount,
                        trade_type=trades.trade_type,
                    )
                    for swap in trades.swaps
                ]
            case [Trade(), *_] if all(isinstance(trade, Trade) for trade in trades):
                return list(trades)
            case _:
                raise UnsupportedTradeShape(trades=trades)

    @staticmethod
    def encode_v3_swap(
        trade: Trade,
        options: SwapOptions,
        router_must_custody: bool,
        perform_aggregated_slippage_check: bool,
    ) -> list[HexBytes]:
        """
        Encode one swap call per route of the trade.
        """

        if router_must_custody:
            recipient = ADDRESS_THIS
        elif options.recipient is None:
            recipient = MSG_SENDER
        else:
            recipient = validate_and_parse_address(options.recipient)

        calls: list[HexBytes] = []
        for swap in trade.swaps:
            route = swap.route
            amount_in = trade.maximum_amount_in(
                options.slippage_tolerance, swap.input_amount
            ).quotient
            amount_out = trade.minimum_amount_out(
                options.slippage_tolerance, swap.output_amount
            ).quotient
            amount_out_minimum = 0 if perform_aggregated_slippage_check else amount_out

            match route.pools, trade.trade_type:
                case [pool], TradeType.EXACT_INPUT:
                    call = encode_function_calldata(
                        EXACT_INPUT_SINGLE,
                        [
                            (
                                route.token_path[0].address,
                                route.token_path[1].address,
                                pool.fee,
                                recipient,
                                amount_in,
                                amount_out_minimum,
                                0,
                            )
                        ],
                    )
                case [pool], TradeType.EXACT_OUTPUT:
                    call = encode_function_calldata(
                        EXACT_OUTPUT_SINGLE,
                        [
                            (
                                route.token_path[0].address,
                                route.token_path[1].address,
                                pool.fee,
                                recipient,
                                amount_out,
                                amount_in,
                                0,
                            )
                        ],
                    )
                case _, TradeType.EXACT_INPUT:
                    call = encode_function_calldata(
                        EXACT_INPUT,
                        [(encode_v3_path(route, False), recipient, amount_in, amount_out_minimum)],
                    )
                case _, TradeType.EXACT_OUTPUT:
                    call = encode_function_calldata(
                        EXACT_OUTPUT,
                        [(encode_v3_path(route, True), recipient, amount_out, amount_in)],
                    )
            calls.append(call)

        return calls

    @classmethod
    def encode_swaps(
        cls,
        trades: AnyTrade,
        options: SwapOptions,
        is_swap_and_add: bool = False,
    ) -> EncodedSwaps:
        """
        Validate the trades and encode the permit and swap calls, without the trailing unwrap, sweep
        or refund calls.
        """

        individual_trades = cls._unbundle(trades)
        number_of_trades = sum(len(trade.swaps) for trade in individual_trades)
        sample_trade = individual_trades[0]

        if not all(
            currency_equals(trade.input_currency, sample_trade.input_currency)
            for trade in individual_trades
        ):
            raise TokenMismatch(side="input")
        if not all(
            currency_equals(trade.output_currency, sample_trade.output_currency)
            for trade in individual_trades
        ):
            raise TokenMismatch(side="output")
        if not all(trade.trade_type is sample_trade.trade_type for trade in individual_trades):
            raise TradeTypeMismatch

        if options.slippage_tolerance.less_than(0):
            raise InvalidSlippageTolerance(slippage_tolerance=options.slippage_tolerance)
        if options.recipient is not None:
            validate_and_parse_address(options.recipient)

        input_is_native = sample_trade.input_currency.is_native
        output_is_native = sample_trade.output_currency.is_native

        # More than two exact input swaps are bounded once, by the trailing sweep or unwrap
        perform_aggregated_slippage_check = (
            sample_trade.trade_type is TradeType.EXACT_INPUT and number_of_trades > 2  # noqa: PLR2004
        )
        router_must_custody = (
            output_is_native
            or options.fee is not None
            or is_swap_and_add
            or perform_aggregated_slippage_check
        )
        logger.debug(
            f"Encoding {number_of_trades} swaps: "
            f"{router_must_custody=}, {perform_aggregated_slippage_check=}"
        )

        calls: list[HexBytes] = []
        if options.input_token_permit is not None:
            if input_is_native:
                raise NonTokenPermit
            calls.append(encode_permit(sample_trade.input_currency, options.input_token_permit))

        for trade in individual_trades:
            calls.extend(
                cls.encode_v3_swap(
                    trade,
                    options,
                    router_must_custody,
                    perform_aggregated_slippage_check,
                )
            )

        minimum_amount_out = CurrencyAmount.from_raw_amount(sample_trade.output_currency, 0)
        quote_amount_out = CurrencyAmount.from_raw_amount(sample_trade.output_currency, 0)
        total_amount_in = CurrencyAmount.from_raw_amount(sample_trade.input_currency, 0)
        for trade in individual_trades:
            minimum_amount_out = minimum_amount_out.add(
                trade.minimum_amount_out(options.slippage_tolerance)
            )
            quote_amount_out = quote_amount_out.add(trade.output_amount)
            total_amount_in = total_amount_in.add(trade.maximum_amount_in(options.slippage_tolerance))

        return EncodedSwaps(
            calls=calls,
            sample_trade=sample_trade,
            router_must_custody=router_must_custody,
            input_is_native=input_is_native,
            output_is_native=output_is_native,
            total_amount_in=total_amount_in,
            minimum_amount_out=minimum_amount_out,
            quote_amount_out=quote_amount_out,
        )

    @staticmethod
    def _risk_of_partial_fill(trades: AnyTrade) -> bool:
        """
        Very high price impact can push a swap to the price limit, leaving part of the input unspent.
        """

        if isinstance(trades, Trade):
            trades = [trades]
        return any(
            trade.price_impact.greater_than(REFUND_ETH_PRICE_IMPACT_THRESHOLD) for trade in trades
        )

    @classmethod
    def swap_call_parameters(cls, trades: AnyTrade, options: SwapOptions) -> MethodParameters:
        """
        Produce the presign multicall and the native value for executing the given trades.
        """

        encoded = cls.encode_swaps(trades, options)
        sample_trade = encoded.sample_trade
        calls = list(encoded.calls)

        if encoded.router_must_custody:
            if encoded.output_is_native:
                calls.append(
                    encode_unwrap_weth9(
                        encoded.minimum_amount_out.quotient, options.recipient, options.fee
                    )
                )
            else:
                calls.append(
                    encode_sweep_token(
                        sample_trade.output_currency.wrapped,
                        encoded.minimum_amount_out.quotient,
                        options.recipient,
                        options.fee,
                    )
                )

        # Unspent native input is refunded
        if encoded.input_is_native and (
            sample_trade.trade_type is TradeType.EXACT_OUTPUT or cls._risk_of_partial_fill(trades)
        ):
            logger.debug("Appending refundETH call")
            calls.append(encode_refund_eth())

        presign = encode_presign_multicall_extended(calls, options.deadline_or_previous_blockhash)
        return MethodParameters(
            function_signature=presign.function_signature,
            parameters=presign.parameters,
            calls=calls,
            value=encoded.total_amount_in.quotient if encoded.input_is_native else 0,
        )

    @classmethod
    async def signed_swap_call_parameters(
        cls,
        trades: AnyTrade,
        options: SwapOptions,
        issuer: AccessTokenIssuer,
        *,
        router_address: str,
        caller: str,
        expiry: int,
    ) -> SignedMethodParameters:
        """
        Build the swap calls, obtain an access token for them from `issuer`, and return the complete
        calldata. Errors raised by the issuer are not caught.
        """

        method_parameters = cls.swap_call_parameters(trades, options)
        access_token = await issuer.issue(
            FunctionCall(
                function_signature=method_parameters.function_signature,
                target=validate_and_parse_address(router_address),
                caller=validate_and_parse_address(caller),
                parameters=method_parameters.parameters,
            ),
            expiry=expiry,
        )
        return SignedMethodParameters(
            calldata=encode_postsign_multicall_extended(
                access_token.v,
                access_token.r,
                access_token.s,
                access_token.expiry,
                method_parameters.calls,
                options.deadline_or_previous_blockhash,
            ),
            calls=method_parameters.calls,
            value=method_parameters.value,
            access_token=access_token,
        )
