from dataclasses import dataclass
from typing import Any, Protocol

import eth_account
import eth_account.messages
from eth_typing import ChecksumAddress
from hexbytes import HexBytes

from swaprouter.config import settings
from swaprouter.logging import logger
from swaprouter.types.aliases import ChainId
from swaprouter.validation.evm_values import validate_and_parse_address

"""
Ethereum Access Tokens (EATs) are EIP-712 signatures issued by an off-chain authority, permitting a
specific caller to execute a specific function call on a target contract until an expiry time.

ref: https://github.com/violetprotocol/ethereum-access-token
"""

ACCESS_TOKEN_TYPES: dict[str, list[dict[str, str]]] = {
    "AccessToken": [
        {"name": "expiry", "type": "uint256"},
        {"name": "functionCall", "type": "FunctionCall"},
    ],
    "FunctionCall": [
        {"name": "functionSignature", "type": "bytes4"},
        {"name": "target", "type": "address"},
        {"name": "caller", "type": "address"},
        {"name": "parameters", "type": "bytes"},
    ],
}


@dataclass(slots=True, frozen=True)
class FunctionCall:
    function_signature: HexBytes
    target: ChecksumAddress
    caller: ChecksumAddress
    parameters: HexBytes


@dataclass(slots=True, frozen=True)
class AccessToken:
    v: int
    r: HexBytes
    s: HexBytes
    expiry: int


class AccessTokenIssuer(Protocol):
    async def issue(self, function_call: FunctionCall, *, expiry: int) -> AccessToken: ...


def access_token_domain(chain_id: ChainId, verifying_contract: str) -> dict[str, Any]:
    return {
        "name": settings.access_token.name,
        "version": settings.access_token.version,
        "chainId": chain_id,
        "verifyingContract": validate_and_parse_address(verifying_contract),
    }


def access_token_message(function_call: FunctionCall, expiry: int) -> dict[str, Any]:
    return {
        "expiry": expiry,
        "functionCall": {
            "functionSignature": bytes(function_call.function_signature),
            "target": function_call.target,
            "caller": function_call.caller,
            "parameters": bytes(function_call.parameters),
        },
    }


class LocalAccessTokenIssuer:
    """
    An issuer that signs access tokens with a locally held key, for development and testing.
    """

    def __init__(self, private_key: str | bytes, chain_id: ChainId, verifying_contract: str) -> None:
        self._account = eth_account.Account.from_key(private_key)
        self.chain_id = chain_id
        self.verifying_contract = validate_and_parse_address(verifying_contract)

    @property
    def address(self) -> ChecksumAddress:
        return self._account.address

    async def issue(self, function_call: FunctionCall, *, expiry: int) -> AccessToken:
        signed = self._account.sign_message(
            eth_account.messages.encode_typed_data(
                domain_data=access_token_domain(self.chain_id, self.verifying_contract),
                message_types=ACCESS_TOKEN_TYPES,
                message_data=access_token_message(function_call, expiry),
            )
        )
        logger.debug(f"Issued access token for {function_call.caller}, expiring at {expiry}")
        return AccessToken(
            v=signed.v,
            r=HexBytes(signed.r.to_bytes(32, byteorder="big")),
            s=HexBytes(signed.s.to_bytes(32, byteorder="big")),
            expiry=expiry,
        )
