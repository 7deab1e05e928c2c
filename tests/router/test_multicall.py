import pytest
from hexbytes import HexBytes

from swaprouter.exceptions import InvalidBytes32, SwapRouterTypeError, SwapRouterValueError
from swaprouter.router.multicall import (
    encode_postsign_multicall,
    encode_postsign_multicall_extended,
    encode_presign_multicall,
    encode_presign_multicall_extended,
)

V = 1
R = "0xf00d2a7f6996abe9ade2747e3de45e96fb8fe12381ab659586473cb43d7550fb"
S = "0xf00d2a7f6996abe9ade2747e3de45e96fb8fe12381ab659586473cb43d7550fb"
EXPIRY = 2

MULTICALL_SELECTOR = HexBytes("0x2efb614b")
MULTICALL_WITH_DEADLINE_SELECTOR = HexBytes("0x6cfd42de")
MULTICALL_WITH_PREVIOUS_BLOCKHASH_SELECTOR = HexBytes("0xb1c41cf4")

CALL_AA = "0x" + "aa" * 32
CALL_BB = "0x" + "bb" * 32
CALL_CC = "0x" + "cc" * 32


def _word(value: int) -> str:
    return f"{value:064x}"


def _words(*words: str) -> HexBytes:
    return HexBytes("0x" + "".join(words))


SINGLE_CALL_PARAMETERS = _words(
    _word(0xA0),
    _word(1),
    _word(0x20),
    _word(1),
    "03".ljust(64, "0"),
)


def _access_token_head() -> str:
    return _word(V) + R[2:] + S[2:] + _word(EXPIRY)


class TestPresign:
    @pytest.mark.parametrize("calls", ["0x03", ["0x03"], [b"\x03"], HexBytes("0x03")])
    def test_single_call(self, calls):
        presigned = encode_presign_multicall_extended(calls)
        assert presigned.function_signature == MULTICALL_SELECTOR
        assert presigned.parameters == SINGLE_CALL_PARAMETERS
        assert presigned == encode_presign_multicall(calls)

    def test_multiple_calls(self):
        assert encode_presign_multicall_extended([CALL_AA, CALL_BB]).parameters == _words(
            _word(0xA0),
            _word(2),
            _word(0x40),
            _word(0x80),
            _word(0x20),
            "aa" * 32,
            _word(0x20),
            "bb" * 32,
        )
        assert encode_presign_multicall_extended([CALL_AA, CALL_BB, CALL_CC]).parameters == _words(
            _word(0xA0),
            _word(3),
            _word(0x60),
            _word(0xA0),
            _word(0xE0),
            _word(0x20),
            "aa" * 32,
            _word(0x20),
            "bb" * 32,
            _word(0x20),
            "cc" * 32,
        )

    @pytest.mark.parametrize("deadline", [123, "123"])
    def test_deadline(self, deadline):
        presigned = encode_presign_multicall_extended("0x01", deadline)
        assert presigned.function_signature == MULTICALL_WITH_DEADLINE_SELECTOR
        assert presigned.parameters == _words(
            _word(0x7B),
            _word(0xC0),
            _word(1),
            _word(0x20),
            _word(1),
            "01".ljust(64, "0"),
        )

    @pytest.mark.parametrize("blockhash", ["0x" + "aa" * 32, "0x" + "AA" * 32])
    def test_previous_blockhash(self, blockhash):
        presigned = encode_presign_multicall_extended("0x01", blockhash)
        assert presigned.function_signature == MULTICALL_WITH_PREVIOUS_BLOCKHASH_SELECTOR
        assert presigned.parameters == _words(
            "aa" * 32,
            _word(0xC0),
            _word(1),
            _word(0x20),
            _word(1),
            "01".ljust(64, "0"),
        )

    @pytest.mark.parametrize("blockhash", ["0xaa", "0x" + "zz" * 32, "0x" + "aa" * 33])
    def test_invalid_blockhash(self, blockhash):
        with pytest.raises(InvalidBytes32):
            encode_presign_multicall_extended("0x01", blockhash)

    def test_invalid_deadline(self):
        with pytest.raises(SwapRouterValueError):
            encode_presign_multicall_extended("0x01", "soon")
        with pytest.raises(SwapRouterTypeError):
            encode_presign_multicall_extended("0x01", True)
        with pytest.raises(SwapRouterTypeError):
            encode_presign_multicall_extended("0x01", 1.5)


class TestPostsign:
    @pytest.mark.parametrize("calls", ["0x03", ["0x03"]])
    def test_single_call(self, calls):
        calldata = encode_postsign_multicall_extended(V, R, S, EXPIRY, calls)
        assert calldata == HexBytes(
            MULTICALL_SELECTOR.hex().removeprefix("0x")
            + _access_token_head()
            + SINGLE_CALL_PARAMETERS.hex().removeprefix("0x")
        )
        assert calldata == encode_postsign_multicall(V, R, S, EXPIRY, calls)

    @pytest.mark.parametrize("deadline", [123, "123"])
    def test_deadline(self, deadline):
        calldata = encode_postsign_multicall_extended(V, R, S, EXPIRY, "0x01", deadline)
        assert calldata[:4] == MULTICALL_WITH_DEADLINE_SELECTOR
        assert calldata[4 : 4 + 4 * 32] == HexBytes("0x" + _access_token_head())
        assert calldata[4 + 4 * 32 : 4 + 5 * 32] == HexBytes("0x" + _word(0x7B))

    def test_previous_blockhash(self):
        calldata = encode_postsign_multicall_extended(V, R, S, EXPIRY, "0x01", "0x" + "aa" * 32)
        assert calldata[:4] == MULTICALL_WITH_PREVIOUS_BLOCKHASH_SELECTOR
        assert calldata[4 + 4 * 32 : 4 + 5 * 32] == HexBytes("0x" + "aa" * 32)

    @pytest.mark.parametrize(
        "validation",
        [None, 123, "123", "0x" + "aa" * 32],
    )
    @pytest.mark.parametrize(
        "calls",
        [["0x03"], [CALL_AA, CALL_BB], [CALL_AA, CALL_BB, CALL_CC]],
    )
    def test_postsign_extends_presign(self, calls, validation):
        presigned = encode_presign_multicall_extended(calls, validation)
        calldata = encode_postsign_multicall_extended(V, R, S, EXPIRY, calls, validation)

        assert calldata == HexBytes(
            presigned.function_signature
            + HexBytes("0x" + _access_token_head())
            + presigned.parameters
        )
