import logging

from swaprouter.checksum_cache import get_checksum_address
from swaprouter.logging import logger


def test_package_logger():
    assert logger is logging.getLogger("swaprouter")
    assert logger.propagate is False
    assert len(logger.handlers) == 1

    record = logging.LogRecord("swaprouter", logging.INFO, __file__, 1, "hello", None, None)
    assert logger.handlers[0].format(record).endswith("swaprouter INFO: hello")


def test_checksum_address_is_cached():
    get_checksum_address.cache_clear()
    address = "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"

    assert get_checksum_address(address) == "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
    assert get_checksum_address(address) == "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
    assert get_checksum_address.cache_info().hits == 1
