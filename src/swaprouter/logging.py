import logging

"""
Create the package logger. Records are not propagated to the root logger.
"""

logger = logging.getLogger("swaprouter")
logger.propagate = False
logger.setLevel(logging.INFO)

_handler = logging.StreamHandler()
_handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s: %(message)s"))
logger.addHandler(_handler)
