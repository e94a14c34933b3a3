__all__ = [
    "INT_MIN",
    "INT_MAX",
    "MAX_DEPTH",
    "REJECT_DUPLICATE_KEYS",
    "LOG_FORMAT",
    "LOG_DATE_FORMAT",
]

# signed 64-bit
INT_MIN: int = -(2**63)
INT_MAX: int = 2**63 - 1

# Each nesting level costs a few interpreter frames, keep well under the
# default recursion limit.
MAX_DEPTH: int = 256

REJECT_DUPLICATE_KEYS: bool = False

LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"
