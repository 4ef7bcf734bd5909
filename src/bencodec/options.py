"""
Wire constants and decoder settings.
"""
from dataclasses import dataclass
from enum import Enum

INT_BEGIN = b"i"
LIST_BEGIN = b"l"
DICT_BEGIN = b"d"
END = b"e"
COLON = b":"

DEFAULT_MAX_DEPTH = 256   # nested containers allowed before NESTING_TOO_DEEP

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class IntegerWidth(Enum):
    """Range accepted for decoded integers."""
    ARBITRARY = "arbitrary"
    INT64 = "int64"


class KeyOrder(Enum):
    """
    STRICT rejects dictionaries whose keys are not ascending by raw bytes.
    LENIENT accepts them and reorders on ingest; duplicates are still rejected.
    """
    STRICT = "strict"
    LENIENT = "lenient"


@dataclass(frozen=True)
class DecoderOptions:
    max_depth: int = DEFAULT_MAX_DEPTH
    integer_width: IntegerWidth = IntegerWidth.ARBITRARY
    key_order: KeyOrder = KeyOrder.STRICT

    def __post_init__(self):
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise TypeError("max_depth must be an integer")
        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        if not isinstance(self.integer_width, IntegerWidth):
            raise TypeError("integer_width must be an IntegerWidth")
        if not isinstance(self.key_order, KeyOrder):
            raise TypeError("key_order must be a KeyOrder")

    def int_in_range(self, n: int) -> bool:
        if self.integer_width is IntegerWidth.INT64:
            return INT64_MIN <= n <= INT64_MAX
        return True
