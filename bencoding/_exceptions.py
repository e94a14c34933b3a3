import enum
from typing import Optional


class DecodeErrorKind(enum.Enum):
    INVALID_UTF8 = "invalid utf-8"
    INVALID_INTEGER = "invalid integer"
    UNEXPECTED_END_OF_INPUT = "unexpected end of input"
    UNEXPECTED_CHARACTER = "unexpected character"
    UNEXPECTED_FORMAT = "unexpected format"
    NESTING_TOO_DEEP = "nesting too deep"
    TRAILING_DATA = "trailing data"


class BencodeDecodeError(ValueError):
    """Raised when a buffer is not valid bencode.

    ``kind`` tells what went wrong, ``position`` is the offset into the
    buffer where it was detected. ``character`` is set to the offending
    byte for ``UNEXPECTED_CHARACTER``.
    """

    def __init__(
        self,
        kind: DecodeErrorKind,
        position: int,
        detail: str = "",
        character: Optional[int] = None,
    ) -> None:
        self.kind = kind
        self.position = position
        self.character = character
        msg = f"{kind.value} at offset {position}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class BencodeEncodeError(ValueError):
    pass
