import logging
import re
from collections.abc import Iterator
from typing import Optional, Union

from . import config
from ._exceptions import BencodeDecodeError, DecodeErrorKind
from ._types import ByteString, Dictionary, Integer, List, Value

logger = logging.getLogger(__name__)

_BytesLike = Union[bytes, bytearray, memoryview]

_INT = ord("i")
_LIST = ord("l")
_DICT = ord("d")
_END = ord("e")
_ZERO = ord("0")
_NINE = ord("9")

_LENGTH_REGEX = re.compile(r"[0-9]+")
_INT_REGEX = re.compile(r"0|-?[1-9][0-9]*")
# len(str(2**63)), anything longer cannot be a 64-bit integer
_MAX_INT_DIGITS = 19


class Decoder:
    """Recursive descent parser over a bencode buffer.

    ``position`` is the cursor: every call to :meth:`decode` parses one value
    starting there and leaves it on the first byte after that value. After a
    failure the cursor is moved back to where that value started; the
    error's ``position`` tells where the problem was found.
    """

    def __init__(
        self,
        buffer: _BytesLike,
        *,
        start: int = 0,
        max_depth: Optional[int] = None,
        reject_duplicate_keys: Optional[bool] = None,
    ) -> None:
        if not isinstance(buffer, (bytes, bytearray, memoryview)):
            raise TypeError(f"Decoder expects bytes, not {type(buffer)}.")
        self._buffer = bytes(buffer)
        if not 0 <= start <= len(self._buffer):
            raise ValueError(f"start offset {start} is outside the buffer.")
        self.position = start
        self._max_depth = config.MAX_DEPTH if max_depth is None else max_depth
        if reject_duplicate_keys is None:
            reject_duplicate_keys = config.REJECT_DUPLICATE_KEYS
        self._reject_duplicate_keys = reject_duplicate_keys
        self._depth = 0

    @property
    def at_end(self) -> bool:
        return self.position >= len(self._buffer)

    @property
    def remaining(self) -> int:
        return max(len(self._buffer) - self.position, 0)

    def decode(self) -> Value:
        start = self.position
        self._depth = 0
        try:
            value = self._decode_value()
        except BencodeDecodeError as exc:
            self.position = start
            logger.debug("decode failed: %s (kind=%s)", exc, exc.kind.name)
            raise
        except RecursionError as exc:
            self.position = start
            raise BencodeDecodeError(
                DecodeErrorKind.NESTING_TOO_DEEP,
                start,
                "interpreter recursion limit reached",
            ) from exc
        logger.debug("decoded %s from offset %d to %d", value.kind, start, self.position)
        return value

    def _peek(self) -> Optional[int]:
        if self.position >= len(self._buffer):
            return None
        return self._buffer[self.position]

    def _error(self, kind: DecodeErrorKind, detail: str = "", position: Optional[int] = None) -> BencodeDecodeError:
        return BencodeDecodeError(kind, self.position if position is None else position, detail)

    def _decode_value(self) -> Value:
        char = self._peek()
        if char is None:
            raise self._error(DecodeErrorKind.UNEXPECTED_END_OF_INPUT)
        if char == _INT:
            return self._decode_integer()
        if char == _LIST:
            return self._decode_list()
        if char == _DICT:
            return self._decode_dictionary()
        if _ZERO <= char <= _NINE:
            return self._decode_bytestring()
        raise BencodeDecodeError(
            DecodeErrorKind.UNEXPECTED_CHARACTER,
            self.position,
            repr(bytes([char])),
            character=char,
        )

    def _read_until(self, delimiter: bytes) -> bytes:
        end = self._buffer.find(delimiter, self.position)
        if end == -1:
            raise self._error(
                DecodeErrorKind.UNEXPECTED_END_OF_INPUT,
                f"missing {delimiter!r}",
                position=len(self._buffer),
            )
        span = self._buffer[self.position:end]
        self.position = end + 1
        return span

    def _text(self, span: bytes, offset: int) -> str:
        try:
            return span.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise self._error(DecodeErrorKind.INVALID_UTF8, exc.reason, position=offset + exc.start) from exc

    def _decode_bytestring(self) -> ByteString:
        start = self.position
        text = self._text(self._read_until(b":"), start)
        if not _LENGTH_REGEX.fullmatch(text):
            raise self._error(DecodeErrorKind.INVALID_INTEGER, f"bad length {text!r}", position=start)

        begin = self.position
        remaining = len(self._buffer) - begin
        digits = text.lstrip("0") or "0"
        # compare digit counts first so a huge length is never converted
        if len(digits) > len(str(remaining)) or int(digits) > remaining:
            raise self._error(
                DecodeErrorKind.UNEXPECTED_END_OF_INPUT,
                f"byte string needs {digits} bytes, {remaining} left",
                position=len(self._buffer),
            )
        self.position = begin + int(digits)
        return ByteString(self._buffer[begin:self.position])

    def _decode_integer(self) -> Integer:
        start = self.position
        self.position += 1
        text = self._text(self._read_until(b"e"), start + 1)

        if not text:
            raise self._error(DecodeErrorKind.INVALID_INTEGER, "empty integer", position=start)
        if len(text) > 1 and text.startswith("0"):
            raise self._error(DecodeErrorKind.INVALID_INTEGER, "leading zero", position=start)
        if text == "-0":
            raise self._error(DecodeErrorKind.INVALID_INTEGER, "negative zero", position=start)
        if not _INT_REGEX.fullmatch(text):
            raise self._error(DecodeErrorKind.INVALID_INTEGER, f"{text!r} is not a decimal integer", position=start)

        if len(text.lstrip("-")) > _MAX_INT_DIGITS or not config.INT_MIN <= int(text) <= config.INT_MAX:
            raise self._error(DecodeErrorKind.INVALID_INTEGER, f"integer overflow: {text}", position=start)
        return Integer(int(text))

    def _enter(self) -> None:
        self._depth += 1
        if self._depth > self._max_depth:
            raise self._error(DecodeErrorKind.NESTING_TOO_DEEP, f"more than {self._max_depth} levels")

    def _decode_list(self) -> List:
        self._enter()
        self.position += 1
        items = []
        while True:
            char = self._peek()
            if char is None:
                raise self._error(DecodeErrorKind.UNEXPECTED_END_OF_INPUT, "unterminated list")
            if char == _END:
                break
            items.append(self._decode_value())
        self.position += 1
        self._depth -= 1
        return List(items)

    def _decode_dictionary(self) -> Dictionary:
        self._enter()
        self.position += 1
        pairs: dict[bytes, Value] = {}
        while True:
            char = self._peek()
            if char is None:
                raise self._error(DecodeErrorKind.UNEXPECTED_END_OF_INPUT, "unterminated dictionary")
            if char == _END:
                break
            if not _ZERO <= char <= _NINE:
                raise self._error(DecodeErrorKind.UNEXPECTED_FORMAT, "dictionary key must be a byte string")

            key_start = self.position
            key = self._decode_bytestring().value
            if self._reject_duplicate_keys and key in pairs:
                raise self._error(DecodeErrorKind.UNEXPECTED_FORMAT, f"duplicate key {key!r}", position=key_start)
            pairs[key] = self._decode_value()
        self.position += 1
        self._depth -= 1
        return Dictionary(pairs)


def decode(
    buffer: _BytesLike,
    /,
    *,
    max_depth: Optional[int] = None,
    reject_duplicate_keys: Optional[bool] = None,
) -> Value:
    """Decode a buffer holding exactly one bencoded value."""
    decoder = Decoder(buffer, max_depth=max_depth, reject_duplicate_keys=reject_duplicate_keys)
    value = decoder.decode()
    if not decoder.at_end:
        raise BencodeDecodeError(
            DecodeErrorKind.TRAILING_DATA,
            decoder.position,
            f"{decoder.remaining} bytes after the value",
        )
    return value


def decode_prefix(
    buffer: _BytesLike,
    /,
    start: int = 0,
    *,
    max_depth: Optional[int] = None,
    reject_duplicate_keys: Optional[bool] = None,
) -> tuple[Value, int]:
    """Decode one value at ``start``.

    Returns the value and the offset of the first byte after it, so the
    rest of the buffer can be handed back in.
    """
    decoder = Decoder(buffer, start=start, max_depth=max_depth, reject_duplicate_keys=reject_duplicate_keys)
    value = decoder.decode()
    return value, decoder.position


def iter_decode(
    buffer: _BytesLike,
    /,
    *,
    max_depth: Optional[int] = None,
    reject_duplicate_keys: Optional[bool] = None,
) -> Iterator[Value]:
    decoder = Decoder(buffer, max_depth=max_depth, reject_duplicate_keys=reject_duplicate_keys)
    while not decoder.at_end:
        yield decoder.decode()
