import pytest

from bencoding import (
    BencodeDecodeError,
    ByteString,
    Decoder,
    DecodeErrorKind,
    Integer,
    List,
    decode,
    decode_prefix,
    iter_decode,
)


@pytest.mark.parametrize("data", [b"x", b"e", b" i1e", b"-1", b":", b"\x00"])
def test_unexpected_character(data):
    with pytest.raises(BencodeDecodeError) as exc_info:
        decode(data)
    assert exc_info.value.kind is DecodeErrorKind.UNEXPECTED_CHARACTER
    assert exc_info.value.character == data[0]
    assert exc_info.value.position == 0


def test_empty_input():
    with pytest.raises(BencodeDecodeError) as exc_info:
        decode(b"")
    assert exc_info.value.kind is DecodeErrorKind.UNEXPECTED_END_OF_INPUT


def test_is_value_error():
    with pytest.raises(ValueError):
        decode(b"x")


def test_message_names_offset():
    with pytest.raises(BencodeDecodeError, match="offset 4"):
        decode(b"li1ex")


def test_trailing_data():
    with pytest.raises(BencodeDecodeError) as exc_info:
        decode(b"i1ei2e")
    assert exc_info.value.kind is DecodeErrorKind.TRAILING_DATA
    assert exc_info.value.position == 3


@pytest.mark.parametrize("data", ["i1e", 1, None, [b"i1e"]])
def test_rejects_non_bytes(data):
    with pytest.raises(TypeError):
        decode(data)


def test_depth_at_limit():
    depth = 256
    value = decode(b"l" * depth + b"e" * depth)
    for _ in range(depth - 1):
        value = value[0]
    assert value == List()


def test_depth_over_limit():
    with pytest.raises(BencodeDecodeError) as exc_info:
        decode(b"l" * 300 + b"e" * 300)
    assert exc_info.value.kind is DecodeErrorKind.NESTING_TOO_DEEP
    assert exc_info.value.position == 256


def test_depth_counts_dictionaries():
    assert decode(b"d1:ad1:aleee", max_depth=3)
    with pytest.raises(BencodeDecodeError) as exc_info:
        decode(b"d1:ad1:aleee", max_depth=2)
    assert exc_info.value.kind is DecodeErrorKind.NESTING_TOO_DEEP


def test_recursion_limit_is_reported():
    data = b"l" * 100000 + b"e" * 100000
    with pytest.raises(BencodeDecodeError) as exc_info:
        decode(data, max_depth=10**9)
    assert exc_info.value.kind is DecodeErrorKind.NESTING_TOO_DEEP


def test_decode_prefix():
    data = b"i1e4:spamle"
    value, end = decode_prefix(data)
    assert (value, end) == (Integer(1), 3)
    value, end = decode_prefix(data, end)
    assert (value, end) == (ByteString(b"spam"), 9)
    assert decode_prefix(data, end) == (List(), 11)


def test_decode_prefix_bad_start():
    with pytest.raises(ValueError):
        decode_prefix(b"i1e", 4)


def test_iter_decode():
    assert list(iter_decode(b"i1e4:spamle")) == [Integer(1), ByteString(b"spam"), List()]
    assert list(iter_decode(b"")) == []


def test_iter_decode_stops_on_error():
    values = iter_decode(b"i1ex")
    assert next(values) == Integer(1)
    with pytest.raises(BencodeDecodeError):
        next(values)


def test_decoder_cursor():
    decoder = Decoder(b"i1ei2e")
    assert decoder.position == 0
    assert decoder.decode() == Integer(1)
    assert decoder.position == 3
    assert decoder.remaining == 3
    assert decoder.decode() == Integer(2)
    assert decoder.at_end
    with pytest.raises(BencodeDecodeError) as exc_info:
        decoder.decode()
    assert exc_info.value.kind is DecodeErrorKind.UNEXPECTED_END_OF_INPUT


def test_input_is_not_mutated():
    buf = bytearray(b"d3:cow3:mooe")
    decode(buf)
    assert buf == bytearray(b"d3:cow3:mooe")


@pytest.mark.parametrize(("data", "error_position"), [(b"i1e4:spa", 8), (b"i1eli2ei03ee", 7)])
def test_cursor_rewinds_after_failure(data, error_position):
    decoder = Decoder(data)
    assert decoder.decode() == Integer(1)
    with pytest.raises(BencodeDecodeError) as exc_info:
        decoder.decode()
    assert exc_info.value.position == error_position
    assert decoder.position == 3
