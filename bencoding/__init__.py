from typing import Any

from ._decoder import Decoder, decode, decode_prefix, iter_decode
from ._encoder import encode
from ._exceptions import BencodeDecodeError, BencodeEncodeError, DecodeErrorKind
from ._native import to_python, to_value
from ._types import ByteString, Dictionary, Integer, List, Value


def bencode(obj: Any, /) -> bytes:
    return encode(to_value(obj))


def bdecode(obj: bytes, /) -> Any:
    return to_python(decode(obj))


__all__ = [
    "bencode",
    "BencodeEncodeError",
    "bdecode",
    "BencodeDecodeError",
    "DecodeErrorKind",
    "ByteString",
    "Integer",
    "List",
    "Dictionary",
    "Value",
    "Decoder",
    "decode",
    "decode_prefix",
    "iter_decode",
    "encode",
    "to_value",
    "to_python",
]
