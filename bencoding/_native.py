from functools import partial
from typing import Any

from . import config
from ._exceptions import BencodeEncodeError
from ._types import ByteString, Dictionary, Integer, List, Value


def _key(key: Any) -> bytes:
    if isinstance(key, str):
        return key.encode("utf-8")
    if isinstance(key, (bytes, bytearray, memoryview)):
        return bytes(key)
    raise TypeError(f"Bencode expects dict key as str|bytes, not {type(key)}.")


def _to_value(obj: Any) -> Value:
    if isinstance(obj, Value):
        return obj
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return ByteString(obj)
    if isinstance(obj, str):
        return ByteString(obj.encode("utf-8"))
    if isinstance(obj, bool):
        raise TypeError("Bencode has no boolean type.")
    if isinstance(obj, int):
        if not config.INT_MIN <= obj <= config.INT_MAX:
            raise BencodeEncodeError(f"{obj} does not fit in a signed 64-bit integer.")
        return Integer(obj)
    if isinstance(obj, (list, tuple)):
        return List(_to_value(item) for item in obj)
    if isinstance(obj, dict):
        pairs: dict[bytes, Value] = {}
        for key, val in obj.items():
            raw = _key(key)
            if raw in pairs:
                raise BencodeEncodeError(f"Duplicated dict key {raw!r} after encoding str keys.")
            pairs[raw] = _to_value(val)
        return Dictionary(pairs)
    raise TypeError(f"Bencode expects int|bytes|str|list|tuple|dict, not {type(obj)}.")


def to_value(obj: Any, /) -> Value:
    """Build a value tree from plain python objects."""
    try:
        return _to_value(obj)
    except RecursionError as exc:
        # also reached by self-referencing containers
        raise BencodeEncodeError("object is nested too deeply to encode.") from exc


def to_python(value: Value, /) -> Any:
    """Turn a value tree back into bytes, int, list and dict objects."""
    if not isinstance(value, Value):
        raise TypeError(f"to_python expects a bencode value, not {type(value)}.")

    result: list = []
    # (node, callback storing the converted node in its parent)
    stack: list = [(value, result.append)]
    while stack:
        node, put = stack.pop()
        if isinstance(node, (ByteString, Integer)):
            put(node.value)
        elif isinstance(node, List):
            items: list = []
            put(items)
            stack.extend((item, items.append) for item in reversed(node.items))
        elif isinstance(node, Dictionary):
            mapping: dict = {}
            put(mapping)
            stack.extend((node[key], partial(mapping.__setitem__, key)) for key in reversed(list(node)))
        else:
            raise TypeError(f"to_python expects a bencode value, not {type(node)}.")
    return result[0]
