from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any, Union

from . import config

_BytesLike = Union[bytes, bytearray, memoryview]


class Value:
    """Base class of the four bencode node types.

    Nodes are immutable: their contents are fixed by ``__init__`` and any
    later attribute assignment raises ``AttributeError``.
    """

    __slots__ = ()

    kind: str = ""

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")


class ByteString(Value):
    __slots__ = ("_value",)

    kind = "bytestring"

    def __init__(self, value: Union["ByteString", _BytesLike]) -> None:
        if isinstance(value, ByteString):
            value = value.value
        elif not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError(f"ByteString expects bytes, not {type(value)}.")
        # copy, so the node never aliases the caller's buffer
        object.__setattr__(self, "_value", bytes(value))

    @property
    def value(self) -> bytes:
        return self._value

    def __bytes__(self) -> bytes:
        return self._value

    def __len__(self) -> int:
        return len(self._value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ByteString):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash((self.kind, self._value))

    def __reduce__(self):
        return (type(self), (self._value,))

    def __repr__(self) -> str:
        return f"ByteString({self._value!r})"


class Integer(Value):
    __slots__ = ("_value",)

    kind = "integer"

    def __init__(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Integer expects int, not {type(value)}.")
        if not config.INT_MIN <= value <= config.INT_MAX:
            raise ValueError(f"{value} does not fit in a signed 64-bit integer.")
        object.__setattr__(self, "_value", int(value))

    @property
    def value(self) -> int:
        return self._value

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Integer):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash((self.kind, self._value))

    def __reduce__(self):
        return (type(self), (self._value,))

    def __repr__(self) -> str:
        return f"Integer({self._value!r})"


class List(Value, Sequence):
    __slots__ = ("_items",)

    kind = "list"

    def __init__(self, items: Iterable[Value] = ()) -> None:
        items = tuple(items)
        for item in items:
            if not isinstance(item, Value):
                raise TypeError(f"List items must be bencode values, not {type(item)}.")
        object.__setattr__(self, "_items", items)

    @property
    def items(self) -> tuple[Value, ...]:
        return self._items

    def __getitem__(self, index):
        if isinstance(index, slice):
            return List(self._items[index])
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, List):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash((self.kind, self._items))

    def __reduce__(self):
        return (type(self), (self._items,))

    def __repr__(self) -> str:
        return f"List({list(self._items)!r})"


def _key_bytes(key: Any) -> bytes:
    if isinstance(key, ByteString):
        return key.value
    if isinstance(key, (bytes, bytearray, memoryview)):
        return bytes(key)
    raise TypeError(f"Dictionary keys must be bytes, not {type(key)}.")


class Dictionary(Value, Mapping):
    """Mapping of byte string keys to values, kept in canonical key order.

    Accepts a mapping or an iterable of ``(key, value)`` pairs. When a key
    appears more than once the last value wins. Iteration always yields
    keys in ascending byte order, whatever order they were given in.
    """

    __slots__ = ("_keys", "_map")

    kind = "dictionary"

    def __init__(self, items: Union[Mapping, Iterable[tuple[Any, Value]]] = ()) -> None:
        if isinstance(items, Mapping):
            items = items.items()
        merged: dict[bytes, Value] = {}
        for key, value in items:
            if not isinstance(value, Value):
                raise TypeError(f"Dictionary values must be bencode values, not {type(value)}.")
            merged[_key_bytes(key)] = value
        object.__setattr__(self, "_keys", tuple(sorted(merged)))
        object.__setattr__(self, "_map", merged)

    def __getitem__(self, key: Union[ByteString, _BytesLike]) -> Value:
        if isinstance(key, (ByteString, bytearray, memoryview)):
            key = _key_bytes(key)
        return self._map[key]

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._keys)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dictionary):
            return NotImplemented
        return self._map == other._map

    def __hash__(self) -> int:
        return hash((self.kind, tuple((key, self._map[key]) for key in self._keys)))

    def __reduce__(self):
        return (type(self), (self._map,))

    def __repr__(self) -> str:
        body = ", ".join(f"{key!r}: {self._map[key]!r}" for key in self._keys)
        return f"Dictionary({{{body}}})"
