import logging

from ._types import ByteString, Dictionary, Integer, List, Value

logger = logging.getLogger(__name__)


def encode(value: Value, /) -> bytes:
    """Return the canonical bencoding of a value tree.

    The tree is walked with an explicit stack rather than recursion, so
    depth is bounded only by memory. Dictionary keys are emitted in
    ascending byte order.
    """
    if not isinstance(value, Value):
        raise TypeError(f"encode expects a bencode value, not {type(value)}.")

    out: list[bytes] = []
    # entries are either nodes still to expand or raw bytes ready to emit
    stack: list = [value]
    while stack:
        node = stack.pop()
        if isinstance(node, bytes):
            out.append(node)
        elif isinstance(node, ByteString):
            out.append(b"%d:" % len(node))
            out.append(node.value)
        elif isinstance(node, Integer):
            out.append(b"i%de" % node.value)
        elif isinstance(node, List):
            out.append(b"l")
            stack.append(b"e")
            stack.extend(reversed(node.items))
        elif isinstance(node, Dictionary):
            out.append(b"d")
            stack.append(b"e")
            for key in sorted(node, reverse=True):
                stack.append(node[key])
                stack.append(b"%d:%s" % (len(key), key))
        else:
            raise TypeError(f"encode expects a bencode value, not {type(node)}.")

    result = b"".join(out)
    logger.debug("encoded %s into %d bytes", value.kind, len(result))
    return result
