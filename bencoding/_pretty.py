from ._types import ByteString, Dictionary, Integer, List, Value

_INDENT = "  "
_HEX_PREVIEW = 16


def _bytes_text(raw: bytes) -> str:
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        text = None
    if text is not None and text.isprintable():
        return repr(text)
    preview = raw[:_HEX_PREVIEW].hex()
    if len(raw) > _HEX_PREVIEW:
        preview += "..."
    return f"<{len(raw)} bytes: {preview}>"


def _format(value: Value, depth: int, lines: list[str], prefix: str) -> None:
    pad = _INDENT * depth
    if isinstance(value, ByteString):
        lines.append(f"{pad}{prefix}{_bytes_text(value.value)}")
    elif isinstance(value, Integer):
        lines.append(f"{pad}{prefix}{value.value}")
    elif isinstance(value, List):
        if not value:
            lines.append(f"{pad}{prefix}[]")
            return
        lines.append(f"{pad}{prefix}[")
        for item in value:
            _format(item, depth + 1, lines, "")
        lines.append(f"{pad}]")
    elif isinstance(value, Dictionary):
        if not value:
            lines.append(f"{pad}{prefix}{{}}")
            return
        lines.append(f"{pad}{prefix}{{")
        for key, item in value.items():
            _format(item, depth + 1, lines, f"{_bytes_text(key)}: ")
        lines.append(f"{pad}}}")
    else:
        raise TypeError(f"format_value expects a bencode value, not {type(value)}.")


def format_value(value: Value) -> str:
    """Render a value tree as indented text.

    Byte strings that are printable UTF-8 are shown as text, anything else
    as a length and a hex preview.
    """
    lines: list[str] = []
    _format(value, 0, lines, "")
    return "\n".join(lines)
