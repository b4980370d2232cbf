"""Small JSON encoder/decoder used for settings persistence.

The decoder is a single-pass recursive-descent parser that stops at the first
malformed token and reports its 1-based line and column. The encoder accepts
``None``, ``bool``, ``int``, ``float``, ``str``, ``list``, ``tuple`` and
``dict``. Dictionaries keyed by the integers ``1..N`` are treated as dense
arrays so that table-shaped data can be written without conversion.

Empty containers always encode as ``[]``; an empty object therefore decodes
back as an empty list.
"""

from __future__ import annotations

import math
import re
from typing import Any, Dict, List, Optional, Set, Tuple

__all__ = ["JsonError", "EncodeError", "DecodeError", "encode", "decode"]


class JsonError(ValueError):
    """Base class for codec failures."""


class EncodeError(JsonError):
    """Raised when a value cannot be represented as JSON text."""


class DecodeError(JsonError):
    """Raised when JSON text is malformed.

    Parameters
    ----------
    message : str
        Description of the problem.
    line, column : int, optional
        1-based position of the offending character. Both are ``None`` when
        the input was rejected before parsing started.
    """

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None) -> None:
        self.message = message
        self.line = line
        self.column = column
        if line is None:
            super().__init__(message)
        else:
            super().__init__(f"{message} at line {line} col {column}")


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------
_SHORT_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

_ESCAPE_RE = re.compile(r'[\x00-\x1f\\"]')


def _escape_char(match: "re.Match[str]") -> str:
    char = match.group(0)
    return _SHORT_ESCAPES.get(char) or "\\u%04x" % ord(char)


def _encode_string(val: str) -> str:
    return '"' + _ESCAPE_RE.sub(_escape_char, val) + '"'


def _encode_number(val: float) -> str:
    try:
        number = float(val)
    except OverflowError:
        raise EncodeError(f"unexpected number value '{val!r}'") from None
    if math.isnan(number) or math.isinf(number):
        raise EncodeError(f"unexpected number value '{val!r}'")
    return "%.14g" % number


def _is_index(key: Any) -> bool:
    return isinstance(key, int) and not isinstance(key, bool)


def _encode_dict(val: Dict[Any, Any], stack: Set[int]) -> str:
    # Table-shaped input: either empty or indexed from 1.
    if not val or 1 in val:
        if not all(_is_index(key) for key in val):
            raise EncodeError("invalid table: mixed or invalid key types")
        if set(val) != set(range(1, len(val) + 1)):
            raise EncodeError("invalid table: sparse array")
        items = [_encode(val[i], stack) for i in range(1, len(val) + 1)]
        return "[" + ",".join(items) + "]"

    members = []
    for key, item in val.items():
        if not isinstance(key, str):
            raise EncodeError("invalid table: mixed or invalid key types")
        members.append(_encode_string(key) + ":" + _encode(item, stack))
    return "{" + ",".join(members) + "}"


def _encode(val: Any, stack: Set[int]) -> str:
    if val is None:
        return "null"
    if isinstance(val, bool):
        return "true" if val else "false"
    if isinstance(val, (int, float)):
        return _encode_number(val)
    if isinstance(val, str):
        return _encode_string(val)
    if isinstance(val, (list, tuple, dict)):
        ident = id(val)
        if ident in stack:
            raise EncodeError("circular reference")
        stack.add(ident)
        try:
            if isinstance(val, dict):
                return _encode_dict(val, stack)
            return "[" + ",".join(_encode(item, stack) for item in val) + "]"
        finally:
            stack.discard(ident)
    raise EncodeError(f"unexpected type '{type(val).__name__}'")


def encode(val: Any) -> str:
    """Serialise ``val`` to compact JSON text.

    Raises
    ------
    EncodeError
        If ``val`` contains an unsupported type, a non-finite number, a
        sparse or mixed-key table, or a reference cycle.
    """

    return _encode(val, set())


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------
_SPACE_CHARS = " \t\r\n"
_DELIM_CHARS = " \t\r\n]},"
_ESCAPE_CHARS = {
    "\\": "\\",
    '"': '"',
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}
_LITERALS = {"true": True, "false": False, "null": None}
_NUMBER_RE = re.compile(r"-?[0-9]+(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?")
_HEX4_RE = re.compile(r"[0-9a-fA-F]{4}")


class _Parser:
    """Recursive-descent parser over a single JSON document."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.end = len(text)

    def error(self, idx: int, message: str) -> DecodeError:
        line = self.text.count("\n", 0, idx) + 1
        column = idx - self.text.rfind("\n", 0, idx)
        return DecodeError(message, line, column)

    def skip_space(self, idx: int) -> int:
        while idx < self.end and self.text[idx] in _SPACE_CHARS:
            idx += 1
        return idx

    def token_end(self, idx: int) -> int:
        while idx < self.end and self.text[idx] not in _DELIM_CHARS:
            idx += 1
        return idx

    def peek(self, idx: int) -> str:
        return self.text[idx:idx + 1]

    def parse(self, idx: int) -> Tuple[Any, int]:
        char = self.peek(idx)
        if char == '"':
            return self.parse_string(idx)
        if char == "{":
            return self.parse_object(idx)
        if char == "[":
            return self.parse_array(idx)
        if char and char in "-0123456789":
            return self.parse_number(idx)
        if char in ("t", "f", "n"):
            return self.parse_literal(idx)
        if not char:
            raise self.error(idx, "unexpected end of input")
        raise self.error(idx, f"unexpected character '{char}'")

    def hex4(self, idx: int) -> Optional[int]:
        match = _HEX4_RE.match(self.text, idx)
        return int(match.group(0), 16) if match else None

    def parse_unicode_escape(self, idx: int) -> Tuple[str, int]:
        """Decode the ``\\uXXXX`` escape whose backslash is at ``idx``."""

        unit = self.hex4(idx + 2)
        if unit is None:
            raise self.error(idx, "invalid unicode escape in string")
        after = idx + 6
        if 0xDC00 <= unit <= 0xDFFF:
            raise self.error(idx, "unpaired surrogate in unicode escape")
        if 0xD800 <= unit <= 0xDBFF:
            low = self.hex4(after + 2) if self.text.startswith("\\u", after) else None
            if low is None or not 0xDC00 <= low <= 0xDFFF:
                raise self.error(idx, "unpaired surrogate in unicode escape")
            return chr(0x10000 + ((unit - 0xD800) << 10) + (low - 0xDC00)), after + 6
        return chr(unit), after

    def parse_string(self, idx: int) -> Tuple[str, int]:
        text = self.text
        parts: List[str] = []
        j = idx + 1
        start = j
        while j < self.end:
            char = text[j]
            if char < " ":
                raise self.error(j, "control character in string")
            if char == "\\":
                parts.append(text[start:j])
                escape = self.peek(j + 1)
                if escape == "u":
                    decoded, j = self.parse_unicode_escape(j)
                elif escape in _ESCAPE_CHARS:
                    decoded, j = _ESCAPE_CHARS[escape], j + 2
                else:
                    raise self.error(j, f"invalid escape char '{escape}' in string")
                parts.append(decoded)
                start = j
                continue
            if char == '"':
                parts.append(text[start:j])
                return "".join(parts), j + 1
            j += 1
        raise self.error(idx, "expected closing quote for string")

    def parse_number(self, idx: int) -> Tuple[Any, int]:
        end = self.token_end(idx)
        token = self.text[idx:end]
        if not _NUMBER_RE.fullmatch(token):
            raise self.error(idx, f"invalid number '{token}'")
        try:
            if any(c in token for c in ".eE"):
                value: Any = float(token)
            else:
                value = int(token)
        except ValueError:
            raise self.error(idx, f"invalid number '{token}'") from None
        if isinstance(value, float) and math.isinf(value):
            raise self.error(idx, f"invalid number '{token}'")
        return value, end

    def parse_literal(self, idx: int) -> Tuple[Any, int]:
        end = self.token_end(idx)
        word = self.text[idx:end]
        if word not in _LITERALS:
            raise self.error(idx, f"invalid literal '{word}'")
        return _LITERALS[word], end

    def parse_array(self, idx: int) -> Tuple[List[Any], int]:
        result: List[Any] = []
        idx = self.skip_space(idx + 1)
        if self.peek(idx) == "]":
            return result, idx + 1
        while True:
            value, idx = self.parse(idx)
            result.append(value)
            idx = self.skip_space(idx)
            char = self.peek(idx)
            if char == "]":
                return result, idx + 1
            if char != ",":
                raise self.error(idx, "expected ']' or ','")
            idx = self.skip_space(idx + 1)

    def parse_object(self, idx: int) -> Tuple[Dict[str, Any], int]:
        result: Dict[str, Any] = {}
        idx = self.skip_space(idx + 1)
        if self.peek(idx) == "}":
            return result, idx + 1
        while True:
            if self.peek(idx) != '"':
                raise self.error(idx, "expected string for key")
            key, idx = self.parse_string(idx)
            idx = self.skip_space(idx)
            if self.peek(idx) != ":":
                raise self.error(idx, "expected ':' after key")
            value, idx = self.parse(self.skip_space(idx + 1))
            result[key] = value
            idx = self.skip_space(idx)
            char = self.peek(idx)
            if char == "}":
                return result, idx + 1
            if char != ",":
                raise self.error(idx, "expected '}' or ','")
            idx = self.skip_space(idx + 1)


def decode(text: str) -> Any:
    """Parse a JSON document.

    Parameters
    ----------
    text : str
        The complete document. Leading and trailing whitespace is ignored.

    Returns
    -------
    Any
        ``dict``, ``list``, ``str``, ``int``, ``float``, ``bool`` or ``None``.

    Raises
    ------
    DecodeError
        On the first malformed token, on trailing non-whitespace, or when
        ``text`` is not a string.
    """

    if not isinstance(text, str):
        raise DecodeError(f"expected argument of type string, got {type(text).__name__}")
    parser = _Parser(text)
    value, idx = parser.parse(parser.skip_space(0))
    idx = parser.skip_space(idx)
    if idx < parser.end:
        raise parser.error(idx, "trailing garbage")
    return value
