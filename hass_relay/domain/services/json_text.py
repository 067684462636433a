"""Minimal JSON text helpers used on the constrained wire format.

This is not a JSON encoder/decoder. The hub-side decoder relies on this
exact behaviour:

* ``escape`` escapes ``"``, ``\\``, newline and carriage return only. Other
  control characters pass through unchanged.
* ``extract_json_value`` finds ``"<key>":`` and reads the value that
  follows. A quoted value is returned verbatim up to the next unescaped
  ``"``; escape sequences are kept as they are, not decoded.
  An unquoted value (number, ``true``, ``null``...) runs to the next ``,``,
  ``}`` or ``]``.
"""

from typing import Iterable, Tuple

_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
}

_UNQUOTED_TERMINATORS = ",}]"


def escape(text: str) -> str:
    """Escape a string for embedding between JSON double quotes."""
    return "".join(_ESCAPES.get(char, char) for char in text)


def quoted(text: str) -> str:
    return f'"{escape(text)}"'


def json_object(members: Iterable[Tuple[str, str]]) -> str:
    """Join already-encoded ``(key, value)`` members into an object.

    Values are inserted as-is; callers quote strings with ``quoted``.
    """
    return "{" + ",".join(f'"{key}":{value}' for key, value in members) + "}"


def extract_json_value(document: str, key: str) -> str:
    """Return the raw value of ``key`` in ``document`` or ``""``."""
    search_key = f'"{key}":'
    start = document.find(search_key)
    if start == -1:
        return ""

    start += len(search_key)
    while start < len(document) and document[start] in " \t":
        start += 1

    if start >= len(document):
        return ""

    if document[start] == '"':
        start += 1
        end = start
        while end < len(document):
            char = document[end]
            if char == "\\":
                end += 2
                continue
            if char == '"':
                return document[start:end]
            end += 1
        return ""

    end = start
    while end < len(document) and document[end] not in _UNQUOTED_TERMINATORS:
        end += 1
    return document[start:end]
