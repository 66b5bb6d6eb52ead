"""
Text template helpers.

Every generated file (runtime code, bootstrap pages, manifests) is produced by
substituting placeholder tokens in a template text.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable
from xml.sax.saxutils import escape

TokenPairs = Iterable[tuple[str, str]]


def replace_tokens(text: str, replacements: TokenPairs) -> str:
    """Substitute tokens in a template text.

    Every occurrence of every token is replaced in a single scan of the
    template, so text inserted for one token is never searched for another.
    Where two tokens match at the same position, the earlier pair wins.

    Args:
        text: Template text.
        replacements: Ordered (token, replacement) pairs.

    Returns:
        The completed text. Tokens absent from the template are ignored.
    """
    values: dict[str, str] = {}
    for token, replacement in replacements:
        if token and token not in values:
            values[token] = replacement
    if not values:
        return text

    pattern = re.compile("|".join(re.escape(token) for token in values))
    return pattern.sub(lambda match: values[match.group(0)], text)


def to_js_string(value: str) -> str:
    """Quote and escape a value as a JavaScript string literal."""
    return json.dumps(value)


def to_json(value: object) -> str:
    """Serialize a value as JSON, which is also a JavaScript expression."""
    return json.dumps(value, ensure_ascii=False)


def to_xml_escaped(value: str) -> str:
    """Escape a value for XML text and attribute content."""
    return escape(value, {'"': "&quot;", "'": "&apos;"})


_MANGLE_SAFE = re.compile(r"[A-Za-z0-9]")


def mangle_name(name: str) -> str:
    """Turn a free-form name into an identifier-safe one.

    Letters and digits are kept, '_' is doubled and any other character becomes
    '_' followed by its code point, so distinct names never collide.
    """
    mangled = []
    for char in name:
        if _MANGLE_SAFE.match(char):
            mangled.append(char)
        elif char == "_":
            mangled.append("__")
        else:
            mangled.append(f"_{ord(char)}")

    result = "".join(mangled)
    if result and result[0].isdigit():
        result = "_" + result
    return result
