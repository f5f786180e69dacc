# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Percent-encoding primitives used by every other component.

Purpose
=======
``encode_component`` mirrors the generic URI-component escaping of browsers
(``encodeURIComponent``) and additionally escapes the apostrophe, so the
output can be dropped inside an HTML attribute as-is.

``decode_component`` is tolerant: it never raises, whatever the input.

Decoding Schema::

    "caf%C3%A9+bar%E0%80%80%zz"
            │
            ├── "+"                     → " "
            ├── "%C3%A9"  (valid UTF-8) → "é"
            ├── "%E0%80%80" (overlong)  → kept as "%E0%80%80"
            └── "%zz"    (not an escape)→ kept as "%zz"
            ↓
    "café bar%E0%80%80%zz"

Legacy Guards
=============
Stored references predate UTF-8 percent-encoding, so bytes that do not form
a valid UTF-8 sequence are left untouched instead of being replaced:

- a run ``%E0%xx%yy`` whose second byte is below ``0xA0`` is never decoded
  (it would re-decode text that was already decoded once);
- two-byte runs led by ``%C0`` or ``%C1`` are never decoded (overlong);
- any other lone byte ``>= 0x80`` stays as its ``%XX`` text.

Bytes below ``0x80`` always decode to their code unit.
"""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import quote

__all__ = ["encode_component", "decode_component"]

# encodeURIComponent keeps "-_.!~*'()" unescaped; the apostrophe is dropped
# from the safe set so it comes out as %27.
_COMPONENT_SAFE = "-_.!~*()"

_ESCAPE_RUN_RE = re.compile(r"(?:%[0-9A-Fa-f]{2})+")


def encode_component(value: Any) -> str:
    """
    Percent-encode a URI component.

    Args:
        value: Text to encode. Non-string values are converted with ``str()``.

    Returns:
        The encoded component, with ``'`` written as ``%27``.

    Example:
        >>> encode_component("héllo'world")
        'h%C3%A9llo%27world'
    """
    if not isinstance(value, str):
        value = str(value)
    return quote(value, safe=_COMPONENT_SAFE, errors="surrogatepass")


def _sequence_length(lead: int) -> int:
    """Expected UTF-8 sequence length for a lead byte, 0 if it cannot lead."""
    if lead < 0x80:
        return 1
    if 0xC2 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF4:
        return 4
    return 0


def _decode_run(run: str) -> str:
    """Decode one run of consecutive ``%XX`` triplets."""
    data = bytes.fromhex(run.replace("%", ""))
    out: list[str] = []
    i = 0
    while i < len(data):
        lead = data[i]
        size = _sequence_length(lead)
        if size == 1:
            out.append(chr(lead))
            i += 1
            continue
        if size and i + size <= len(data):
            try:
                out.append(data[i : i + size].decode("utf-8"))
            except UnicodeDecodeError:
                pass
            else:
                i += size
                continue
        # not valid UTF-8 at this position: keep the escape text
        out.append(run[i * 3 : i * 3 + 3])
        i += 1
    return "".join(out)


def decode_component(value: str) -> str:
    """
    Decode a percent-encoded URI component, treating ``+`` as a space.

    Never raises: malformed escapes and byte sequences that are not valid
    UTF-8 are passed through unchanged.

    Args:
        value: Encoded text.

    Returns:
        Decoded text.

    Example:
        >>> decode_component("h%C3%A9llo+world%27")
        "héllo world'"
    """
    if not value:
        return ""
    value = value.replace("+", " ")
    if "%" not in value:
        return value
    return _ESCAPE_RUN_RE.sub(lambda match: _decode_run(match.group(0)), value)
