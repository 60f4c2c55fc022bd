"""Utility helpers for compact encoding of tile sequences.

Format strategy:
  - Input: the row-major tile string of a map, one char per tile (``WWFFF...``).
  - We run-length encode it and prefix with an 'R:' marker.
  - If the compressed payload is not shorter than raw, we return the raw source.

Compressed grammar (simple):
  R:<count><char><count><char>...   e.g. R:12W3F1W

Limitations:
  - Tile characters must not be digits.
  - Falls back to raw if encoding would not save space.
"""

from __future__ import annotations

import re

_RUN = re.compile(r"(\d+)(\D)")


def compress_tiles(raw: str) -> str:
    """Return the run-length encoded form of a tile string.

    Args:
        raw: Row-major tile string (e.g. ``"WWWWFFW"``).

    Returns:
        Compressed string starting with ``R:`` or the original input if no
        size benefit.
    """
    if not raw:
        return raw
    pieces = []
    run_char = raw[0]
    run_len = 0
    for ch in raw:
        if ch == run_char:
            run_len += 1
            continue
        pieces.append(f"{run_len}{run_char}")
        run_char, run_len = ch, 1
    pieces.append(f"{run_len}{run_char}")
    compressed = "R:" + "".join(pieces)
    return compressed if len(compressed) < len(raw) else raw


def decompress_tiles(data: str) -> str:
    """Inverse of :func:`compress_tiles`.

    If the input does not start with ``R:`` the data is returned unchanged.
    On parsing failure an empty string is returned (caller should treat empty
    as a failed decode).
    """
    if not data or not data.startswith("R:"):
        return data
    body = data[2:]
    out = []
    pos = 0
    for m in _RUN.finditer(body):
        if m.start() != pos:
            return ""
        out.append(m.group(2) * int(m.group(1)))
        pos = m.end()
    if pos != len(body):
        return ""
    return "".join(out)


__all__ = ["compress_tiles", "decompress_tiles"]
