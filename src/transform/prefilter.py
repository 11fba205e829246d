# src/transform/prefilter.py — v1
"""Directive prefilter: does a source unit opt into transformation?

Only the leading bytes are examined, so the check costs the same for a
ten-line script and a ten-megabyte bundle.
"""

from __future__ import annotations

# Ordered; matched case-sensitively at offset 0.
DIRECTIVES: tuple[bytes, ...] = (
    b"'use transform'",
    b'"use transform"',
    b"/* @transform */",
    b"/** @transform */",
    b"use-directive",
)

DIRECTIVE_WINDOW = max(len(d) for d in DIRECTIVES)


def should_transform(data: bytes | str) -> bool:
    """Return True iff data starts with one of the recognized directives."""
    if isinstance(data, str):
        head = data[:DIRECTIVE_WINDOW].encode("utf-8")
    else:
        head = bytes(data[:DIRECTIVE_WINDOW])
    return any(head.startswith(directive) for directive in DIRECTIVES)
