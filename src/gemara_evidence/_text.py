"""Shared text helpers used by the models, parsers and mapper."""

from __future__ import annotations

# latin-1 maps every byte, so it terminates the chain
_ENCODINGS = ("utf-8", "cp1252", "latin-1")


def decode_bytes(raw: bytes) -> str:
    """Decode raw document bytes with encoding fallback."""
    for encoding in _ENCODINGS[:-1]:
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError:
            continue

    return raw.decode(_ENCODINGS[-1])


def collapse_lines(text: str) -> str:
    """Join the non-blank, trimmed lines of *text* with single spaces."""
    return " ".join(line.strip() for line in text.splitlines() if line.strip())
