"""Helpers shared by the built-in parsers."""

from __future__ import annotations

import time

from gemara_evidence.exceptions import EvidenceTimeoutError


def check_deadline(deadline: float | None, where: str) -> None:
    """Raise ``EvidenceTimeoutError`` if *deadline* has already passed."""
    if deadline is not None and time.monotonic() >= deadline:
        msg = f"deadline exceeded while {where}"
        raise EvidenceTimeoutError(msg)
