"""Protocol definitions for gemara-evidence's pluggable architecture."""

from .parser import EvidenceParser

__all__ = [
    "EvidenceParser",
]
