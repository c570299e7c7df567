"""Data models for gemara-evidence."""

from .evidence import EvidenceChunk, EvidenceSource, RunResult, SchemaCandidate
from .formats import DocumentFormat

__all__ = [
    "DocumentFormat",
    "EvidenceChunk",
    "EvidenceSource",
    "RunResult",
    "SchemaCandidate",
]
