"""Evidence parser protocol definition.

Any object with ``name`` / ``can_handle`` / ``parse`` members matching
these signatures can be registered with an ``EvidencePipeline`` -- no
inheritance required.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from gemara_evidence.models.evidence import EvidenceChunk, EvidenceSource


@runtime_checkable
class EvidenceParser(Protocol):
    """Protocol for per-format evidence parsers.

    Parsers turn the raw bytes of an ``EvidenceSource`` into an ordered
    list of ``EvidenceChunk`` objects.  They must be pure: parsing the
    same source twice yields equal chunks and touches no shared state.
    """

    @property
    def name(self) -> str:
        """Stable identifier used for diagnostics and selection reporting."""
        ...

    def can_handle(self, source: EvidenceSource) -> bool:
        """Return ``True`` if this parser claims *source*.

        The explicit format hint is checked first; content sniffing is
        the fallback.  Must be cheap and deterministic.
        """
        ...

    def parse(
        self, source: EvidenceSource, deadline: float | None = None
    ) -> list[EvidenceChunk]:
        """Split *source* into evidence chunks.

        Parameters:
            source: The evidence to parse.
            deadline: Optional ``time.monotonic()`` timestamp after which
                parsing must stop with ``EvidenceTimeoutError``.

        Returns:
            The chunks in document order.  Empty or whitespace-only
            content yields an empty list, never an error.

        Raises:
            DocumentDecodeError: If the input cannot be decoded at all.
        """
        ...
