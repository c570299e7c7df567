"""Lexical mapping of evidence chunks onto compliance schema fields."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from gemara_evidence._text import collapse_lines
from gemara_evidence.config import MAPPING_CONFIDENCE
from gemara_evidence.models.evidence import EvidenceChunk, SchemaCandidate

from .rules import DEFAULT_RULES, FieldRule

logger = logging.getLogger(__name__)


class SchemaMapper:
    """Turn evidence chunks into schema candidates with a keyword table.

    Each chunk maps to at most one candidate: the first rule (in table
    order) with a keyword contained in the lower-cased chunk text wins.
    Chunks matching no rule are dropped.

    Candidate confidence is ``mapping_confidence * chunk.confidence``.
    """

    __slots__ = ("_mapping_confidence", "_rules")

    def __init__(
        self,
        rules: Sequence[FieldRule] = DEFAULT_RULES,
        mapping_confidence: float = MAPPING_CONFIDENCE,
    ) -> None:
        if not 0.0 <= mapping_confidence <= 1.0:
            msg = "mapping_confidence must be between 0.0 and 1.0"
            raise ValueError(msg)
        self._rules: tuple[FieldRule, ...] = tuple(rules)
        self._mapping_confidence = mapping_confidence

    @property
    def rules(self) -> tuple[FieldRule, ...]:
        """The rule table, in evaluation order."""
        return self._rules

    @property
    def mapping_confidence(self) -> float:
        return self._mapping_confidence

    def map(self, chunks: Iterable[EvidenceChunk]) -> list[SchemaCandidate]:
        """Map chunks to candidates, preserving chunk order."""
        candidates: list[SchemaCandidate] = []
        for chunk in chunks:
            candidate = self.map_chunk(chunk)
            if candidate is not None:
                candidates.append(candidate)
        return candidates

    def map_chunk(self, chunk: EvidenceChunk) -> SchemaCandidate | None:
        """Map a single chunk, or return ``None`` when no rule matches."""
        lowered = chunk.text.lower()
        for rule in self._rules:
            if rule.matches(lowered):
                return SchemaCandidate(
                    target_field=rule.target_field,
                    value=collapse_lines(chunk.text),
                    source_ref=f"{chunk.source_id} / {chunk.section_path}",
                    confidence=self._mapping_confidence * chunk.confidence,
                )
        logger.debug("No rule matched chunk %s / %s", chunk.source_id, chunk.section_path)
        return None

    def __repr__(self) -> str:
        return (
            f"SchemaMapper(rules={len(self._rules)}, "
            f"mapping_confidence={self._mapping_confidence})"
        )
