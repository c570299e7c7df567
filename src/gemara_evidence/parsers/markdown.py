"""Heading-delimited parser for Markdown governance documents."""

from __future__ import annotations

import logging

from gemara_evidence.config import MARKDOWN_CONFIDENCE
from gemara_evidence.models.evidence import EvidenceChunk, EvidenceSource
from gemara_evidence.models.formats import DocumentFormat

from ._base import check_deadline

logger = logging.getLogger(__name__)

_PREAMBLE = "preamble"


class MarkdownParser:
    """Split Markdown prose into one chunk per heading section.

    Every line starting with ``#`` opens a new section whose body runs
    until the next heading.  Body text before the first heading becomes a
    ``preamble`` chunk.  Sections without body text produce no chunk.

    Implements the ``EvidenceParser`` protocol.
    """

    __slots__ = ("_confidence",)

    def __init__(self, confidence: float = MARKDOWN_CONFIDENCE) -> None:
        self._confidence = confidence

    @property
    def name(self) -> str:
        return DocumentFormat.MARKDOWN.value

    @property
    def aliases(self) -> tuple[str, ...]:
        return ("markdown", "md")

    def can_handle(self, source: EvidenceSource) -> bool:
        if source.hint in self.aliases:
            return True
        content = source.text.strip()
        return content.startswith("#") or "\n#" in content

    def parse(
        self, source: EvidenceSource, deadline: float | None = None
    ) -> list[EvidenceChunk]:
        """Parse a Markdown document into heading sections.

        Parameters:
            source: The Markdown evidence.
            deadline: Optional monotonic deadline.

        Returns:
            One chunk per non-empty section, in document order.
        """
        chunks: list[EvidenceChunk] = []
        heading = ""
        body: list[str] = []

        def flush() -> None:
            text = "\n".join(body).strip()
            if not text:
                return
            chunks.append(
                EvidenceChunk(
                    text=text,
                    source_id=source.id,
                    section_path=heading or _PREAMBLE,
                    confidence=self._confidence,
                )
            )

        for line in source.text.split("\n"):
            check_deadline(deadline, "parsing markdown")
            if line.startswith("#"):
                flush()
                heading = line.lstrip("#").strip()
                body = []
            else:
                body.append(line)
        flush()

        logger.debug("Markdown parser produced %d chunks for %s", len(chunks), source.id)
        return chunks

    def __repr__(self) -> str:
        return f"MarkdownParser(confidence={self._confidence})"
