"""Instruction-level parser for Dockerfile build recipes."""

from __future__ import annotations

import logging
import re

from gemara_evidence.config import DOCKERFILE_CONFIDENCE
from gemara_evidence.models.evidence import EvidenceChunk, EvidenceSource
from gemara_evidence.models.formats import DocumentFormat

from ._base import check_deadline

logger = logging.getLogger(__name__)

_DIRECTIVE_RE = re.compile(r"^#\s*(syntax|escape|check)\s*=\s*(\S+)", re.IGNORECASE)
_FROM_RE = re.compile(r"^FROM\s")
_DEFAULT_ESCAPE = "\\"


def _split_directives(lines: list[str]) -> tuple[dict[str, str], int]:
    """Read BuildKit parser directives from the top of a Dockerfile.

    Returns the directives and the index of the first line after them.
    """
    directives: dict[str, str] = {}
    for idx, line in enumerate(lines):
        match = _DIRECTIVE_RE.match(line.strip())
        if not match:
            return directives, idx
        directives[match.group(1).lower()] = match.group(2)
    return directives, len(lines)


class DockerfileParser:
    """Split a Dockerfile into one chunk per instruction.

    Comments and blank lines are dropped, continuation lines are joined
    onto their instruction, and the upper-cased instruction keyword plus
    its starting line number form the section path
    (e.g. ``USER (line 4)``).

    Implements the ``EvidenceParser`` protocol.
    """

    __slots__ = ("_confidence",)

    def __init__(self, confidence: float = DOCKERFILE_CONFIDENCE) -> None:
        self._confidence = confidence

    @property
    def name(self) -> str:
        return DocumentFormat.DOCKERFILE.value

    @property
    def aliases(self) -> tuple[str, ...]:
        return ("dockerfile",)

    def can_handle(self, source: EvidenceSource) -> bool:
        if source.hint in self.aliases:
            return True
        lines = source.text.strip().split("\n")
        _, start = _split_directives(lines)
        remaining = "\n".join(lines[start:]).lstrip()
        return bool(_FROM_RE.match(remaining))

    def parse(
        self, source: EvidenceSource, deadline: float | None = None
    ) -> list[EvidenceChunk]:
        """Parse a Dockerfile into instruction chunks.

        Parameters:
            source: The build recipe evidence.
            deadline: Optional monotonic deadline.

        Returns:
            One chunk per instruction, in file order.
        """
        lines = source.text.split("\n")
        directives, start = _split_directives(lines)
        escape = directives.get("escape", _DEFAULT_ESCAPE)

        chunks: list[EvidenceChunk] = []
        pending: list[str] = []
        pending_line = 0

        def emit() -> None:
            text = "\n".join(pending).strip()
            if not text:
                return
            keyword = text.split(None, 1)[0].upper()
            chunks.append(
                EvidenceChunk(
                    text=text,
                    source_id=source.id,
                    section_path=f"{keyword} (line {pending_line})",
                    confidence=self._confidence,
                )
            )

        for number, raw in enumerate(lines[start:], start=start + 1):
            check_deadline(deadline, "parsing dockerfile")
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            if not pending:
                pending_line = number
            if line.endswith(escape):
                pending.append(line[: -len(escape)].rstrip())
                continue
            pending.append(line)
            emit()
            pending = []
        emit()

        logger.debug("Dockerfile parser produced %d chunks for %s", len(chunks), source.id)
        return chunks

    def __repr__(self) -> str:
        return f"DockerfileParser(confidence={self._confidence})"
