"""Core evidence models: sources, chunks, candidates and run results."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from gemara_evidence._text import decode_bytes
from gemara_evidence.config import DEFAULT_SOURCE_ID


class EvidenceSource(BaseModel):
    """The raw input to one pipeline run.

    ``content`` is the document exactly as received.  ``format`` is an
    optional, caller-supplied hint such as ``"yaml"`` or ``"k8s"``.
    """

    content: bytes
    format: str = ""
    id: str = DEFAULT_SOURCE_ID

    model_config = ConfigDict(frozen=True)

    @property
    def text(self) -> str:
        """The content decoded to text."""
        return decode_bytes(self.content)

    @property
    def hint(self) -> str:
        """The format hint, normalised for case-insensitive comparison."""
        return self.format.strip().lower()


class EvidenceChunk(BaseModel):
    """A provenance-tagged unit of extracted text.

    ``confidence`` reflects the parser's trust in the extraction itself,
    not in the correctness of the content.
    """

    text: str = Field(min_length=1)
    source_id: str
    section_path: str
    confidence: float = Field(ge=0.0, le=1.0)

    model_config = ConfigDict(frozen=True)


class SchemaCandidate(BaseModel):
    """A proposed value for one field of the compliance schema."""

    target_field: str = Field(serialization_alias="field")
    value: str
    source_ref: str = Field(serialization_alias="source")
    confidence: float = Field(ge=0.0, le=1.0)

    model_config = ConfigDict(frozen=True)


class RunResult(BaseModel):
    """Candidates from one pipeline run plus run metadata."""

    candidates: list[SchemaCandidate] = Field(default_factory=list)
    parser_used: str
    chunk_count: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)
