"""The ``parse_governance_document`` operation exposed to callers and agents.

This is the request/response surface around ``EvidencePipeline``: it
validates the request, builds the ``EvidenceSource`` and reshapes the
``RunResult`` into the response payload.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from gemara_evidence.config import DEFAULT_SOURCE_ID
from gemara_evidence.exceptions import InvalidInputError
from gemara_evidence.models.evidence import EvidenceSource, SchemaCandidate
from gemara_evidence.pipeline.defaults import default_pipeline
from gemara_evidence.pipeline.pipeline import EvidencePipeline

logger = logging.getLogger(__name__)

TOOL_NAME = "parse_governance_document"

TOOL_DESCRIPTION = (
    "Parse a governance or technical configuration document and return schema-aligned "
    "candidates for Gemara artifact generation. "
    "Supported formats: markdown, yaml, json, kubernetes, dockerfile. "
    "Each candidate includes a target schema field, a proposed value, its source reference, "
    "and a confidence score. High-confidence candidates (>=0.7) are suitable for automated "
    "artifact generation. Lower-confidence candidates should be reviewed by a human "
    "before inclusion."
)

FORMAT_CHOICES: tuple[str, ...] = ("markdown", "yaml", "json", "kubernetes", "dockerfile")


class ParseGovernanceDocumentInput(BaseModel):
    """Request payload for ``parse_governance_document``."""

    content: str = Field(description="Raw content of the document to parse")
    format: str = Field(
        default="",
        description=(
            "Format hint for the document. One of: markdown, yaml, json, kubernetes, "
            "dockerfile. If omitted, auto-detection is used."
        ),
        json_schema_extra={"enum": list(FORMAT_CHOICES)},
    )
    source_id: str = Field(
        default="",
        description=(
            "Optional identifier for the document (file path, URL, etc.) used in "
            "candidate source references."
        ),
    )

    model_config = ConfigDict(frozen=True)


class ParseGovernanceDocumentOutput(BaseModel):
    """Response payload for ``parse_governance_document``."""

    candidates: list[SchemaCandidate] = Field(default_factory=list)
    parser_used: str
    total_chunks: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)


def parse_governance_document(
    content: str,
    format: str = "",
    source_id: str = "",
    *,
    pipeline: EvidencePipeline | None = None,
) -> ParseGovernanceDocumentOutput:
    """Run the evidence pipeline over one document.

    Parameters:
        content: Raw document text. Must not be empty.
        format: Optional format hint; unrecognised hints fall back to
            content sniffing.
        source_id: Optional document identifier, ``"unknown"`` if empty.
        pipeline: Pipeline to use. A fresh ``default_pipeline()`` is
            built when omitted.

    Returns:
        The candidates plus the parser used and the chunk count.

    Raises:
        InvalidInputError: If *content* is empty or cannot be encoded
            as UTF-8 (lone surrogates).
        UnsupportedFormatError: If no parser claims the document.
        ParseFailureError: If the selected parser cannot decode it.
    """
    if not content:
        msg = "content is required"
        raise InvalidInputError(msg)

    try:
        raw = content.encode("utf-8")
    except UnicodeEncodeError as e:
        msg = f"content is not valid Unicode text: {e.reason} at position {e.start}"
        raise InvalidInputError(msg) from e

    source = EvidenceSource(
        content=raw,
        format=format,
        id=source_id or DEFAULT_SOURCE_ID,
    )
    pipeline = pipeline or default_pipeline()
    result = pipeline.run_with_meta(source)

    logger.info(
        "Parsed %s with %s: %d chunks, %d candidates",
        source.id,
        result.parser_used,
        result.chunk_count,
        len(result.candidates),
    )
    return ParseGovernanceDocumentOutput(
        candidates=result.candidates,
        parser_used=result.parser_used,
        total_chunks=result.chunk_count,
    )


def handle_tool_call(tool_input: dict[str, Any]) -> dict[str, Any]:
    """Validate a raw tool-call payload, run it and return a JSON-ready dict."""
    request = ParseGovernanceDocumentInput.model_validate(tool_input)
    output = parse_governance_document(
        request.content, request.format, request.source_id
    )
    return output.model_dump(by_alias=True)


def tool_definition() -> dict[str, Any]:
    """Provider-agnostic tool definition with the input JSON Schema."""
    schema = ParseGovernanceDocumentInput.model_json_schema()
    schema.pop("title", None)
    return {
        "name": TOOL_NAME,
        "description": TOOL_DESCRIPTION,
        "parameters": schema,
    }
