"""gemara-evidence: map governance documents onto compliance schema candidates.

Pipeline:
    EvidencePipeline, EvidenceCallback, default_pipeline

Parsers:
    KubernetesParser, DockerfileParser, MarkdownParser, KeyValueParser

Mapping:
    SchemaMapper, FieldRule, DEFAULT_RULES

Models & Types:
    EvidenceSource, EvidenceChunk, SchemaCandidate, RunResult,
    DocumentFormat, ConfidenceProfile

Protocols (extension points):
    EvidenceParser

Boundary operation:
    parse_governance_document, ParseGovernanceDocumentInput,
    ParseGovernanceDocumentOutput, tool_definition

Exceptions:
    EvidenceError, InvalidInputError, UnsupportedFormatError,
    DocumentDecodeError, ParseFailureError, EvidenceTimeoutError
"""

from importlib.metadata import PackageNotFoundError, version

from gemara_evidence.config import ConfidenceProfile
from gemara_evidence.exceptions import (
    DocumentDecodeError,
    EvidenceError,
    EvidenceTimeoutError,
    InvalidInputError,
    ParseFailureError,
    UnsupportedFormatError,
)
from gemara_evidence.mapping import DEFAULT_RULES, FieldRule, SchemaMapper
from gemara_evidence.models import (
    DocumentFormat,
    EvidenceChunk,
    EvidenceSource,
    RunResult,
    SchemaCandidate,
)
from gemara_evidence.parsers import (
    DockerfileParser,
    KeyValueParser,
    KubernetesParser,
    MarkdownParser,
)
from gemara_evidence.pipeline import EvidenceCallback, EvidencePipeline, default_pipeline
from gemara_evidence.protocols import EvidenceParser
from gemara_evidence.tool import (
    ParseGovernanceDocumentInput,
    ParseGovernanceDocumentOutput,
    parse_governance_document,
    tool_definition,
)

try:
    __version__ = version("gemara-evidence")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = [
    "DEFAULT_RULES",
    "ConfidenceProfile",
    "DockerfileParser",
    "DocumentDecodeError",
    "DocumentFormat",
    "EvidenceCallback",
    "EvidenceChunk",
    "EvidenceError",
    "EvidenceParser",
    "EvidencePipeline",
    "EvidenceSource",
    "EvidenceTimeoutError",
    "FieldRule",
    "InvalidInputError",
    "KeyValueParser",
    "KubernetesParser",
    "MarkdownParser",
    "ParseFailureError",
    "ParseGovernanceDocumentInput",
    "ParseGovernanceDocumentOutput",
    "RunResult",
    "SchemaCandidate",
    "SchemaMapper",
    "UnsupportedFormatError",
    "__version__",
    "default_pipeline",
    "parse_governance_document",
    "tool_definition",
]
