"""Shared fixtures for gemara-evidence tests."""

from __future__ import annotations

import pytest

from gemara_evidence.models.evidence import EvidenceChunk, EvidenceSource

SAMPLE_DEPLOYMENT = """apiVersion: apps/v1
kind: Deployment
metadata:
  name: my-app
spec:
  securityContext:
    runAsNonRoot: true
  containers:
    - name: app
      image: my-app:1.0
      env:
        - name: SECRET
          value: "abc"
"""

SAMPLE_MARKDOWN = (
    "# Section One\nContent of section one.\n\n## Subsection\nMore content here.\n\n"
    "# Section Two\nAnother section."
)

SAMPLE_YAML = 'title: My Policy\nversion: "1.0"\nobjective: Ensure security'

SAMPLE_DOCKERFILE = "FROM ubuntu:22.04\nRUN apt-get install -y ca-certificates\nUSER nonroot\nEXPOSE 8080\n"


class FakeParser:
    """A parser with a fixed verdict that records how often it parsed.

    Satisfies the EvidenceParser protocol for pipeline selection tests.
    """

    def __init__(
        self,
        name: str,
        *,
        handles: bool = True,
        chunks: list[EvidenceChunk] | None = None,
        error: Exception | None = None,
    ) -> None:
        self._name = name
        self._handles = handles
        self._chunks = chunks or []
        self._error = error
        self.parse_calls = 0

    @property
    def name(self) -> str:
        return self._name

    def can_handle(self, source: EvidenceSource) -> bool:
        return self._handles

    def parse(self, source: EvidenceSource, deadline: float | None = None) -> list[EvidenceChunk]:
        self.parse_calls += 1
        if self._error is not None:
            raise self._error
        return list(self._chunks)


def make_source(content: str, fmt: str = "", source_id: str = "test-doc") -> EvidenceSource:
    """Build an EvidenceSource from text."""
    return EvidenceSource(content=content.encode("utf-8"), format=fmt, id=source_id)


def make_chunk(
    text: str,
    *,
    confidence: float = 1.0,
    source_id: str = "doc.md",
    section_path: str = "section",
) -> EvidenceChunk:
    """Build an EvidenceChunk with sensible test defaults."""
    return EvidenceChunk(
        text=text, source_id=source_id, section_path=section_path, confidence=confidence
    )


@pytest.fixture
def deployment_source() -> EvidenceSource:
    """Return the sample Deployment manifest as a source."""
    return make_source(SAMPLE_DEPLOYMENT, source_id="deploy.yaml")


@pytest.fixture
def markdown_source() -> EvidenceSource:
    """Return the three-section Markdown sample as a source."""
    return make_source(SAMPLE_MARKDOWN, source_id="test.md")
