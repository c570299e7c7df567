"""Top-level key parser for YAML and JSON configuration documents."""

from __future__ import annotations

import json
import logging
from typing import Any

import yaml

from gemara_evidence.config import KEY_VALUE_CONFIDENCE
from gemara_evidence.exceptions import DocumentDecodeError
from gemara_evidence.models.evidence import EvidenceChunk, EvidenceSource
from gemara_evidence.models.formats import DocumentFormat

from ._base import check_deadline
from ._yaml import load_yaml

logger = logging.getLogger(__name__)


def render_compact(value: Any) -> str:
    """Re-serialize a decoded value as a short YAML string.

    Collections use YAML flow style so a whole subtree fits on one line;
    scalars are rendered the way they would appear in a YAML document.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (dict, list)):
        dumped = yaml.safe_dump(
            value,
            default_flow_style=True,
            sort_keys=False,
            allow_unicode=True,
            width=float("inf"),
        )
        return dumped.strip()
    return str(value)


def _looks_like_json(content: str) -> bool:
    return content.startswith(("{", "["))


class KeyValueParser:
    """Flatten a YAML or JSON document into one chunk per top-level key.

    Keys are emitted in document order, each as ``key: value`` with the
    value re-serialized compactly.  The key name is the section path.

    Implements the ``EvidenceParser`` protocol.
    """

    __slots__ = ("_confidence",)

    def __init__(self, confidence: float = KEY_VALUE_CONFIDENCE) -> None:
        self._confidence = confidence

    @property
    def name(self) -> str:
        return DocumentFormat.YAML.value

    @property
    def aliases(self) -> tuple[str, ...]:
        return ("yaml", "yml", "json")

    def can_handle(self, source: EvidenceSource) -> bool:
        if source.hint in self.aliases:
            return True
        content = source.text.strip()
        if not content:
            return False
        if content.startswith("{"):
            return True
        # A "key: value" first line, unless it belongs to a Dockerfile or Markdown
        first_line = content.split("\n", 1)[0]
        if ":" not in first_line:
            return False
        return not content.startswith(("#", "FROM"))

    def parse(
        self, source: EvidenceSource, deadline: float | None = None
    ) -> list[EvidenceChunk]:
        """Parse a YAML or JSON mapping into per-key chunks.

        Parameters:
            source: The configuration evidence.
            deadline: Optional monotonic deadline.

        Returns:
            One chunk per top-level key.

        Raises:
            DocumentDecodeError: If the content is not valid YAML/JSON or
                its top level is not a mapping.
        """
        content = source.text.strip()
        if not content:
            return []

        document = self._decode(content)
        if document is None:
            return []
        if not isinstance(document, dict):
            msg = f"expected a mapping at the top level, got {type(document).__name__}"
            raise DocumentDecodeError(msg)

        chunks: list[EvidenceChunk] = []
        for key, value in document.items():
            check_deadline(deadline, "parsing key-value document")
            text = f"{key}: {render_compact(value)}".strip()
            chunks.append(
                EvidenceChunk(
                    text=text,
                    source_id=source.id,
                    section_path=str(key),
                    confidence=self._confidence,
                )
            )

        logger.debug("Key-value parser produced %d chunks for %s", len(chunks), source.id)
        return chunks

    def _decode(self, content: str) -> Any:
        if _looks_like_json(content):
            try:
                return json.loads(content)
            except json.JSONDecodeError:
                logger.debug("Content is not strict JSON, retrying as YAML")
        try:
            return load_yaml(content)
        except yaml.YAMLError as e:
            msg = f"failed to decode YAML/JSON: {e}"
            raise DocumentDecodeError(msg) from e

    def __repr__(self) -> str:
        return f"KeyValueParser(confidence={self._confidence})"
