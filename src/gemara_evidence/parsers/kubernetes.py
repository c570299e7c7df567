"""Security-focused parser for Kubernetes manifests.

Only the top-level ``apiVersion`` / ``kind`` / ``metadata`` / ``spec``
fields are read, so no Kubernetes client dependency is needed.  From the
pod spec of each document the parser lifts the keys that matter for
security controls (image, securityContext, env, resources, host
namespaces, ...) into their own chunks.
"""

from __future__ import annotations

import logging
import re
from typing import Any

import yaml

from gemara_evidence.config import MANIFEST_IDENTITY_CONFIDENCE, MANIFEST_SPEC_CONFIDENCE
from gemara_evidence.models.evidence import EvidenceChunk, EvidenceSource
from gemara_evidence.models.formats import DocumentFormat

from ._base import check_deadline
from ._yaml import load_yaml
from .key_value import render_compact

logger = logging.getLogger(__name__)

_DOC_SEPARATOR_RE = re.compile(r"^---[ \t]*(?:#.*)?$", re.MULTILINE)

SECURITY_KEYS: tuple[str, ...] = (
    "securityContext",
    "containers",
    "initContainers",
    "volumes",
    "serviceAccountName",
    "hostNetwork",
    "hostPID",
    "hostIPC",
    "resources",
    "env",
    "image",
)

# Where a pod spec lives: bare pods, workload templates, CronJob templates.
_POD_SPEC_PATHS: tuple[tuple[str, ...], ...] = (
    ("spec",),
    ("spec", "template", "spec"),
    ("spec", "jobTemplate", "spec", "template", "spec"),
)


def _dig(document: dict[str, Any], path: tuple[str, ...]) -> dict[str, Any] | None:
    node: Any = document
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node if isinstance(node, dict) else None


def _render_block(value: Any) -> str:
    if isinstance(value, (dict, list)):
        dumped = yaml.safe_dump(
            value, default_flow_style=False, sort_keys=False, allow_unicode=True
        )
        return dumped.strip()
    return render_compact(value)


class KubernetesParser:
    """Parse (multi-document) Kubernetes manifests into evidence chunks.

    Each document yields an ``identity`` chunk (``kind`` + ``apiVersion``)
    and one chunk per security-relevant pod spec key.  A document that
    cannot be decoded is skipped; its siblings are still parsed.

    Implements the ``EvidenceParser`` protocol.
    """

    __slots__ = ("_identity_confidence", "_spec_confidence")

    def __init__(
        self,
        identity_confidence: float = MANIFEST_IDENTITY_CONFIDENCE,
        spec_confidence: float = MANIFEST_SPEC_CONFIDENCE,
    ) -> None:
        self._identity_confidence = identity_confidence
        self._spec_confidence = spec_confidence

    @property
    def name(self) -> str:
        return DocumentFormat.KUBERNETES.value

    @property
    def aliases(self) -> tuple[str, ...]:
        return ("kubernetes", "k8s")

    def can_handle(self, source: EvidenceSource) -> bool:
        if source.hint in self.aliases:
            return True
        content = source.text
        return "apiVersion:" in content and "kind:" in content

    def parse(
        self, source: EvidenceSource, deadline: float | None = None
    ) -> list[EvidenceChunk]:
        """Parse every document of a manifest stream.

        Parameters:
            source: The manifest evidence.
            deadline: Optional monotonic deadline, checked per document.

        Returns:
            Identity and spec chunks for every decodable document.
        """
        documents = [
            doc.strip() for doc in _DOC_SEPARATOR_RE.split(source.text) if doc.strip()
        ]
        chunks: list[EvidenceChunk] = []

        for index, raw in enumerate(documents):
            check_deadline(deadline, "parsing kubernetes manifest")
            try:
                document = load_yaml(raw)
            except yaml.YAMLError as e:
                logger.warning(
                    "Skipping undecodable manifest document %d in %s: %s", index, source.id, e
                )
                continue
            if not isinstance(document, dict):
                logger.warning(
                    "Skipping manifest document %d in %s: not a mapping", index, source.id
                )
                continue
            chunks.extend(self._document_chunks(document, source.id, index))

        logger.debug(
            "Kubernetes parser produced %d chunks from %d documents for %s",
            len(chunks),
            len(documents),
            source.id,
        )
        return chunks

    def _document_chunks(
        self, document: dict[str, Any], source_id: str, index: int
    ) -> list[EvidenceChunk]:
        kind = str(document.get("kind") or "")
        api_version = str(document.get("apiVersion") or "")
        metadata = document.get("metadata")
        name = metadata.get("name") if isinstance(metadata, dict) else None
        resource_ref = f"{kind}/{name if name is not None else api_version} (doc {index})"

        chunks: list[EvidenceChunk] = []
        if kind:
            chunks.append(
                EvidenceChunk(
                    text=f"kind: {kind}\napiVersion: {api_version}",
                    source_id=source_id,
                    section_path=f"{resource_ref} / identity",
                    confidence=self._identity_confidence,
                )
            )

        for path in _POD_SPEC_PATHS:
            pod_spec = _dig(document, path)
            if pod_spec is None:
                continue
            prefix = ".".join(path)
            for key in SECURITY_KEYS:
                if key not in pod_spec:
                    continue
                chunks.append(
                    EvidenceChunk(
                        text=f"{key}:\n{_render_block(pod_spec[key])}",
                        source_id=source_id,
                        section_path=f"{resource_ref} / {prefix}.{key}",
                        confidence=self._spec_confidence,
                    )
                )
        return chunks

    def __repr__(self) -> str:
        return (
            f"KubernetesParser(identity_confidence={self._identity_confidence}, "
            f"spec_confidence={self._spec_confidence})"
        )
