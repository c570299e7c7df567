"""Factory for the standard evidence pipeline."""

from __future__ import annotations

from gemara_evidence.config import ConfidenceProfile
from gemara_evidence.mapping.mapper import SchemaMapper
from gemara_evidence.parsers import (
    DockerfileParser,
    KeyValueParser,
    KubernetesParser,
    MarkdownParser,
)

from .pipeline import EvidencePipeline


def default_pipeline(profile: ConfidenceProfile | None = None) -> EvidencePipeline:
    """Pipeline with every built-in parser, most specific first.

    Registration order:
        1. kubernetes
        2. dockerfile
        3. markdown
        4. yaml

    Parameters:
        profile: Optional confidence calibration. Defaults to the stock
            ``ConfidenceProfile()``.

    Returns:
        A ready-to-run ``EvidencePipeline``.
    """
    profile = profile or ConfidenceProfile()
    return EvidencePipeline(
        parsers=[
            KubernetesParser(
                identity_confidence=profile.manifest_identity,
                spec_confidence=profile.manifest_spec,
            ),
            DockerfileParser(confidence=profile.dockerfile),
            MarkdownParser(confidence=profile.markdown),
            KeyValueParser(confidence=profile.key_value),
        ],
        mapper=SchemaMapper(mapping_confidence=profile.mapping),
    )
