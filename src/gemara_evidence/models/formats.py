"""Document format identifiers."""

from __future__ import annotations

from enum import StrEnum


class DocumentFormat(StrEnum):
    """Names of the built-in parsers, also used as their canonical hints."""

    KUBERNETES = "kubernetes"
    DOCKERFILE = "dockerfile"
    MARKDOWN = "markdown"
    YAML = "yaml"
