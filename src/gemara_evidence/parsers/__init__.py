"""Built-in evidence parsers.

All parsers implement the ``EvidenceParser`` protocol.  Register them
with a pipeline most-specific first: ``KubernetesParser`` and
``DockerfileParser`` before the permissive ``MarkdownParser`` and
``KeyValueParser``.
"""

from .dockerfile import DockerfileParser
from .key_value import KeyValueParser
from .kubernetes import KubernetesParser
from .markdown import MarkdownParser

__all__ = [
    "DockerfileParser",
    "KeyValueParser",
    "KubernetesParser",
    "MarkdownParser",
]
