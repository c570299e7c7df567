"""Evidence pipeline: parser selection, parsing and mapping."""

from .callbacks import EvidenceCallback
from .defaults import default_pipeline
from .pipeline import EvidencePipeline

__all__ = [
    "EvidenceCallback",
    "EvidencePipeline",
    "default_pipeline",
]
