"""Confidence constants and the profile that bundles them.

The defaults are the calibrated values the pipeline ships with.  Build a
``ConfidenceProfile`` and pass it to ``default_pipeline`` to run with a
different calibration.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SOURCE_ID = "unknown"

MARKDOWN_CONFIDENCE = 0.85
KEY_VALUE_CONFIDENCE = 0.80
MANIFEST_IDENTITY_CONFIDENCE = 0.90
MANIFEST_SPEC_CONFIDENCE = 0.88
DOCKERFILE_CONFIDENCE = 0.82
MAPPING_CONFIDENCE = 0.75


class ConfidenceProfile(BaseModel):
    """Per-parser base confidences plus the schema mapping factor.

    Candidate confidence is ``mapping * <parser confidence>``, so every
    value here must stay within ``[0, 1]``.
    """

    markdown: float = Field(default=MARKDOWN_CONFIDENCE, ge=0.0, le=1.0)
    key_value: float = Field(default=KEY_VALUE_CONFIDENCE, ge=0.0, le=1.0)
    manifest_identity: float = Field(default=MANIFEST_IDENTITY_CONFIDENCE, ge=0.0, le=1.0)
    manifest_spec: float = Field(default=MANIFEST_SPEC_CONFIDENCE, ge=0.0, le=1.0)
    dockerfile: float = Field(default=DOCKERFILE_CONFIDENCE, ge=0.0, le=1.0)
    mapping: float = Field(default=MAPPING_CONFIDENCE, ge=0.0, le=1.0)

    model_config = ConfigDict(frozen=True)
