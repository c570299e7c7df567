"""The keyword-to-field rule table used by ``SchemaMapper``.

Rules are evaluated in order and the first match wins, so the order of
``DEFAULT_RULES`` is the tie-break policy: identity-like fields come
before broad descriptive ones.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FieldRule(BaseModel):
    """Maps a set of lower-case trigger keywords to one schema field."""

    keywords: tuple[str, ...] = Field(min_length=1)
    target_field: str

    model_config = ConfigDict(frozen=True)

    @field_validator("keywords")
    @classmethod
    def _lowercase_keywords(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(kw.lower() for kw in value)

    def matches(self, lowered_text: str) -> bool:
        """Return ``True`` if any keyword is a substring of *lowered_text*."""
        return any(kw in lowered_text for kw in self.keywords)


DEFAULT_RULES: tuple[FieldRule, ...] = (
    FieldRule(
        keywords=("identifier", "id:", "control id", "policy id"),
        target_field="metadata.id",
    ),
    FieldRule(
        keywords=("title:", "name:", "policy name", "control name"),
        target_field="metadata.title",
    ),
    FieldRule(keywords=("version:", "revision:"), target_field="metadata.version"),
    FieldRule(
        keywords=("objective", "goal", "purpose", "intent"),
        target_field="controls[].objective",
    ),
    FieldRule(
        keywords=("control statement", "requirement", "must ", "shall ", "required to"),
        target_field="controls[].statement",
    ),
    FieldRule(
        keywords=("assessment", "verify", "verification", "audit", "check"),
        target_field="controls[].assessment",
    ),
    FieldRule(
        keywords=("implementation", "procedure", "how to", "steps to"),
        target_field="controls[].implementation",
    ),
    FieldRule(
        keywords=("parameter", "setting", "configuration", "config value"),
        target_field="controls[].parameters[]",
    ),
    FieldRule(
        keywords=("reference", "see also", "related", "maps to"),
        target_field="metadata.references[]",
    ),
    FieldRule(
        keywords=("scope", "applies to", "applicability"),
        target_field="metadata.scope",
    ),
    FieldRule(
        keywords=("description", "overview", "summary", "background"),
        target_field="metadata.description",
    ),
)
