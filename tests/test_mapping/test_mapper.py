"""Tests for SchemaMapper and the default rule table."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from gemara_evidence.mapping import DEFAULT_RULES, FieldRule, SchemaMapper
from tests.conftest import make_chunk


class TestRuleTable:
    def test_order_is_preserved(self) -> None:
        assert [r.target_field for r in DEFAULT_RULES] == [
            "metadata.id",
            "metadata.title",
            "metadata.version",
            "controls[].objective",
            "controls[].statement",
            "controls[].assessment",
            "controls[].implementation",
            "controls[].parameters[]",
            "metadata.references[]",
            "metadata.scope",
            "metadata.description",
        ]

    def test_table_is_immutable(self) -> None:
        assert isinstance(DEFAULT_RULES, tuple)
        with pytest.raises(ValidationError):
            DEFAULT_RULES[0].target_field = "x"  # type: ignore[misc]

    def test_keywords_are_lowercased(self) -> None:
        rule = FieldRule(keywords=("Control ID",), target_field="metadata.id")
        assert rule.keywords == ("control id",)

    def test_rule_needs_keywords(self) -> None:
        with pytest.raises(ValidationError):
            FieldRule(keywords=(), target_field="metadata.id")


class TestSchemaMapperMap:
    @pytest.mark.parametrize(
        ("text", "field"),
        [
            ("The objective of this control is to ensure TLS 1.2+", "controls[].objective"),
            ("title: Network Security Policy", "metadata.title"),
            ("Verify that TLS certificates are valid and unexpired", "controls[].assessment"),
            ("Policy ID: AC-2", "metadata.id"),
            ("revision: 4", "metadata.version"),
            ("Operators shall rotate keys yearly", "controls[].statement"),
            ("Procedure for onboarding", "controls[].implementation"),
            ("timeout setting is 30s", "controls[].parameters[]"),
            ("See also NIST 800-53", "metadata.references[]"),
            ("This applies to production systems", "metadata.scope"),
            ("Background on the program", "metadata.description"),
        ],
    )
    def test_keyword_maps_to_field(self, text: str, field: str) -> None:
        candidates = SchemaMapper().map([make_chunk(text)])
        assert len(candidates) == 1
        assert candidates[0].target_field == field

    def test_first_rule_wins(self) -> None:
        # "objective" and "summary" both match; objective precedes description
        candidates = SchemaMapper().map([make_chunk("Summary of the objective")])
        assert candidates[0].target_field == "controls[].objective"

    def test_lexical_miss_produces_nothing(self) -> None:
        assert SchemaMapper().map([make_chunk("Lorem ipsum dolor sit amet")]) == []

    def test_empty_input(self) -> None:
        assert SchemaMapper().map([]) == []

    def test_misses_dropped_and_order_kept(self) -> None:
        chunks = [
            make_chunk("objective one", section_path="a"),
            make_chunk("lorem ipsum", section_path="b"),
            make_chunk("title: two", section_path="c"),
        ]
        candidates = SchemaMapper().map(chunks)
        assert [c.source_ref for c in candidates] == ["doc.md / a", "doc.md / c"]


class TestSchemaMapperCandidate:
    def test_confidence_is_product(self) -> None:
        candidate = SchemaMapper().map_chunk(make_chunk("objective", confidence=0.8))
        assert candidate is not None
        assert candidate.confidence == pytest.approx(0.6)

    @pytest.mark.parametrize("confidence", [1.0, 0.9, 0.85, 0.5, 0.01])
    def test_confidence_never_exceeds_chunk(self, confidence: float) -> None:
        candidate = SchemaMapper().map_chunk(make_chunk("objective", confidence=confidence))
        assert candidate is not None
        assert 0 < candidate.confidence <= confidence

    def test_confidence_propagation(self) -> None:
        candidates = SchemaMapper().map(
            [
                make_chunk("objective: ensure encryption", confidence=1.0, section_path="s1"),
                make_chunk("objective: ensure encryption", confidence=0.5, section_path="s2"),
            ]
        )
        assert candidates[0].confidence > candidates[1].confidence

    def test_value_is_single_line(self) -> None:
        candidate = SchemaMapper().map_chunk(
            make_chunk("  objective:\n\n   encrypt data  \n  at rest\n")
        )
        assert candidate is not None
        assert candidate.value == "objective: encrypt data at rest"

    def test_source_ref(self) -> None:
        candidate = SchemaMapper().map_chunk(
            make_chunk("goal", source_id="policy.md", section_path="Intro")
        )
        assert candidate is not None
        assert candidate.source_ref == "policy.md / Intro"

    def test_custom_rules_and_factor(self) -> None:
        mapper = SchemaMapper(
            rules=[FieldRule(keywords=("encrypt",), target_field="controls[].id")],
            mapping_confidence=0.5,
        )
        candidate = mapper.map_chunk(make_chunk("Encrypt backups"))
        assert candidate is not None
        assert candidate.target_field == "controls[].id"
        assert candidate.confidence == pytest.approx(0.5)

    def test_invalid_factor_rejected(self) -> None:
        with pytest.raises(ValueError, match="mapping_confidence"):
            SchemaMapper(mapping_confidence=1.2)
