"""Tests for EvidencePipeline selection, wrapping and metadata."""

from __future__ import annotations

import pytest

from gemara_evidence.exceptions import (
    DocumentDecodeError,
    EvidenceError,
    EvidenceTimeoutError,
    ParseFailureError,
    UnsupportedFormatError,
)
from gemara_evidence.mapping import SchemaMapper
from gemara_evidence.models.evidence import EvidenceSource
from gemara_evidence.parsers import KeyValueParser, MarkdownParser
from gemara_evidence.pipeline import EvidencePipeline
from tests.conftest import FakeParser, make_chunk, make_source


class TestSelection:
    def test_no_parsers_registered(self) -> None:
        pipeline = EvidencePipeline()
        with pytest.raises(UnsupportedFormatError, match="unsupported evidence format"):
            pipeline.run(make_source("anything", fmt="pdf", source_id="test.pdf"))

    def test_unsupported_error_carries_context(self) -> None:
        pipeline = EvidencePipeline([FakeParser("never", handles=False)])
        with pytest.raises(UnsupportedFormatError) as exc_info:
            pipeline.run(make_source("anything", fmt="pdf", source_id="test.pdf"))
        assert exc_info.value.source_id == "test.pdf"
        assert exc_info.value.format_hint == "pdf"
        assert "'test.pdf'" in str(exc_info.value)
        assert "'pdf'" in str(exc_info.value)

    def test_first_registered_wins(self) -> None:
        first = FakeParser("first", chunks=[make_chunk("objective")])
        second = FakeParser("second", chunks=[make_chunk("objective")])
        result = EvidencePipeline([first, second]).run_with_meta(make_source("x"))
        assert result.parser_used == "first"
        assert first.parse_calls == 1
        assert second.parse_calls == 0

    def test_skips_parsers_that_decline(self) -> None:
        pipeline = EvidencePipeline(
            [FakeParser("no", handles=False), FakeParser("yes")]
        )
        assert pipeline.select_parser(make_source("x")).name == "yes"

    def test_real_parsers_both_matching(self) -> None:
        # markdown sniffs the embedded heading, KeyValueParser accepts the hint
        source = make_source("title: x\n# Heading\nobjective: here", fmt="yaml")
        md_first = EvidencePipeline([MarkdownParser(), KeyValueParser()])
        yaml_first = EvidencePipeline([KeyValueParser(), MarkdownParser()])
        assert md_first.run_with_meta(source).parser_used == "markdown"
        assert yaml_first.run_with_meta(source).parser_used == "yaml"


class TestRegistration:
    def test_registered_parsers(self) -> None:
        pipeline = EvidencePipeline([MarkdownParser(), KeyValueParser()])
        assert pipeline.registered_parsers == ["markdown", "yaml"]

    def test_register_chains_and_appends(self) -> None:
        pipeline = EvidencePipeline().register(MarkdownParser()).register(KeyValueParser())
        assert pipeline.registered_parsers == ["markdown", "yaml"]

    def test_parsers_property_is_a_copy(self) -> None:
        pipeline = EvidencePipeline([MarkdownParser()])
        pipeline.parsers.clear()
        assert pipeline.registered_parsers == ["markdown"]


class TestRun:
    def test_markdown_document(self) -> None:
        pipeline = EvidencePipeline([MarkdownParser()])
        source = make_source(
            "# Network Security\nThe objective of this control is to encrypt all traffic.\n\n"
            "## Assessment\nVerify TLS settings.",
            source_id="policy.md",
        )
        result = pipeline.run_with_meta(source)
        assert result.parser_used == "markdown"
        assert result.chunk_count == 2
        assert [c.target_field for c in result.candidates] == [
            "controls[].objective",
            "controls[].assessment",
        ]

    def test_run_returns_candidates_only(self) -> None:
        pipeline = EvidencePipeline([FakeParser("fake", chunks=[make_chunk("objective")])])
        candidates = pipeline.run(make_source("x"))
        assert len(candidates) == 1

    def test_chunk_count_includes_unmapped_chunks(self) -> None:
        parser = FakeParser("fake", chunks=[make_chunk("lorem"), make_chunk("ipsum")])
        result = EvidencePipeline([parser]).run_with_meta(make_source("x"))
        assert result.chunk_count == 2
        assert result.candidates == []

    def test_custom_mapper_used(self) -> None:
        parser = FakeParser("fake", chunks=[make_chunk("objective")])
        pipeline = EvidencePipeline([parser], mapper=SchemaMapper(mapping_confidence=0.5))
        assert pipeline.run(make_source("x"))[0].confidence == pytest.approx(0.5)

    def test_idempotent(self) -> None:
        pipeline = EvidencePipeline([MarkdownParser(), KeyValueParser()])
        source = make_source("title: A\nobjective: B\nscope: C", source_id="s")
        first = pipeline.run(source)
        second = pipeline.run(EvidenceSource(content=source.content, format="", id="s"))
        assert [c.model_dump_json() for c in first] == [c.model_dump_json() for c in second]


class TestErrors:
    def test_parse_failure_wrapped_with_parser_name(self) -> None:
        pipeline = EvidencePipeline([KeyValueParser()])
        with pytest.raises(ParseFailureError, match="parser 'yaml' failed") as exc_info:
            pipeline.run(make_source("invalid: [unclosed", fmt="yaml"))
        assert exc_info.value.parser_name == "yaml"
        assert isinstance(exc_info.value.__cause__, DocumentDecodeError)

    def test_generic_exception_wrapped(self) -> None:
        parser = FakeParser("boom", error=RuntimeError("something went wrong"))
        with pytest.raises(ParseFailureError) as exc_info:
            EvidencePipeline([parser]).run(make_source("x"))
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert "something went wrong" in str(exc_info.value)

    def test_errors_share_base_class(self) -> None:
        with pytest.raises(EvidenceError):
            EvidencePipeline().run(make_source("x"))

    def test_timeout_not_wrapped(self) -> None:
        parser = FakeParser("slow", error=EvidenceTimeoutError("deadline exceeded"))
        with pytest.raises(EvidenceTimeoutError):
            EvidencePipeline([parser]).run(make_source("x"))

    def test_expired_deadline_stops_real_parser(self) -> None:
        pipeline = EvidencePipeline([MarkdownParser()])
        with pytest.raises(EvidenceTimeoutError, match="markdown"):
            pipeline.run(make_source("# A\nobjective"), timeout=0)
