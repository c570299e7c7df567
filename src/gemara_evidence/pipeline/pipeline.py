"""EvidencePipeline -- parser selection, parsing and schema mapping."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from typing import Any

from gemara_evidence.exceptions import (
    EvidenceTimeoutError,
    ParseFailureError,
    UnsupportedFormatError,
)
from gemara_evidence.mapping.mapper import SchemaMapper
from gemara_evidence.models.evidence import EvidenceSource, RunResult, SchemaCandidate
from gemara_evidence.protocols.parser import EvidenceParser

from .callbacks import EvidenceCallback

logger = logging.getLogger(__name__)


class EvidencePipeline:
    """Selects a parser for a source, parses it and maps the chunks.

    Usage::

        pipeline = EvidencePipeline(
            [KubernetesParser(), DockerfileParser(), MarkdownParser(), KeyValueParser()]
        )
        result = pipeline.run_with_meta(EvidenceSource(content=b"# Policy\\n..."))

    Parser selection is a linear scan in registration order and the first
    parser whose ``can_handle`` returns ``True`` wins.  Register specific
    formats before generic ones, otherwise a permissive content sniffer
    will claim sources meant for a specialised parser.

    The pipeline keeps no per-run state, so one instance may be reused
    for any number of sequential runs.
    """

    def __init__(
        self,
        parsers: Sequence[EvidenceParser] = (),
        mapper: SchemaMapper | None = None,
    ) -> None:
        self._parsers: list[EvidenceParser] = list(parsers)
        self._mapper = mapper or SchemaMapper()
        self._callbacks: list[EvidenceCallback] = []

    @property
    def mapper(self) -> SchemaMapper:
        return self._mapper

    @property
    def parsers(self) -> list[EvidenceParser]:
        """A copy of the registered parsers, in priority order."""
        return list(self._parsers)

    @property
    def registered_parsers(self) -> list[str]:
        """Names of the registered parsers, in priority order."""
        return [parser.name for parser in self._parsers]

    def __repr__(self) -> str:
        return f"EvidencePipeline(parsers={self.registered_parsers}, mapper={self._mapper!r})"

    def register(self, parser: EvidenceParser) -> EvidencePipeline:
        """Append a parser at the lowest priority. Returns self for chaining."""
        self._parsers.append(parser)
        return self

    def add_callback(self, callback: EvidenceCallback) -> EvidencePipeline:
        """Register an event callback for run observability. Returns self for chaining."""
        self._callbacks.append(callback)
        return self

    def _fire(self, method: str, *args: Any) -> None:
        """Invoke *method* on every callback; failures are logged, never raised."""
        for cb in self._callbacks:
            fn = getattr(cb, method, None)
            if fn is None or not callable(fn):
                continue
            try:
                fn(*args)
            except Exception:
                logger.warning("Callback %r.%s failed", cb, method, exc_info=True)

    def select_parser(self, source: EvidenceSource) -> EvidenceParser:
        """Return the first registered parser that can handle *source*.

        Raises:
            UnsupportedFormatError: If no registered parser claims the source.
        """
        for parser in self._parsers:
            if parser.can_handle(source):
                return parser
        msg = (
            f"unsupported evidence format: no parser found for source {source.id!r} "
            f"(format hint: {source.format!r})"
        )
        raise UnsupportedFormatError(msg, source_id=source.id, format_hint=source.format)

    def run(self, source: EvidenceSource, *, timeout: float | None = None) -> list[SchemaCandidate]:
        """Run the pipeline and return only the candidates."""
        return self.run_with_meta(source, timeout=timeout).candidates

    def run_with_meta(
        self, source: EvidenceSource, *, timeout: float | None = None
    ) -> RunResult:
        """Run the pipeline over *source*.

        Parameters:
            source: The evidence to process.
            timeout: Optional budget in seconds for the whole run.

        Returns:
            A ``RunResult`` with the candidates, the parser used and the
            number of chunks extracted before mapping.

        Raises:
            UnsupportedFormatError: If no parser claims the source.
            ParseFailureError: If the selected parser fails; the parser's
                own exception is chained as ``__cause__``.
            EvidenceTimeoutError: If *timeout* elapses mid-run.
        """
        start = time.perf_counter()
        deadline = time.monotonic() + timeout if timeout is not None else None
        self._fire("on_run_start", source)

        try:
            parser = self.select_parser(source)
            self._fire("on_parser_selected", parser.name, source)
            logger.debug("Selected parser %r for source %s", parser.name, source.id)

            try:
                chunks = parser.parse(source, deadline=deadline)
            except EvidenceTimeoutError:
                raise
            except Exception as e:
                msg = f"parser {parser.name!r} failed: {e}"
                raise ParseFailureError(msg, parser_name=parser.name) from e

            if deadline is not None and time.monotonic() >= deadline:
                msg = "deadline exceeded before schema mapping"
                raise EvidenceTimeoutError(msg)
            candidates = self._mapper.map(chunks)
        except Exception as e:
            self._fire("on_run_error", e)
            raise

        result = RunResult(
            candidates=candidates,
            parser_used=parser.name,
            chunk_count=len(chunks),
        )
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug(
            "Run over %s: parser=%s chunks=%d candidates=%d (%.2f ms)",
            source.id,
            parser.name,
            len(chunks),
            len(candidates),
            elapsed_ms,
        )
        self._fire("on_run_end", result, elapsed_ms)
        return result
