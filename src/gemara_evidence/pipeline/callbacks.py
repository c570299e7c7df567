"""Pipeline callback protocol for observability and event hooks."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from gemara_evidence.models.evidence import EvidenceSource, RunResult


@runtime_checkable
class EvidenceCallback(Protocol):
    """Protocol for evidence pipeline event callbacks.

    Implement this protocol to receive events during a pipeline run.
    Missing methods are skipped, so you only need to define the ones you
    care about.  Exceptions raised by a callback are logged and ignored.
    """

    def on_run_start(self, source: EvidenceSource) -> None: ...
    def on_parser_selected(self, parser_name: str, source: EvidenceSource) -> None: ...
    def on_run_end(self, result: RunResult, time_ms: float) -> None: ...
    def on_run_error(self, error: Exception) -> None: ...
