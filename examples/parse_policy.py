"""Example: Evidence pipeline. Run with: python examples/parse_policy.py

Feeds a Markdown policy, a YAML config and a Kubernetes manifest through
the default pipeline and prints the schema candidates each one yields.
Also shows how to plug in a custom parser that satisfies the
``EvidenceParser`` protocol -- no inheritance needed.
"""

from __future__ import annotations

from gemara_evidence import (
    EvidenceChunk,
    EvidenceSource,
    RunResult,
    default_pipeline,
)

POLICY_MD = """# Access Control Policy
This policy applies to all production systems.

## Objective
The objective is to restrict administrative access to named operators.

## Assessment
Auditors verify the operator list every quarter.
"""

CONFIG_YAML = """id: AC-2
title: Account Management
parameters:
  review_interval_days: 90
"""

MANIFEST = """apiVersion: v1
kind: Pod
metadata:
  name: web
spec:
  hostNetwork: true
  containers:
    - name: web
      image: nginx:1.27
"""

# ---------------------------------------------------------------------------
# Custom parser: one chunk per non-blank line of a plain ".txt" checklist
# ---------------------------------------------------------------------------


class ChecklistParser:
    """Treats every line of a ``checklist`` source as its own chunk."""

    @property
    def name(self) -> str:
        return "checklist"

    def can_handle(self, source: EvidenceSource) -> bool:
        return source.hint == "checklist"

    def parse(self, source: EvidenceSource, deadline: float | None = None) -> list[EvidenceChunk]:
        return [
            EvidenceChunk(
                text=line.strip(),
                source_id=source.id,
                section_path=f"item {idx}",
                confidence=0.8,
            )
            for idx, line in enumerate(source.text.splitlines(), start=1)
            if line.strip()
        ]


def show(result: RunResult) -> None:
    print(f"  parser={result.parser_used} chunks={result.chunk_count}")
    for candidate in result.candidates:
        print(f"  {candidate.confidence:.3f}  {candidate.target_field:<26} {candidate.source_ref}")


def main() -> None:
    pipeline = default_pipeline().register(ChecklistParser())

    samples = [
        EvidenceSource(content=POLICY_MD.encode(), id="access-control.md"),
        EvidenceSource(content=CONFIG_YAML.encode(), id="ac-2.yaml"),
        EvidenceSource(content=MANIFEST.encode(), id="web-pod.yaml"),
        EvidenceSource(
            content=b"Verify MFA is enforced\nRotate keys yearly",
            format="checklist",
            id="quarterly.txt",
        ),
    ]
    for source in samples:
        print(source.id)
        show(pipeline.run_with_meta(source))


if __name__ == "__main__":
    main()
