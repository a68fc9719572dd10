"""Turn health records, cycles and performance findings into action items."""

from collections.abc import Iterable, Sequence

from .graph.models import Cycle, CycleReport
from .models import HealthRecord, Recommendation

ATTENTION_BELOW = 80
HIGH_PRIORITY_BELOW = 60

_PRIORITY_RANK = {"high": 0, "medium": 1}


def aggregate(
    health_records: Iterable[HealthRecord],
    cycle_report: CycleReport,
    performance_findings: Sequence[str],
    attention_below: int = ATTENTION_BELOW,
    high_priority_below: int = HIGH_PRIORITY_BELOW,
) -> list[Recommendation]:
    """Build the recommendation list.

    Emission order is fixed: one entry per struggling package (input order),
    then at most one architecture entry for all cycles, then at most one
    performance entry for all findings.
    """
    recs: list[Recommendation] = []

    for record in health_records:
        if record.score < attention_below:
            recs.append(
                Recommendation(
                    type="package",
                    priority="high" if record.score < high_priority_below else "medium",
                    message=f"Package {record.package} needs attention (score: {record.score})",
                    actions=tuple(record.issues),
                    package=record.package,
                )
            )

    if len(cycle_report) > 0:
        recs.append(
            Recommendation(
                type="architecture",
                priority="high",
                message="Circular dependencies detected",
                actions=tuple(_cycle_action(cycle) for cycle in cycle_report),
            )
        )

    if performance_findings:
        recs.append(
            Recommendation(
                type="performance",
                priority="medium",
                message="Performance issues detected",
                actions=tuple(performance_findings),
            )
        )

    return recs


def sort_by_priority(recommendations: Iterable[Recommendation]) -> list[Recommendation]:
    """High priority first; emission order is kept within a priority."""
    return sorted(recommendations, key=lambda r: _PRIORITY_RANK.get(r.priority, len(_PRIORITY_RANK)))


def _cycle_action(cycle: Cycle) -> str:
    if cycle.is_pair:
        return f"Refactor to remove circular dependency between {cycle.nodes[0]} and {cycle.nodes[1]}"
    return f"Refactor to remove circular dependency among {', '.join(cycle.nodes)}"
