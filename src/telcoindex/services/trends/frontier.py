"""Benchmark frontier: best score reached on each benchmark over time."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from telcoindex.services.benchmarks import BENCHMARK_KEYS
from telcoindex.services.leaderboard.client import BenchmarkRecord
from telcoindex.services.trends.release_dates import parse_release_date


@dataclass(frozen=True)
class FrontierPoint:
    timestamp: float
    model: str
    provider: str
    values: dict[str, float] = field(default_factory=dict)


def compute_frontier(
    records: Sequence[BenchmarkRecord],
    benchmark_keys: Sequence[str] = BENCHMARK_KEYS,
    end_date: float | None = None,
) -> list[FrontierPoint]:
    """Running maximum per benchmark in release order.

    A point is emitted only when a release sets a new maximum on at least
    one benchmark. When ``end_date`` is past the last such release, a final
    point repeats the maxima there so the step line reaches the chart edge.
    Records without an explicit release date are skipped.
    """
    events = []
    for record in records:
        timestamp = parse_release_date(record.release_date)
        if timestamp is None:
            continue
        scores = {
            key: observed.score
            for key in benchmark_keys
            if (observed := record.score_for(key)) is not None
        }
        if scores:
            events.append((timestamp, record, scores))

    events.sort(key=lambda event: event[0])
    running_max = {key: 0.0 for key in benchmark_keys}
    frontier: list[FrontierPoint] = []

    for timestamp, record, scores in events:
        improved = False
        for key, score in scores.items():
            if score > running_max[key]:
                running_max[key] = score
                improved = True
        if not improved:
            continue
        frontier.append(
            FrontierPoint(
                timestamp=timestamp,
                model=record.model,
                provider=record.provider,
                values={k: v for k, v in running_max.items() if v > 0},
            )
        )

    if frontier and end_date is not None and frontier[-1].timestamp < end_date:
        frontier.append(
            FrontierPoint(
                timestamp=end_date,
                model="",
                provider="",
                values={k: v for k, v in running_max.items() if v > 0},
            )
        )
    return frontier
