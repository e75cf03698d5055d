"""Ranking calculation for TCI and per-benchmark leaderboards."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from telcoindex.services.benchmarks import (
    BENCHMARKS_BY_ID,
    DEFAULT_BASE_ERROR,
    TCI_BASE_ERROR,
)
from telcoindex.services.leaderboard.client import BenchmarkRecord, ModelKey
from telcoindex.services.tci.scorer import (
    CompositeScore,
    composite_error,
    composite_value,
)

TCI_KEY = "tci"
TOP_RANKINGS_COUNT = 3


@dataclass(frozen=True, slots=True)
class RankingEntry:
    """A single row of a ranked leaderboard."""

    rank: int
    model: str
    provider: str
    score: float
    error: float
    is_new: bool = False


def score_rank(record: BenchmarkRecord) -> tuple[bool, float]:
    no_score = record.mean_score is None
    descending = -(record.mean_score or 0)
    return (no_score, descending)


def rank_records(records: Sequence[BenchmarkRecord]) -> list[BenchmarkRecord]:
    """Order records by mean benchmark score, unscored records last."""
    return sorted(records, key=score_rank)


def synthetic_error(score: float, key: str) -> float:
    """Error bar estimate: lower scores get wider bars.

    Used when no propagated standard error is available.
    """
    if key == TCI_KEY:
        base_error = TCI_BASE_ERROR
    elif key in BENCHMARKS_BY_ID:
        base_error = BENCHMARKS_BY_ID[key].base_error
    else:
        base_error = DEFAULT_BASE_ERROR
    return round(base_error * (1 + (100 - score) / 200), 2)


def _mean_rank_models(
    records: Sequence[BenchmarkRecord], top_n: int
) -> set[ModelKey]:
    return {r.key for r in rank_records(records)[:top_n]}


def _assign_ranks(
    rows: list[tuple[str, str, float, float]], highlighted: set[ModelKey]
) -> list[RankingEntry]:
    rows.sort(key=lambda row: -row[2])
    return [
        RankingEntry(
            rank=index,
            model=model,
            provider=provider,
            score=score,
            error=error,
            is_new=(model, provider) in highlighted,
        )
        for index, (model, provider, score, error) in enumerate(rows, start=1)
    ]


def rank_by_tci(
    records: Sequence[BenchmarkRecord],
    composites: Mapping[ModelKey, CompositeScore],
    top_n: int = TOP_RANKINGS_COUNT,
) -> list[RankingEntry]:
    """Rank models by composite score; unscorable models are left out."""
    rows = []
    for record in records:
        composite = composites.get(record.key)
        if composite is None:
            continue
        value = composite_value(composite)
        if value is None:
            continue
        error = composite_error(composite)
        if error is None:
            error = synthetic_error(value, TCI_KEY)
        rows.append((record.model, record.provider, value, error))
    return _assign_ranks(rows, _mean_rank_models(records, top_n))


def rank_by_benchmark(
    records: Sequence[BenchmarkRecord],
    key: str,
    top_n: int = TOP_RANKINGS_COUNT,
) -> list[RankingEntry]:
    """Rank models on one benchmark's raw score."""
    rows = []
    for record in records:
        observed = record.score_for(key)
        if observed is None:
            continue
        rows.append(
            (record.model, record.provider, observed.score, synthetic_error(observed.score, key))
        )
    return _assign_ranks(rows, _mean_rank_models(records, top_n))
