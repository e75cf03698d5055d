"""Shared test fixtures for telcoindex tests."""

from collections.abc import Callable

import pytest

from telcoindex.services.config import TCISettings
from telcoindex.services.leaderboard import BenchmarkRecord, BenchmarkScore, TCIOverride

ScoreCell = float | tuple[float, float] | None


def _to_score(cell: ScoreCell) -> BenchmarkScore | None:
    if cell is None:
        return None
    if isinstance(cell, tuple):
        score, stderr = cell
        return BenchmarkScore(score=score, stderr=stderr)
    return BenchmarkScore(score=cell)


@pytest.fixture
def make_record() -> Callable[..., BenchmarkRecord]:
    """Factory building a BenchmarkRecord from plain numbers.

    Scores are given as ``score`` or ``(score, stderr)``; ``None`` is absent.
    """

    def factory(
        model: str,
        scores: dict[str, ScoreCell],
        provider: str = "TestLab",
        release_date: str | None = None,
        tci_override: TCIOverride | None = None,
    ) -> BenchmarkRecord:
        return BenchmarkRecord(
            model=model,
            provider=provider,
            scores={key: _to_score(cell) for key, cell in scores.items()},
            release_date=release_date,
            tci_override=tci_override,
        )

    return factory


@pytest.fixture
def full_records(make_record) -> list[BenchmarkRecord]:
    """Four dated models with every benchmark observed."""
    return [
        make_record(
            "alpha-1",
            {"teleqna": 82, "telelogs": 55, "telemath": 61, "tsg": 48, "teletables": 70},
            provider="OpenAI",
            release_date="2024-03-01",
        ),
        make_record(
            "beta-2",
            {"teleqna": 75, "telelogs": 41, "telemath": 52, "tsg": 39, "teletables": 58},
            provider="Google",
            release_date="2024-08-15",
        ),
        make_record(
            "gamma-3",
            {"teleqna": 88, "telelogs": 63, "telemath": 72, "tsg": 57, "teletables": 79},
            provider="Anthropic",
            release_date="2025-02-01",
        ),
        make_record(
            "delta-4",
            {"teleqna": 64, "telelogs": 30, "telemath": 35, "tsg": 28, "teletables": 44},
            provider="Meta",
            release_date="2025-06-20",
        ),
    ]


@pytest.fixture
def single_benchmark_settings() -> TCISettings:
    """Settings that allow scoring from a single observation."""
    return TCISettings(min_scores_required=1)
