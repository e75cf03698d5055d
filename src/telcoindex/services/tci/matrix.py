"""Score matrix: dense model x benchmark scores with an observation mask."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from telcoindex.services.benchmarks import BENCHMARK_KEYS
from telcoindex.services.leaderboard.client import BenchmarkRecord, ModelKey


@dataclass(frozen=True)
class ScoreMatrix:
    """Normalized scores (rows = models, columns = benchmarks).

    Rows are identified by ``(model, provider)``.

    Unobserved cells hold 0 in ``scores`` and ``False`` in ``mask``; every
    downstream computation must go through the mask.
    """

    scores: np.ndarray
    mask: np.ndarray
    models: tuple[ModelKey, ...]
    benchmarks: tuple[str, ...]

    @property
    def n_models(self) -> int:
        return len(self.models)

    @property
    def n_benchmarks(self) -> int:
        return len(self.benchmarks)

    @property
    def n_observed(self) -> int:
        return int(self.mask.sum())


def build_score_matrix(
    records: Sequence[BenchmarkRecord],
    benchmark_keys: Sequence[str] = BENCHMARK_KEYS,
) -> ScoreMatrix:
    """Build a ScoreMatrix from records, preserving input model order."""
    keys = tuple(benchmark_keys)
    scores = np.zeros((len(records), len(keys)), dtype=float)
    mask = np.zeros((len(records), len(keys)), dtype=bool)

    for i, record in enumerate(records):
        for j, key in enumerate(keys):
            observed = record.score_for(key)
            if observed is None:
                continue
            scores[i, j] = observed.score / 100.0
            mask[i, j] = True

    scores.setflags(write=False)
    mask.setflags(write=False)
    return ScoreMatrix(
        scores=scores,
        mask=mask,
        models=tuple(r.key for r in records),
        benchmarks=keys,
    )
