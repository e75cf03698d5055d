"""TCI scoring: composite capability index from fitted IRT parameters.

For each observed benchmark the score is mapped to log-odds, the benchmark
difficulty is added back and the result is weighted by the benchmark slope.
The discrimination-weighted mean is the raw capability, reported as
``base_score + raw * scale_factor``.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from telcoindex.services.benchmarks import BENCHMARK_KEYS
from telcoindex.services.config import TCISettings
from telcoindex.services.leaderboard.client import BenchmarkRecord, ModelKey
from telcoindex.services.tci.irt import IRTParameters, fit_irt_parameters


@dataclass(frozen=True, slots=True)
class Scored:
    """Composite computed from the fitted parameters."""

    value: float
    stderr: float


@dataclass(frozen=True, slots=True)
class Override:
    """Externally supplied composite left untouched."""

    value: float
    stderr: float | None = None


@dataclass(frozen=True, slots=True)
class Insufficient:
    """Too few benchmark observations to score the model."""

    observed: int
    required: int


CompositeScore = Scored | Override | Insufficient


@dataclass(frozen=True)
class TCIResult:
    parameters: IRTParameters
    composites: dict[ModelKey, CompositeScore]


@dataclass(frozen=True, slots=True)
class _Observation:
    bench: str
    observed: float
    stderr: float | None


def logit(p: float, epsilon: float = 0.01) -> float:
    """Inverse sigmoid with p clamped to [epsilon, 1 - epsilon]."""
    clamped = min(max(p, epsilon), 1.0 - epsilon)
    return math.log(clamped / (1.0 - clamped))


def default_variance(observed: float) -> float:
    """Heuristic variance for a score with no reported stderr.

    Uncertainty grows as the observed score drops.
    """
    return (0.02 * (1.0 + (1.0 - observed) * 0.5)) ** 2


def _observations(
    record: BenchmarkRecord, benchmark_keys: Sequence[str]
) -> list[_Observation]:
    observations = []
    for bench in benchmark_keys:
        score = record.score_for(bench)
        if score is None:
            continue
        observations.append(
            _Observation(
                bench=bench,
                observed=score.score / 100.0,
                stderr=score.stderr / 100.0 if score.stderr is not None else None,
            )
        )
    return observations


def calculate_tci(
    record: BenchmarkRecord,
    params: IRTParameters,
    settings: TCISettings | None = None,
    benchmark_keys: Sequence[str] = BENCHMARK_KEYS,
) -> float | None:
    """Composite score for one record, or None below the evidence minimum."""
    settings = settings or TCISettings()
    observations = _observations(record, benchmark_keys)
    if len(observations) < settings.min_scores_required:
        return None

    total_weight = 0.0
    weighted_capability = 0.0
    for obs in observations:
        difficulty = params.difficulty.get(obs.bench, 0.0)
        slope = params.slope.get(obs.bench, 1.0)
        weighted_capability += (logit(obs.observed, settings.logit_epsilon) + difficulty) * slope
        total_weight += slope

    if total_weight <= 0.0:
        return None

    raw_capability = weighted_capability / total_weight
    return round(settings.base_score + raw_capability * settings.scale_factor, 1)


def calculate_tci_stderr(
    record: BenchmarkRecord,
    params: IRTParameters,
    settings: TCISettings | None = None,
    benchmark_keys: Sequence[str] = BENCHMARK_KEYS,
) -> float | None:
    """Propagate per-benchmark uncertainty through the weighted logit mean."""
    settings = settings or TCISettings()
    observations = _observations(record, benchmark_keys)
    if len(observations) < settings.min_scores_required:
        return None

    eps = settings.logit_epsilon
    total_weight = 0.0
    variance_sum = 0.0
    for obs in observations:
        slope = params.slope.get(obs.bench, 1.0)
        total_weight += slope

        if obs.stderr is not None:
            variance = obs.stderr**2
        else:
            variance = default_variance(obs.observed)

        p = min(max(obs.observed, eps), 1.0 - eps)
        logit_derivative = 1.0 / (p * (1.0 - p))
        variance_sum += (slope * logit_derivative) ** 2 * variance

    if total_weight <= 0.0:
        return None

    scaled_variance = (settings.scale_factor / total_weight) ** 2 * variance_sum
    return round(math.sqrt(scaled_variance), 1)


def score_record(
    record: BenchmarkRecord,
    params: IRTParameters,
    settings: TCISettings | None = None,
    preserve_existing: bool = False,
    benchmark_keys: Sequence[str] = BENCHMARK_KEYS,
) -> CompositeScore:
    settings = settings or TCISettings()
    if preserve_existing and record.tci_override is not None:
        return Override(
            value=record.tci_override.value, stderr=record.tci_override.stderr
        )

    value = calculate_tci(record, params, settings, benchmark_keys)
    stderr = calculate_tci_stderr(record, params, settings, benchmark_keys)
    if value is None or stderr is None:
        return Insufficient(
            observed=len(_observations(record, benchmark_keys)),
            required=settings.min_scores_required,
        )
    return Scored(value=value, stderr=stderr)


def score_all(
    records: Sequence[BenchmarkRecord],
    settings: TCISettings | None = None,
    preserve_existing: bool = False,
    benchmark_keys: Sequence[str] = BENCHMARK_KEYS,
) -> TCIResult:
    """Fit IRT parameters once and score every record.

    Composites are keyed by ``record.key`` (model name plus provider).

    With ``preserve_existing``, records carrying a manual TCI override keep
    it instead of being recomputed.
    """
    settings = settings or TCISettings()
    params = fit_irt_parameters(records, settings, benchmark_keys)
    composites = {
        record.key: score_record(
            record, params, settings, preserve_existing, benchmark_keys
        )
        for record in records
    }
    return TCIResult(parameters=params, composites=composites)


def composite_value(composite: CompositeScore) -> float | None:
    match composite:
        case Scored(value=value) | Override(value=value):
            return value
        case Insufficient():
            return None


def composite_error(composite: CompositeScore) -> float | None:
    match composite:
        case Scored(stderr=stderr) | Override(stderr=stderr):
            return stderr
        case Insufficient():
            return None
