"""Benchmark registry.

The registry fixes the benchmark axis of every score matrix: the order of
``BENCHMARK_KEYS`` is the column order used by the IRT fit, and
``hf_column`` names the matching column in the ``GSMA/leaderboard`` dataset.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BenchmarkConfig:
    """Configuration for a single leaderboard benchmark."""

    id: str
    name: str
    short_name: str
    description: str
    hf_column: str
    base_error: float


_NAME_OVERRIDES: dict[str, str] = {
    "teleqna": "TeleQnA",
    "telelogs": "TeleLogs",
    "telemath": "TeleMath",
    "tsg": "3GPP TSG",
    "teletables": "TeleTables",
}

_SHORT_NAME_OVERRIDES: dict[str, str] = {
    "teleqna": "QnA",
    "telelogs": "Logs",
    "telemath": "Math",
    "tsg": "3GPP",
    "teletables": "Tables",
}

_DESCRIPTION_OVERRIDES: dict[str, str] = {
    "teleqna": "Question answering benchmark for telecom domain",
    "telelogs": "Log analysis and troubleshooting benchmark",
    "telemath": "Mathematical reasoning for telecom calculations",
    "tsg": "3GPP working group classification benchmark",
    "teletables": "Table understanding and extraction benchmark",
}

# Leaderboard parquet column names that differ from the benchmark id.
_HF_COLUMN_OVERRIDES: dict[str, str] = {
    "tsg": "3gpp_tsg",
}

# Measurement uncertainty (percentage points) used for synthetic error bars.
_BASE_ERROR_OVERRIDES: dict[str, float] = {
    "teleqna": 1.5,
    "telelogs": 3.0,
    "telemath": 2.5,
    "tsg": 2.5,
    "teletables": 2.5,
}

DEFAULT_BASE_ERROR = 2.0
TCI_BASE_ERROR = 1.5

_BENCHMARK_IDS: tuple[str, ...] = (
    "teleqna",
    "telelogs",
    "telemath",
    "tsg",
    "teletables",
)


def _display_name(bench_id: str) -> str:
    override = _NAME_OVERRIDES.get(bench_id)
    if override:
        return override

    words = []
    for token in bench_id.replace("-", "_").split("_"):
        if not token:
            continue
        if token.isdigit():
            words.append(token)
            continue
        if token.lower() in {"gpp", "ran", "tsg", "qa"}:
            words.append(token.upper())
            continue
        words.append(token.capitalize())
    return " ".join(words) if words else bench_id


def _short_name(bench_id: str, name: str) -> str:
    override = _SHORT_NAME_OVERRIDES.get(bench_id)
    if override:
        return override

    parts = [p for p in name.replace("-", " ").split() if p]
    if len(parts) > 1:
        acronym = "".join(p[0].upper() for p in parts if p[0].isalnum())
        if 2 <= len(acronym) <= 6:
            return acronym
    if parts:
        return parts[0][:7]
    return bench_id[:7]


def _build_config(bench_id: str) -> BenchmarkConfig:
    name = _display_name(bench_id)
    return BenchmarkConfig(
        id=bench_id,
        name=name,
        short_name=_short_name(bench_id, name),
        description=_DESCRIPTION_OVERRIDES.get(bench_id, f"{name} evaluation benchmark"),
        hf_column=_HF_COLUMN_OVERRIDES.get(bench_id, bench_id),
        base_error=_BASE_ERROR_OVERRIDES.get(bench_id, DEFAULT_BASE_ERROR),
    )


BENCHMARKS: tuple[BenchmarkConfig, ...] = tuple(
    _build_config(bench_id) for bench_id in _BENCHMARK_IDS
)

BENCHMARKS_BY_ID: dict[str, BenchmarkConfig] = {b.id: b for b in BENCHMARKS}

BENCHMARK_KEYS: tuple[str, ...] = tuple(b.id for b in BENCHMARKS)
