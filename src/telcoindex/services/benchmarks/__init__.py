"""Benchmark registry for the telecom leaderboard."""

from telcoindex.services.benchmarks.registry import (
    BENCHMARK_KEYS,
    BENCHMARKS,
    BENCHMARKS_BY_ID,
    DEFAULT_BASE_ERROR,
    TCI_BASE_ERROR,
    BenchmarkConfig,
)

__all__ = [
    "BENCHMARK_KEYS",
    "BENCHMARKS",
    "BENCHMARKS_BY_ID",
    "DEFAULT_BASE_ERROR",
    "TCI_BASE_ERROR",
    "BenchmarkConfig",
]
