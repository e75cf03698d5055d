"""Leaderboard services for data ingestion.

Rankings depend on the TCI scorer and live in
``telcoindex.services.leaderboard.rankings``.
"""

from telcoindex.services.leaderboard.client import (
    BenchmarkRecord,
    BenchmarkScore,
    ModelKey,
    TCIOverride,
    fetch_leaderboard,
    load_leaderboard_file,
    normalize_provider_name,
    parse_model_and_provider,
    parse_row,
)

__all__ = [
    "BenchmarkRecord",
    "BenchmarkScore",
    "ModelKey",
    "TCIOverride",
    "fetch_leaderboard",
    "load_leaderboard_file",
    "normalize_provider_name",
    "parse_model_and_provider",
    "parse_row",
]
