"""Model release dates for time-based capability trends.

Timestamps are epoch milliseconds (UTC). Explicit dates from the leaderboard
row are authoritative; the curated table is the first fallback. The
version-number estimate is known to be approximate and can mis-order models,
so callers must opt into it.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone

from telcoindex.services.leaderboard.client import BenchmarkRecord

_log = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"(\d+)\.?(\d*)")

ESTIMATE_BASE_YEAR = 2023
ESTIMATE_MAX_YEAR = 2025

# Dates are approximate, based on public announcements.
MODEL_RELEASE_DATES: dict[str, str] = {
    # OpenAI
    "gpt-5.2": "2025-12-11",
    "gpt-5-mini": "2025-08-07",
    "gpt-oss-120b": "2025-08-04",
    "gpt-oss-20b": "2025-08-05",
    "gpt-4o": "2024-05-13",
    "gpt-4o-mini": "2024-07-18",
    "gpt-4-turbo": "2024-04-09",
    "gpt-4": "2023-03-14",
    "gpt-3.5-turbo": "2023-03-01",
    "o1": "2024-12-05",
    "o1-mini": "2024-09-12",
    "o3": "2025-04-16",
    "o3-mini": "2025-01-31",
    "o4-mini": "2025-04-16",
    # Anthropic
    "claude-opus-4.5": "2025-11-24",
    "claude-sonnet-4": "2025-05-22",
    "claude-haiku-4.5": "2025-10-15",
    "claude-3.5-sonnet": "2024-06-20",
    "claude-3.5-haiku": "2024-11-04",
    "claude-3-opus": "2024-03-04",
    "claude-3-haiku": "2024-03-13",
    # Google
    "gemini-3-flash-preview": "2025-12-17",
    "gemini-2.5-pro": "2025-03-25",
    "gemini-2.5-flash": "2025-04-17",
    "gemini-2.0-flash": "2024-12-11",
    "gemini-1.5-pro": "2024-05-14",
    "gemini-1.5-flash": "2024-05-14",
    # DeepSeek
    "deepseek-v3.2": "2025-09-29",
    "deepseek-v3": "2024-12-26",
    "deepseek-r1": "2025-01-20",
    # Mistral
    "ministral-8b-2512": "2025-12-03",
    "mistral-large": "2024-02-26",
    "mistral-small": "2024-02-26",
    "mixtral-8x22b": "2024-04-17",
    # Meta
    "llama-3.3-70b": "2024-12-06",
    "llama-3.1-405b": "2024-07-23",
    "llama-3.1-70b": "2024-07-23",
    "llama-3.1-8b": "2024-07-23",
    "llama-4-maverick": "2025-04-05",
    "llama-4-scout": "2025-04-05",
    # xAI
    "grok-2": "2024-08-13",
    "grok-3": "2025-02-17",
    # Qwen
    "qwen-2.5-72b": "2024-09-19",
    "qwen-2.5-7b": "2024-09-19",
    "qwq-32b": "2024-11-28",
    # IBM
    "granite-3.1-8b": "2024-12-09",
    "granite-3.0-8b": "2024-10-21",
    # Microsoft
    "phi-4": "2024-12-12",
    "phi-3.5-mini": "2024-08-20",
}


def parse_release_date(value: str | None) -> float | None:
    """Parse an ISO-8601 date or datetime into epoch milliseconds.

    Naive values are treated as UTC. Returns None for empty or invalid input.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp() * 1000.0


def lookup_release_date(model: str) -> float | None:
    """Curated release date for a model name (exact, then case-insensitive)."""
    if model in MODEL_RELEASE_DATES:
        return parse_release_date(MODEL_RELEASE_DATES[model])

    normalized = model.strip().lower()
    for key, value in MODEL_RELEASE_DATES.items():
        if key.lower() == normalized:
            return parse_release_date(value)
    return None


def estimate_release_date(model: str) -> float | None:
    """Rough release date from the first version number in the model name.

    Higher major versions are assumed newer: ``year = min(2023 + major // 2,
    2025)``, dated June 1st. Returns None when the name carries no number.
    """
    match = _VERSION_RE.search(model.lower())
    if not match:
        return None
    major = int(match.group(1))
    year = min(ESTIMATE_BASE_YEAR + major // 2, ESTIMATE_MAX_YEAR)
    return datetime(year, 6, 1, tzinfo=timezone.utc).timestamp() * 1000.0


def resolve_release_date(
    record: BenchmarkRecord, allow_estimate: bool = False
) -> float | None:
    """Best available release timestamp for a record."""
    explicit = parse_release_date(record.release_date)
    if explicit is not None:
        return explicit

    curated = lookup_release_date(record.model)
    if curated is not None:
        return curated

    if not allow_estimate:
        return None
    estimated = estimate_release_date(record.model)
    if estimated is not None:
        _log.debug("Using approximate release date for %s", record.model)
    return estimated
