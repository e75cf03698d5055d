"""Leaderboard client: fetch and parse per-model benchmark records."""

from __future__ import annotations

import json
import logging
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from statistics import mean

import pyarrow.parquet as pq
from huggingface_hub import hf_hub_download

from telcoindex.services.benchmarks import BENCHMARKS

_log = logging.getLogger(__name__)

DATASET_ID = "GSMA/leaderboard"
PARQUET_FILE = "data/train-00000-of-00001.parquet"

TCI_COLUMN = "tci"
DATE_COLUMN = "date"

ModelKey = tuple[str, str]

_MODEL_PROVIDER_RE = re.compile(r"^(.+?)\s*\(([^)]+)\)$")

_KNOWN_PROVIDERS: tuple[str, ...] = (
    "Google",
    "OpenAI",
    "Meta",
    "Anthropic",
    "Grok",
    "Qwen",
    "Mistral",
    "NetoAI",
    "IBM",
    "DeepSeek",
    "LiquidAI",
    "Microsoft",
    "Swiss AI",
    "ByteDance",
    "Amazon",
    "NVIDIA",
    "Cohere",
    "Hugging Face",
)

_PROVIDER_ALIASES: dict[str, str] = {
    "mistralai": "Mistral",
    "mistral ai": "Mistral",
    "xai": "Grok",
    "x-ai": "Grok",
    "alibaba": "Qwen",
    "meta-llama": "Meta",
    "deepseek-ai": "DeepSeek",
    "ibm granite": "IBM",
    "ibm-granite": "IBM",
    "nvidia": "NVIDIA",
    "huggingface": "Hugging Face",
}


@dataclass(frozen=True, slots=True)
class BenchmarkScore:
    """One observed benchmark result on the 0-100 scale."""

    score: float
    stderr: float | None = None
    n_samples: int | None = None

    def __post_init__(self) -> None:
        if not math.isfinite(self.score) or not 0.0 <= self.score <= 100.0:
            raise ValueError(f"score must be within [0, 100], got {self.score!r}")
        if self.stderr is not None and (
            not math.isfinite(self.stderr) or self.stderr < 0.0
        ):
            raise ValueError(f"stderr must be non-negative, got {self.stderr!r}")


@dataclass(frozen=True, slots=True)
class TCIOverride:
    """A manually supplied composite score carried by the source row."""

    value: float
    stderr: float | None = None


@dataclass(frozen=True, slots=True)
class BenchmarkRecord:
    """A single model's observed scores across the registry benchmarks."""

    model: str
    provider: str
    scores: Mapping[str, BenchmarkScore | None] = field(default_factory=dict)
    release_date: str | None = None
    tci_override: TCIOverride | None = None

    @property
    def key(self) -> ModelKey:
        """Record identity: the same model name may be listed by several providers."""
        return (self.model, self.provider)

    def score_for(self, key: str) -> BenchmarkScore | None:
        return self.scores.get(key)

    @property
    def observed_count(self) -> int:
        return sum(1 for s in self.scores.values() if s is not None)

    @property
    def mean_score(self) -> float | None:
        """Mean of present benchmark scores, ignoring absent entries."""
        valid = [s.score for s in self.scores.values() if s is not None]
        if not valid:
            return None
        return mean(valid)


def normalize_provider_name(provider: str) -> str:
    """Map a raw provider label onto its canonical display name."""
    cleaned = provider.strip()
    lower = cleaned.lower()
    if lower in _PROVIDER_ALIASES:
        return _PROVIDER_ALIASES[lower]
    for known in _KNOWN_PROVIDERS:
        if known.lower() == lower:
            return known
    return cleaned or "Unknown"


def parse_model_and_provider(combined: str) -> tuple[str, str]:
    """Split a leaderboard model label into (model, provider).

    Examples:
        "gpt-5.2 (OpenAI)" -> ("gpt-5.2", "OpenAI")
        "gpt-4o"           -> ("gpt-4o", "Unknown")
    """
    match = _MODEL_PROVIDER_RE.match(combined.strip())
    if match:
        return (match.group(1).strip(), normalize_provider_name(match.group(2)))
    return (combined.strip(), "Unknown")


def parse_row(row: Mapping[str, object]) -> BenchmarkRecord:
    """Build a BenchmarkRecord from one leaderboard row.

    Score cells are ``[score, stderr, n_samples]`` lists (or bare numbers);
    missing or malformed cells are recorded as absent.
    """
    raw_model = row.get("model") or "Unknown"
    model, provider = parse_model_and_provider(str(raw_model))

    scores = {
        bench.id: _parse_score(row.get(bench.hf_column), model, bench.id)
        for bench in BENCHMARKS
    }
    override = _parse_override(row.get(TCI_COLUMN), model)

    raw_date = row.get(DATE_COLUMN)
    release_date = str(raw_date) if raw_date else None

    return BenchmarkRecord(
        model=model,
        provider=provider,
        scores=scores,
        release_date=release_date,
        tci_override=override,
    )


def fetch_leaderboard() -> list[BenchmarkRecord]:
    """Fetch benchmark records from the GSMA/leaderboard dataset."""
    path = hf_hub_download(
        repo_id=DATASET_ID, filename=PARQUET_FILE, repo_type="dataset"
    )
    return _read_parquet(Path(path))


def load_leaderboard_file(path: Path) -> list[BenchmarkRecord]:
    """Load benchmark records from a local parquet or JSON export.

    JSON may be a datasets-server dump (``{"rows": [{"row": {...}}]}``) or a
    plain list of rows.

    Raises:
        ValueError: If the file suffix is not supported.
    """
    suffix = path.suffix.lower()
    if suffix == ".parquet":
        return _read_parquet(path)
    if suffix == ".json":
        data = json.loads(path.read_text())
        rows = data.get("rows", []) if isinstance(data, dict) else data
        return [parse_row(item.get("row", item)) for item in rows]
    raise ValueError(f"Unsupported leaderboard file type: {path.name}")


def _read_parquet(path: Path) -> list[BenchmarkRecord]:
    dataset = pq.read_table(path).to_pylist()
    return [parse_row(row) for row in dataset]


def _parse_score(
    raw_value: object,
    model: str,
    column: str,
) -> BenchmarkScore | None:
    if raw_value is None:
        return None
    if isinstance(raw_value, list | tuple):
        if not raw_value or raw_value[0] is None:
            return None
        score = raw_value[0]
        stderr = raw_value[1] if len(raw_value) > 1 else None
        n_samples = raw_value[2] if len(raw_value) > 2 else None
    else:
        score, stderr, n_samples = raw_value, None, None

    try:
        return BenchmarkScore(
            score=float(score),
            stderr=float(stderr) if stderr is not None else None,
            n_samples=int(n_samples) if n_samples is not None else None,
        )
    except (TypeError, ValueError) as exc:
        _log.warning("Skipping malformed %s score for %s: %s", column, model, exc)
        return None


def _parse_override(raw_value: object, model: str) -> TCIOverride | None:
    if not isinstance(raw_value, list | tuple) or not raw_value:
        return None
    if raw_value[0] is None:
        return None
    try:
        value = float(raw_value[0])
        stderr = raw_value[1] if len(raw_value) > 1 else None
        stderr = float(stderr) if stderr is not None else None
    except (TypeError, ValueError) as exc:
        _log.warning("Skipping malformed TCI override for %s: %s", model, exc)
        return None
    if not math.isfinite(value):
        return None
    return TCIOverride(value=value, stderr=stderr)
