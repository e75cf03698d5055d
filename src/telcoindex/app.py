"""telcoindex - Telco Capability Index leaderboard and trend report.

Loads the GSMA leaderboard (or a local export), fits the IRT model, ranks
models by TCI and prints the capability trend forecast.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.text import Text

from telcoindex.services.benchmarks import BENCHMARKS
from telcoindex.services.config import TCISettings, TCISettingsManager
from telcoindex.services.leaderboard import (
    BenchmarkRecord,
    fetch_leaderboard,
    load_leaderboard_file,
)
from telcoindex.services.leaderboard.rankings import RankingEntry, rank_by_tci
from telcoindex.services.tci import Insufficient, TCIResult, score_all
from telcoindex.services.trends import Forecast, capability_points, project_trend

NEW_ROW_STYLE = "bold #F1FA8C"
EMPTY_CELL = "--"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="telcoindex",
        description="Rank telecom LLM benchmark results by Telco Capability Index.",
    )
    parser.add_argument(
        "--file",
        type=Path,
        help="Local leaderboard export (.parquet or .json) instead of Hugging Face",
    )
    parser.add_argument("--settings", type=Path, help="TCI settings JSON file")
    parser.add_argument("--months", type=int, help="Forecast horizon in months")
    parser.add_argument(
        "--preserve-overrides",
        action="store_true",
        help="Keep manual TCI values present in the leaderboard rows",
    )
    parser.add_argument(
        "--estimate-dates",
        action="store_true",
        help="Estimate missing release dates from model version numbers (approximate)",
    )
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def load_records(file: Path | None) -> list[BenchmarkRecord]:
    if file is not None:
        return load_leaderboard_file(file)
    return fetch_leaderboard()


def _format_score(score: float | None) -> str:
    if score is None:
        return EMPTY_CELL
    return f"{score:.1f}"


def _format_date(timestamp_ms: float) -> str:
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc).strftime("%b %Y")


def build_leaderboard_table(
    ranking: Sequence[RankingEntry], records: Sequence[BenchmarkRecord]
) -> Table:
    """Leaderboard table: rank, model, TCI with error, then each benchmark."""
    by_key = {r.key: r for r in records}

    table = Table(title="Telco Capability Index", row_styles=["", "dim"])
    table.add_column("#", justify="right", width=4)
    table.add_column("Model", width=24)
    table.add_column("Provider", width=12)
    table.add_column("TCI", justify="right", width=7)
    table.add_column("±", justify="right", width=5)
    for benchmark in BENCHMARKS:
        table.add_column(benchmark.short_name, justify="right", width=7)

    for entry in ranking:
        record = by_key.get((entry.model, entry.provider))
        cells = [
            str(entry.rank),
            entry.model,
            entry.provider,
            _format_score(entry.score),
            _format_score(entry.error),
        ]
        for benchmark in BENCHMARKS:
            observed = record.score_for(benchmark.id) if record else None
            cells.append(_format_score(observed.score if observed else None))
        if entry.is_new:
            table.add_row(*[Text(c, style=NEW_ROW_STYLE) for c in cells])
        else:
            table.add_row(*cells)
    return table


def render_trend(console: Console, forecast: Forecast, n_points: int) -> None:
    if forecast.is_empty:
        console.print(
            f"Capability trend: insufficient data ({n_points} dated models, need 3)."
        )
        return
    stats = forecast.stats
    console.print(
        f"Capability trend over {n_points} models: "
        f"R²={stats.r_squared:.2f}, growth {stats.growth_per_year:+.1f} TCI/yr, "
        f"{stats.current_value:.1f} at {_format_date(stats.last_data_date)} -> "
        f"{stats.projected_value:.1f} projected by {_format_date(stats.forecast_end_date)}"
    )


def render_report(
    console: Console,
    records: Sequence[BenchmarkRecord],
    result: TCIResult,
    settings: TCISettings,
    forecast_months: int | None = None,
    allow_estimate: bool = False,
) -> Forecast:
    ranking = rank_by_tci(records, result.composites)
    console.print(build_leaderboard_table(ranking, records))

    insufficient = sum(
        1 for c in result.composites.values() if isinstance(c, Insufficient)
    )
    if insufficient:
        console.print(
            f"{insufficient} model(s) have fewer than "
            f"{settings.min_scores_required} benchmark scores: insufficient data."
        )

    points = capability_points(records, result.composites, allow_estimate)
    _, forecast = project_trend(points, settings, forecast_months)
    render_trend(console, forecast, len(points))
    return forecast


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the command line report."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    console = Console()
    try:
        settings = (
            TCISettingsManager(settings_path=args.settings).load()
            if args.settings
            else TCISettings()
        )
    except (OSError, ValueError) as e:
        console.print(f"[red]Could not load settings:[/red] {e}")
        return 1

    try:
        records = load_records(args.file)
    except (ConnectionError, TimeoutError, OSError, ValueError) as e:
        console.print(f"[red]Could not load leaderboard:[/red] {e}")
        return 1

    result = score_all(records, settings, preserve_existing=args.preserve_overrides)
    render_report(
        console,
        records,
        result,
        settings,
        forecast_months=args.months,
        allow_estimate=args.estimate_dates,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
