"""TCISettings - Configuration for IRT fitting, TCI scoring and forecasting."""

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import ClassVar

DEFAULT_SETTINGS_PATH = Path.home() / ".telcoindex" / "tci_settings.json"


@dataclass
class TCISettings:
    """Tunable constants for the TCI pipeline.

    Regularization pulls difficulty toward 0, slope toward 1 and capability
    toward 0. Slopes are projected into ``[slope_min, slope_max]`` after every
    optimizer step.
    """

    DEFAULT_MAX_ITERATIONS: ClassVar[int] = 200
    DEFAULT_MIN_SCORES: ClassVar[int] = 3
    DEFAULT_BASE_SCORE: ClassVar[float] = 100.0
    DEFAULT_SCALE_FACTOR: ClassVar[float] = 10.0
    DEFAULT_FORECAST_MONTHS: ClassVar[int] = 12

    # Regularization
    lambda_difficulty: float = 0.01
    lambda_slope: float = 0.1
    lambda_capability: float = 0.01
    sparsity_multiplier: float = 2.0

    # Discrimination bounds
    slope_min: float = 0.25
    slope_max: float = 4.0

    # Optimizer
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    learning_rate: float = 0.1
    max_learning_rate: float = 0.5
    learning_rate_growth: float = 1.05
    momentum: float = 0.9
    gradient_tolerance: float = 1e-6
    loss_tolerance: float = 1e-8
    improvement_threshold: float = 1e-6

    # Scoring
    min_scores_required: int = DEFAULT_MIN_SCORES
    base_score: float = DEFAULT_BASE_SCORE
    scale_factor: float = DEFAULT_SCALE_FACTOR
    logit_epsilon: float = 0.01
    sigmoid_clip: float = 500.0

    # Trends
    z_score: float = 1.96
    forecast_months: int = DEFAULT_FORECAST_MONTHS
    historical_points: int = 50
    forecast_points: int = 30


class TCISettingsManager:
    """Manages TCI settings persistence to JSON file."""

    def __init__(self, settings_path: Path = DEFAULT_SETTINGS_PATH) -> None:
        self._path = settings_path

    def load(self) -> TCISettings:
        """Load settings from disk. Returns defaults if file missing.

        Keys absent from the file keep their defaults; unknown keys are ignored.

        Raises:
            ValueError: If the file is not valid JSON or not a JSON object.
        """
        if not self._path.exists():
            return TCISettings()
        data = json.loads(self._path.read_text())
        if not isinstance(data, dict):
            raise ValueError(f"{self._path} must contain a JSON object")
        known = {f.name for f in fields(TCISettings)}
        return TCISettings(**{k: v for k, v in data.items() if k in known})

    def save(self, settings: TCISettings) -> None:
        """Save settings to disk."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(asdict(settings), indent=2) + "\n")
