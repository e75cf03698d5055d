"""2PL Item Response Theory fit over leaderboard scores.

The predicted success of model ``m`` on benchmark ``b`` is::

    P(m, b) = sigmoid(alpha_b * (C_m - D_b))

Difficulty ``D``, discrimination ``alpha`` and capability ``C`` are fitted by
minimizing the squared error against observed (normalized) scores plus L2
penalties pulling ``D`` to 0, ``alpha`` to 1 and ``C`` to 0. The optimizer is
plain gradient descent with momentum and an adaptive learning rate; there is
no randomness anywhere, so identical inputs give identical parameters.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from telcoindex.services.benchmarks import BENCHMARK_KEYS
from telcoindex.services.config import TCISettings
from telcoindex.services.leaderboard.client import BenchmarkRecord, ModelKey
from telcoindex.services.tci.matrix import ScoreMatrix, build_score_matrix

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class IRTParameters:
    """Fitted 2PL parameters keyed by benchmark id and ``(model, provider)``."""

    difficulty: dict[str, float]
    slope: dict[str, float]
    capability: dict[ModelKey, float]
    fit_residual: float
    n_models: int
    n_benchmarks: int
    iterations: int = 0


@dataclass(frozen=True, slots=True)
class Regularization:
    lambda_difficulty: float
    lambda_slope: float
    lambda_capability: float

    @classmethod
    def for_matrix(cls, matrix: ScoreMatrix, settings: TCISettings) -> Regularization:
        """Scale penalties up when the system is underdetermined."""
        n_params = matrix.n_models + 2 * matrix.n_benchmarks
        multiplier = (
            settings.sparsity_multiplier if matrix.n_observed < n_params else 1.0
        )
        return cls(
            lambda_difficulty=settings.lambda_difficulty * multiplier,
            lambda_slope=settings.lambda_slope * multiplier,
            lambda_capability=settings.lambda_capability * multiplier,
        )


@dataclass
class OptimizerState:
    """Mutable state of a single fitting run; never shared between fits."""

    params: np.ndarray
    velocity: np.ndarray
    learning_rate: float
    previous_loss: float = math.inf
    iterations: int = 0
    loss_history: list[float] = field(default_factory=list)

    @classmethod
    def initial(
        cls, n_benchmarks: int, n_models: int, learning_rate: float
    ) -> OptimizerState:
        """D=0, alpha=1, C=0 with zero velocity."""
        params = np.concatenate(
            [np.zeros(n_benchmarks), np.ones(n_benchmarks), np.zeros(n_models)]
        )
        return cls(
            params=params,
            velocity=np.zeros_like(params),
            learning_rate=learning_rate,
        )


def sigmoid(x: np.ndarray | float, clip: float = 500.0) -> np.ndarray:
    """Numerically stable logistic function (input clipped to +/- clip)."""
    clipped = np.clip(x, -clip, clip)
    return 1.0 / (1.0 + np.exp(-clipped))


def split_params(
    params: np.ndarray, n_benchmarks: int
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Split the flat vector into (difficulty, slope, capability) views."""
    return (
        params[:n_benchmarks],
        params[n_benchmarks : 2 * n_benchmarks],
        params[2 * n_benchmarks :],
    )


def objective_and_gradient(
    params: np.ndarray,
    matrix: ScoreMatrix,
    reg: Regularization,
    sigmoid_clip: float = 500.0,
) -> tuple[float, np.ndarray]:
    """Loss and analytic gradient in one pass over the masked cells."""
    difficulty, slope, capability = split_params(params, matrix.n_benchmarks)

    delta = capability[:, None] - difficulty[None, :]
    pred = sigmoid(slope[None, :] * delta, sigmoid_clip)
    diff = np.where(matrix.mask, matrix.scores - pred, 0.0)
    # d(pred)/dz = p(1-p); zero wherever the cell is masked out
    weighted = diff * pred * (1.0 - pred)

    loss = float(np.sum(diff * diff))
    grad_difficulty = 2.0 * slope * weighted.sum(axis=0)
    grad_slope = -2.0 * (weighted * delta).sum(axis=0)
    grad_capability = -2.0 * (weighted * slope[None, :]).sum(axis=1)

    loss += reg.lambda_difficulty * float(np.sum(difficulty**2))
    loss += reg.lambda_slope * float(np.sum((slope - 1.0) ** 2))
    loss += reg.lambda_capability * float(np.sum(capability**2))
    grad_difficulty = grad_difficulty + 2.0 * reg.lambda_difficulty * difficulty
    grad_slope = grad_slope + 2.0 * reg.lambda_slope * (slope - 1.0)
    grad_capability = grad_capability + 2.0 * reg.lambda_capability * capability

    return loss, np.concatenate([grad_difficulty, grad_slope, grad_capability])


def project_slopes(
    params: np.ndarray, n_benchmarks: int, slope_min: float, slope_max: float
) -> np.ndarray:
    """Clip discrimination entries into [slope_min, slope_max]."""
    projected = params.copy()
    projected[n_benchmarks : 2 * n_benchmarks] = np.clip(
        projected[n_benchmarks : 2 * n_benchmarks], slope_min, slope_max
    )
    return projected


def optimize(
    matrix: ScoreMatrix,
    reg: Regularization,
    settings: TCISettings,
) -> OptimizerState:
    """Run momentum gradient descent and return the final state."""
    n_benchmarks = matrix.n_benchmarks
    state = OptimizerState.initial(n_benchmarks, matrix.n_models, settings.learning_rate)

    for iteration in range(settings.max_iterations):
        loss, gradient = objective_and_gradient(
            state.params, matrix, reg, settings.sigmoid_clip
        )
        state.iterations = iteration + 1
        state.loss_history.append(loss)

        if loss > state.previous_loss:
            state.learning_rate *= 0.5
            state.velocity = state.velocity * 0.5
        elif loss < state.previous_loss - settings.improvement_threshold:
            state.learning_rate = min(
                state.learning_rate * settings.learning_rate_growth,
                settings.max_learning_rate,
            )

        state.velocity = settings.momentum * state.velocity - state.learning_rate * gradient
        state.params = project_slopes(
            state.params + state.velocity,
            n_benchmarks,
            settings.slope_min,
            settings.slope_max,
        )

        grad_norm = float(np.linalg.norm(gradient))
        if (
            grad_norm < settings.gradient_tolerance
            or abs(loss - state.previous_loss) < settings.loss_tolerance
        ):
            _log.debug(
                "IRT fit converged after %d iterations (loss=%.6g, |grad|=%.3g)",
                state.iterations,
                loss,
                grad_norm,
            )
            break

        state.previous_loss = loss
    else:
        _log.debug("IRT fit stopped at max_iterations=%d", settings.max_iterations)

    return state


def default_parameters(
    models: Sequence[ModelKey],
    benchmark_keys: Sequence[str] = BENCHMARK_KEYS,
) -> IRTParameters:
    """Neutral parameters used when no fit can run."""
    return IRTParameters(
        difficulty={key: 0.0 for key in benchmark_keys},
        slope={key: 1.0 for key in benchmark_keys},
        capability={model: 0.0 for model in models},
        fit_residual=math.inf,
        n_models=len(models),
        n_benchmarks=len(benchmark_keys),
    )


def fit_score_matrix(
    matrix: ScoreMatrix, settings: TCISettings | None = None
) -> IRTParameters:
    """Fit 2PL parameters to an already-built score matrix."""
    settings = settings or TCISettings()
    if matrix.n_models == 0 or matrix.n_benchmarks == 0 or matrix.n_observed == 0:
        return default_parameters(matrix.models, matrix.benchmarks)

    reg = Regularization.for_matrix(matrix, settings)
    state = optimize(matrix, reg, settings)
    final_loss, _ = objective_and_gradient(
        state.params, matrix, reg, settings.sigmoid_clip
    )
    difficulty, slope, capability = split_params(state.params, matrix.n_benchmarks)

    return IRTParameters(
        difficulty={k: float(difficulty[j]) for j, k in enumerate(matrix.benchmarks)},
        slope={k: float(slope[j]) for j, k in enumerate(matrix.benchmarks)},
        capability={m: float(capability[i]) for i, m in enumerate(matrix.models)},
        fit_residual=final_loss,
        n_models=matrix.n_models,
        n_benchmarks=matrix.n_benchmarks,
        iterations=state.iterations,
    )


def fit_irt_parameters(
    records: Sequence[BenchmarkRecord],
    settings: TCISettings | None = None,
    benchmark_keys: Sequence[str] = BENCHMARK_KEYS,
) -> IRTParameters:
    """Fit 2PL parameters from leaderboard records."""
    if not records:
        return default_parameters([], benchmark_keys)
    return fit_score_matrix(build_score_matrix(records, benchmark_keys), settings)
