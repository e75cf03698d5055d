"""Telco Capability Index: score matrix, 2PL IRT fit and composite scoring."""

from telcoindex.services.tci.irt import (
    IRTParameters,
    OptimizerState,
    fit_irt_parameters,
    fit_score_matrix,
)
from telcoindex.services.tci.matrix import ScoreMatrix, build_score_matrix
from telcoindex.services.tci.scorer import (
    CompositeScore,
    Insufficient,
    Override,
    Scored,
    TCIResult,
    calculate_tci,
    calculate_tci_stderr,
    composite_error,
    composite_value,
    score_all,
    score_record,
)

__all__ = [
    "CompositeScore",
    "IRTParameters",
    "Insufficient",
    "OptimizerState",
    "Override",
    "ScoreMatrix",
    "Scored",
    "TCIResult",
    "build_score_matrix",
    "calculate_tci",
    "calculate_tci_stderr",
    "composite_error",
    "composite_value",
    "fit_irt_parameters",
    "fit_score_matrix",
    "score_all",
    "score_record",
]
