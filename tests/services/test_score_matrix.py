"""Tests for building the masked score matrix."""

import numpy as np
import pytest

from telcoindex.services.tci import build_score_matrix


class TestBuildScoreMatrix:
    def test_scores_normalized_and_masked(self, make_record) -> None:
        """Observed scores are divided by 100; missing cells are masked out."""
        records = [
            make_record("m1", {"teleqna": 80, "telelogs": None}),
            make_record("m2", {"teleqna": 50, "telelogs": 25}),
        ]

        matrix = build_score_matrix(records, ("teleqna", "telelogs"))

        assert matrix.models == (("m1", "TestLab"), ("m2", "TestLab"))
        assert matrix.benchmarks == ("teleqna", "telelogs")
        np.testing.assert_allclose(matrix.scores, [[0.8, 0.0], [0.5, 0.25]])
        assert matrix.mask.tolist() == [[True, False], [True, True]]
        assert matrix.n_observed == 3

    def test_default_keys_cover_every_benchmark(self, full_records) -> None:
        matrix = build_score_matrix(full_records)

        assert matrix.n_models == 4
        assert matrix.n_benchmarks == 5
        assert matrix.mask.all()

    def test_arrays_are_read_only(self, full_records) -> None:
        matrix = build_score_matrix(full_records)

        with pytest.raises(ValueError):
            matrix.scores[0, 0] = 1.0

    def test_empty_records(self) -> None:
        matrix = build_score_matrix([], ("teleqna",))

        assert matrix.n_models == 0
        assert matrix.n_observed == 0
