"""Tests for the benchmark registry."""

import pytest

from telcoindex.services.benchmarks import BENCHMARK_KEYS, BENCHMARKS, BENCHMARKS_BY_ID


class TestRegistry:
    def test_column_order(self) -> None:
        """Key order fixes the score matrix columns."""
        assert BENCHMARK_KEYS == ("teleqna", "telelogs", "telemath", "tsg", "teletables")
        assert tuple(b.id for b in BENCHMARKS) == BENCHMARK_KEYS

    def test_lookup_by_id(self) -> None:
        assert set(BENCHMARKS_BY_ID) == set(BENCHMARK_KEYS)
        assert BENCHMARKS_BY_ID["telemath"].name == "TeleMath"

    @pytest.mark.parametrize(
        "bench_id,hf_column",
        [
            pytest.param("tsg", "3gpp_tsg", id="renamed"),
            pytest.param("teleqna", "teleqna", id="same"),
        ],
    )
    def test_hf_columns(self, bench_id: str, hf_column: str) -> None:
        assert BENCHMARKS_BY_ID[bench_id].hf_column == hf_column

    def test_configs_are_complete(self) -> None:
        for bench in BENCHMARKS:
            assert bench.short_name
            assert bench.description
            assert bench.base_error > 0


class TestDerivedNames:
    def test_fallback_names_for_unlisted_benchmark(self) -> None:
        from telcoindex.services.benchmarks.registry import (
            DEFAULT_BASE_ERROR,
            _build_config,
        )

        config = _build_config("ran_planning")

        assert config.name == "RAN Planning"
        assert config.short_name == "RP"
        assert config.hf_column == "ran_planning"
        assert config.base_error == DEFAULT_BASE_ERROR
