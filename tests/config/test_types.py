"""Tests for diffusion_walk.config.types validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from diffusion_walk.config.types import BatchConfig, SimulationConfig


class TestSimulationConfig:
    def test_defaults(self) -> None:
        config = SimulationConfig()
        assert (config.length, config.width, config.ttl_max, config.event_id) == (7, 7, 15, 0)
        assert config.seed is None
        assert config.node_count == 49

    @pytest.mark.parametrize(
        ("kwargs", "message"),
        [
            ({"length": 0}, "length"),
            ({"width": 0}, "width"),
            ({"length": 1, "width": 1}, "two nodes"),
            ({"ttl_max": -1}, "ttl_max"),
        ],
    )
    def test_rejects_invalid_values(self, kwargs: dict[str, int], message: str) -> None:
        with pytest.raises(ValueError, match=message):
            SimulationConfig(**kwargs)

    def test_single_row_grid_is_allowed(self) -> None:
        assert SimulationConfig(length=1, width=2).node_count == 2

    def test_zero_ttl_is_allowed(self) -> None:
        assert SimulationConfig(ttl_max=0).ttl_max == 0


class TestBatchConfig:
    def test_rejects_zero_runs(self) -> None:
        with pytest.raises(ValueError, match="n_runs"):
            BatchConfig(n_runs=0)

    def test_rejects_runs_above_safety_cap(self) -> None:
        with pytest.raises(ValueError, match="safety"):
            BatchConfig(n_runs=10**9)

    def test_run_config_derives_seed_from_base(self) -> None:
        base = SimulationConfig(length=3, width=5, ttl_max=4, event_id=2, seed=99)
        config = BatchConfig(n_runs=3, out_dir=Path("out"), base_seed=10, simulation=base)
        derived = config.run_config(2)
        assert derived.seed == 12
        assert (derived.length, derived.width, derived.ttl_max, derived.event_id) == (3, 5, 4, 2)
