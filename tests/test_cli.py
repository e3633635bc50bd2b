"""Tests for cli.py: configuration resolution and mode dispatch."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from diffusion_walk.cli import _coerce_bool, _coerce_int, main


def _trailing_json(out: str) -> dict[str, object]:
    return json.loads(out[out.rindex("\n{") + 1 :])


def test_coerce_int_rejects_bool() -> None:
    with pytest.raises(ValueError, match="integer"):
        _coerce_int(True, "length")


def test_coerce_int_rejects_fractional_float() -> None:
    with pytest.raises(ValueError):
        _coerce_int(2.5, "width")
    assert _coerce_int(3.0, "width") == 3
    assert _coerce_int("7", "width") == 7


def test_coerce_bool_strings() -> None:
    assert _coerce_bool("yes", "quiet") is True
    assert _coerce_bool("off", "quiet") is False
    with pytest.raises(ValueError):
        _coerce_bool("maybe", "quiet")


def test_single_run_prints_grid_trace_and_summary(capsys: pytest.CaptureFixture[str]) -> None:
    main(["--length", "3", "--width", "4", "--ttl", "4", "--seed", "1"])
    out = capsys.readouterr().out
    assert "0---1---2---3" in out
    assert "forwarded the agent message" in out
    assert "forwarded the search message" in out
    summary = _trailing_json(out)
    assert summary["mode"] == "single"
    assert summary["seed"] == 1


def test_quiet_prints_only_summary(capsys: pytest.CaptureFixture[str]) -> None:
    main(["--length", "3", "--width", "3", "--seed", "2", "--quiet"])
    summary = json.loads(capsys.readouterr().out)
    assert summary["mode"] == "single"
    assert isinstance(summary["found"], bool)


def test_batch_mode(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["--runs", "2", "--length", "4", "--width", "4", "--out-dir", str(tmp_path)])
    summary = json.loads(capsys.readouterr().out)
    assert summary["mode"] == "batch"
    assert summary["runs"] == 2
    assert (tmp_path / "logs" / "run_summary.parquet").exists()


def test_config_file_values_and_cli_override(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"length": 3, "width": 3, "seed": 5, "quiet": True}))
    main(["--config", str(config_path), "--seed", "6"])
    summary = json.loads(capsys.readouterr().out)
    assert summary["seed"] == 6


def test_missing_config_file_exits(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        main(["--config", str(tmp_path / "missing.json")])


def test_invalid_grid_exits() -> None:
    with pytest.raises(SystemExit):
        main(["--length", "0"])


def test_unknown_theme_exits() -> None:
    with pytest.raises(SystemExit):
        main(["--theme", "neon", "--quiet"])


def test_render_dispatches(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    output = tmp_path / "walk.png"
    with patch("diffusion_walk.cli.render_walks") as mock_render:
        main(["--length", "3", "--width", "3", "--seed", "0", "--quiet", "--render", str(output)])
    mock_render.assert_called_once()
    assert mock_render.call_args.args[1] == output
    capsys.readouterr()


def test_render_rejected_in_batch_mode(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        main(["--runs", "2", "--out-dir", str(tmp_path), "--render", str(tmp_path / "w.png")])


def test_coerce_int_rejects_non_finite_float() -> None:
    with pytest.raises(ValueError, match="finite"):
        _coerce_int(float("inf"), "length")
    with pytest.raises(ValueError, match="finite"):
        _coerce_int(float("nan"), "width")


def test_infinite_config_value_exits(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text('{"length": Infinity}')
    with pytest.raises(SystemExit):
        main(["--config", str(config_path), "--quiet"])


def test_unseeded_batches_draw_fresh_base_seeds(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with patch("diffusion_walk.cli.random.SystemRandom.randrange", side_effect=[11, 12]):
        main(["--runs", "1", "--length", "3", "--width", "3", "--out-dir", str(tmp_path / "a")])
        first = json.loads(capsys.readouterr().out)
        main(["--runs", "1", "--length", "3", "--width", "3", "--out-dir", str(tmp_path / "b")])
        second = json.loads(capsys.readouterr().out)
    assert (first["base_seed"], second["base_seed"]) == (11, 12)


def test_seeded_batch_reports_given_base_seed(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    main(
        ["--runs", "1", "--length", "3", "--width", "3", "--seed", "9", "--out-dir", str(tmp_path)]
    )
    assert json.loads(capsys.readouterr().out)["base_seed"] == 9


def test_single_run_announces_origin_and_sink_before_walks(
    capsys: pytest.CaptureFixture[str],
) -> None:
    main(["--length", "4", "--width", "4", "--ttl", "3", "--seed", "3"])
    out = capsys.readouterr().out
    assert out.index("Event sensed by nodes") < out.index("forwarded the agent message")
    assert out.index("emits the agent message") < out.index("forwarded the agent message")
    assert out.index("forwarded the agent message") < out.index("Sink node is")
    assert out.index("Sink node is") < out.index("forwarded the search message")
