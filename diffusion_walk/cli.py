"""CLI entrypoint for single simulations and seeded batches.

This module owns argument parsing, configuration resolution and mode
dispatch. Domain logic lives in:

- ``diffusion_walk.simulation`` – agent/search engines and single runs
- ``diffusion_walk.experiments`` – batch orchestration and artifacts
- ``diffusion_walk.viz`` – console grid and walk figures
"""

from __future__ import annotations

import argparse
import json
import logging
import math
import random
import sys
from dataclasses import asdict
from pathlib import Path

from diffusion_walk.config.constants import DEFAULT_EVENT_ID, GRID_LENGTH, GRID_WIDTH, TTL_MAX
from diffusion_walk.config.types import BatchConfig, SimulationConfig
from diffusion_walk.domain.topology import GridTopology
from diffusion_walk.experiments.batch import run_batch, summarize_runs
from diffusion_walk.io.trace import ConsoleTraceSink, TraceSink
from diffusion_walk.simulation.engine import run_simulation
from diffusion_walk.viz.render import render_grid_text, render_walks
from diffusion_walk.viz.theme import get_theme

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Config resolution helpers
# ---------------------------------------------------------------------------


def _coerce_int(raw: object, key: str) -> int:
    """Coerce raw value to int; rejects booleans and non-integer floats."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be an integer value")
    if isinstance(raw, float):
        if not math.isfinite(raw):
            raise ValueError(f"{key} must be a finite integer value, got {raw!r}")
        if raw != int(raw):
            raise ValueError(f"{key} must be an integer value, got {raw!r}")
        return int(raw)
    if isinstance(raw, (int, str)):
        try:
            return int(raw)
        except ValueError as exc:
            raise ValueError(f"{key} must be an integer value, got {raw!r}") from exc
    raise ValueError(f"{key} must be an integer value")


def _coerce_optional_int(raw: object, key: str) -> int | None:
    if raw is None:
        return None
    return _coerce_int(raw, key)


def _coerce_str(raw: object, key: str) -> str:
    """Coerce raw value to str; rejects booleans."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a string-coercible value")
    if isinstance(raw, (str, Path, int, float)):
        return str(raw)
    raise ValueError(f"{key} must be a string-coercible value")


def _coerce_bool(raw: object, key: str) -> bool:
    """Coerce raw value to bool with strict string-check."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        normalized = raw.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    raise ValueError(f"{key} must be a boolean value")


def _get_val(cli_val: object, key: str, file_cfg: dict[str, object], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Simulate agent/search random-walk event discovery on a sensor grid"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--length", type=int, default=None, help="grid rows")
    parser.add_argument("--width", type=int, default=None, help="grid columns")
    parser.add_argument("--ttl", type=int, default=None, help="hop budget per message")
    parser.add_argument("--event-id", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None, help="omit for a random run")
    parser.add_argument(
        "--runs",
        type=int,
        default=None,
        help="run a seeded batch of this many simulations instead of one traced run",
    )
    parser.add_argument("--out-dir", type=Path, default=None, help="batch output directory")
    parser.add_argument("--render", type=Path, default=None, help="write a walk figure here")
    parser.add_argument("--theme", type=str, default=None)
    parser.add_argument("--quiet", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def _run_single(
    config: SimulationConfig, quiet: bool, render_path: Path | None, theme_name: str
) -> dict[str, object]:
    sink: TraceSink | None = None
    if not quiet:
        print("Sensor network:")
        print(render_grid_text(GridTopology.create(config.length, config.width)))
        print()
        sink = ConsoleTraceSink(sys.stdout)
    run = run_simulation(config, sink=sink, announce=None if quiet else print)
    if render_path is not None:
        render_walks(run, render_path, theme=get_theme(theme_name))
        logger.info("walk figure written to %s", render_path)
    return {"mode": "single", **asdict(run.summary("run0"))}


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint.

    Supports ``--config path/to/config.json``. CLI arguments override
    config-file values; config-file values override built-in defaults.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")
        if not isinstance(file_cfg, dict):
            parser.error(f"Config file must hold a JSON object: {args.config}")

    try:
        sim_config = SimulationConfig(
            length=_coerce_int(_get_val(args.length, "length", file_cfg, GRID_LENGTH), "length"),
            width=_coerce_int(_get_val(args.width, "width", file_cfg, GRID_WIDTH), "width"),
            ttl_max=_coerce_int(_get_val(args.ttl, "ttl", file_cfg, TTL_MAX), "ttl"),
            event_id=_coerce_int(
                _get_val(args.event_id, "event_id", file_cfg, DEFAULT_EVENT_ID), "event_id"
            ),
            seed=_coerce_optional_int(_get_val(args.seed, "seed", file_cfg, None), "seed"),
        )
        runs = _coerce_optional_int(_get_val(args.runs, "runs", file_cfg, None), "runs")
        out_dir = Path(_coerce_str(_get_val(args.out_dir, "out_dir", file_cfg, "data"), "out_dir"))
        quiet = _coerce_bool(_get_val(args.quiet, "quiet", file_cfg, False), "quiet")
        theme_name = _coerce_str(_get_val(args.theme, "theme", file_cfg, "default"), "theme")
        get_theme(theme_name)
        batch_config = (
            BatchConfig(
                n_runs=runs,
                out_dir=out_dir,
                base_seed=(
                    sim_config.seed
                    if sim_config.seed is not None
                    else random.SystemRandom().randrange(2**31)
                ),
                simulation=sim_config,
            )
            if runs is not None
            else None
        )
    except ValueError as exc:
        parser.error(str(exc))

    if batch_config is not None:
        if args.render is not None:
            parser.error("--render applies to single runs only")
        summaries = run_batch(batch_config)
        summary: dict[str, object] = {
            "mode": "batch",
            "out_dir": str(out_dir),
            "base_seed": batch_config.base_seed,
            **summarize_runs(summaries),
        }
    else:
        summary = _run_single(sim_config, quiet, args.render, theme_name)
    print(json.dumps(summary, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
