"""Path construction helpers for simulation output directories."""

from __future__ import annotations

from pathlib import Path


def resolve_within_base(path: Path, base_dir: Path) -> Path:
    """Resolve *path* and ensure it stays within the trusted *base_dir*.

    Raises :exc:`ValueError` if the resolved path escapes the base directory.
    """
    candidate = path if path.is_absolute() else base_dir / path
    resolved = candidate.resolve()
    base_resolved = base_dir.resolve()
    if resolved != base_resolved and base_resolved not in resolved.parents:
        raise ValueError(f"Path escapes base_dir: {path}")
    return resolved


def logs_dir(out_dir: Path) -> Path:
    """Return path to the logs subdirectory within an output directory."""
    return out_dir / "logs"


def trace_log_path(out_dir: Path) -> Path:
    """Return path to the hop-by-hop trace Parquet file."""
    return logs_dir(out_dir) / "trace_log.parquet"


def run_summary_path(out_dir: Path) -> Path:
    """Return path to the per-run summary Parquet file."""
    return logs_dir(out_dir) / "run_summary.parquet"


def batch_summary_path(out_dir: Path) -> Path:
    """Return path to the batch discovery summary JSON file."""
    return logs_dir(out_dir) / "batch_summary.json"
