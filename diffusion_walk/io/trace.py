"""Trace records and the write-only sinks that receive them.

Engines report every visited node as a :class:`TraceRecord` and close each
search walk with a :class:`SearchOutcome`. Sinks never feed anything back
into a walk.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol, TextIO

import pyarrow as pa
import pyarrow.parquet as pq

from diffusion_walk.config.constants import FLUSH_THRESHOLD
from diffusion_walk.domain.event_table import EventRecord
from diffusion_walk.io.schemas import TRACE_SCHEMA


class Phase(Enum):
    """Which walk produced a trace record."""

    AGENT = "AGENT"
    SEARCH = "SEARCH"


@dataclass(frozen=True)
class TraceRecord:
    """One visited node: the message state there and the node's table afterwards."""

    phase: Phase
    node_id: int
    event_id: int
    jumps: int
    next_pointer: int | None
    ttl: int
    table_snapshot: tuple[EventRecord, ...]


@dataclass(frozen=True)
class SearchOutcome:
    """Final record of a search walk."""

    event_id: int
    found: bool
    route: tuple[int, ...]

    @property
    def label(self) -> str:
        return "FOUND" if self.found else "NOT_FOUND"


class TraceSink(Protocol):
    def record_hop(self, record: TraceRecord) -> None: ...

    def record_outcome(self, outcome: SearchOutcome) -> None: ...


class MemoryTraceSink:
    """Keeps records in memory, in emission order."""

    def __init__(self) -> None:
        self.hops: list[TraceRecord] = []
        self.outcomes: list[SearchOutcome] = []

    def record_hop(self, record: TraceRecord) -> None:
        self.hops.append(record)

    def record_outcome(self, outcome: SearchOutcome) -> None:
        self.outcomes.append(outcome)


class MultiTraceSink:
    """Forwards every record to each wrapped sink in order."""

    def __init__(self, *sinks: TraceSink) -> None:
        self.sinks = sinks

    def record_hop(self, record: TraceRecord) -> None:
        for sink in self.sinks:
            sink.record_hop(record)

    def record_outcome(self, outcome: SearchOutcome) -> None:
        for sink in self.sinks:
            sink.record_outcome(outcome)


def _pointer_text(pointer: int | None) -> str:
    return "none" if pointer is None else str(pointer)


class ConsoleTraceSink:
    """Human-readable hop log with an event-table dump after every hop."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stdout

    def _write(self, line: str = "") -> None:
        self.stream.write(line + "\n")

    def record_hop(self, record: TraceRecord) -> None:
        if record.phase is Phase.AGENT:
            self._write(
                f"Node {record.node_id} forwarded the agent message: "
                f"event {record.event_id}, jumps {record.jumps}, "
                f"next neighbor {_pointer_text(record.next_pointer)}, ttl {record.ttl}"
            )
        else:
            self._write(
                f"Node {record.node_id} forwarded the search message for event "
                f"{record.event_id}: jumps {record.jumps}, "
                f"next neighbor {_pointer_text(record.next_pointer)}, ttl {record.ttl}"
            )
        self._write(f"----------- event table of node {record.node_id} -----------")
        for entry in record.table_snapshot:
            self._write(
                f"event {entry.event_id}, jumps {entry.jumps_to_event}, "
                f"next neighbor {_pointer_text(entry.next_neighbor_toward_event)}"
            )
        self._write("-" * 46)
        self._write()

    def record_outcome(self, outcome: SearchOutcome) -> None:
        if not outcome.found:
            self._write("No intersection of the agent path and the search path was found")
            return
        self._write(
            "Agent path and search path intersect at node "
            f"{outcome.route[0]}; forwarding event data to the sink along the "
            "reversed search path"
        )
        self._write("Route: " + " -> ".join(str(node) for node in outcome.route))


def _snapshot_rows(snapshot: tuple[EventRecord, ...]) -> list[dict[str, int | None]]:
    return [
        {
            "event_id": entry.event_id,
            "jumps_to_event": entry.jumps_to_event,
            "next_neighbor_toward_event": entry.next_neighbor_toward_event,
        }
        for entry in snapshot
    ]


class ParquetTraceSink:
    """Buffers trace rows in columns and streams them into one Parquet file.

    Rows are tagged with the id passed to :meth:`start_run`. Use as a context
    manager, or call :meth:`close` to flush the tail and finalize the file.
    """

    def __init__(self, path: Path, flush_threshold: int = FLUSH_THRESHOLD) -> None:
        if flush_threshold < 1:
            raise ValueError("flush_threshold must be >= 1")
        self.path = Path(path)
        self.flush_threshold = flush_threshold
        self.run_id = ""
        self.rows_written = 0
        self._writer: pq.ParquetWriter | None = None
        self._closed = False
        self._columns: dict[str, list[object]] = {name: [] for name in TRACE_SCHEMA.names}

    def start_run(self, run_id: str) -> None:
        self.run_id = run_id

    def _append(self, row: dict[str, object]) -> None:
        for name, values in self._columns.items():
            values.append(row.get(name))
        if len(self._columns["run_id"]) >= self.flush_threshold:
            self.flush()

    def record_hop(self, record: TraceRecord) -> None:
        self._append(
            {
                "run_id": self.run_id,
                "phase": record.phase.value,
                "node_id": record.node_id,
                "event_id": record.event_id,
                "jumps": record.jumps,
                "next_pointer": record.next_pointer,
                "ttl": record.ttl,
                "table_snapshot": _snapshot_rows(record.table_snapshot),
            }
        )

    def record_outcome(self, outcome: SearchOutcome) -> None:
        self._append(
            {
                "run_id": self.run_id,
                "phase": Phase.SEARCH.value,
                "event_id": outcome.event_id,
                "outcome": outcome.label,
                "route": list(outcome.route),
            }
        )

    def flush(self) -> None:
        """Write buffered rows and clear the in-memory columns."""
        n_rows = len(self._columns["run_id"])
        if n_rows == 0:
            return
        table = pa.Table.from_pydict(self._columns, schema=TRACE_SCHEMA)
        if self._writer is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._writer = pq.ParquetWriter(self.path, TRACE_SCHEMA)
        self._writer.write_table(table)
        self.rows_written += n_rows
        for values in self._columns.values():
            values.clear()

    def close(self) -> None:
        if self._closed:
            return
        self.flush()
        if self._writer is None:
            # no rows: still write the schema
            self.path.parent.mkdir(parents=True, exist_ok=True)
            pq.write_table(TRACE_SCHEMA.empty_table(), self.path)
        else:
            self._writer.close()
            self._writer = None
        self._closed = True

    def __enter__(self) -> ParquetTraceSink:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
