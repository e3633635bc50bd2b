"""Tests for trace sinks."""

from __future__ import annotations

import io
from pathlib import Path

import pyarrow.parquet as pq
import pytest

from diffusion_walk.domain.event_table import EventRecord
from diffusion_walk.io.schemas import TRACE_SCHEMA
from diffusion_walk.io.trace import (
    ConsoleTraceSink,
    MemoryTraceSink,
    MultiTraceSink,
    ParquetTraceSink,
    Phase,
    SearchOutcome,
    TraceRecord,
)


def _hop(node_id: int, jumps: int, next_pointer: int | None, ttl: int) -> TraceRecord:
    return TraceRecord(
        phase=Phase.AGENT,
        node_id=node_id,
        event_id=0,
        jumps=jumps,
        next_pointer=next_pointer,
        ttl=ttl,
        table_snapshot=(EventRecord(0, jumps, next_pointer),),
    )


class TestConsoleTraceSink:
    def test_agent_hop_text(self) -> None:
        stream = io.StringIO()
        ConsoleTraceSink(stream).record_hop(_hop(5, 0, 1, 3))
        assert stream.getvalue() == (
            "Node 5 forwarded the agent message: event 0, jumps 0, next neighbor 1, ttl 3\n"
            "----------- event table of node 5 -----------\n"
            "event 0, jumps 0, next neighbor 1\n"
            "----------------------------------------------\n"
            "\n"
        )

    def test_search_hop_shows_none_pointer(self) -> None:
        stream = io.StringIO()
        record = TraceRecord(Phase.SEARCH, 4, 0, 3, None, 0, ())
        ConsoleTraceSink(stream).record_hop(record)
        first_line = stream.getvalue().splitlines()[0]
        assert first_line == (
            "Node 4 forwarded the search message for event 0: jumps 3, next neighbor none, ttl 0"
        )

    def test_found_outcome_prints_route(self) -> None:
        stream = io.StringIO()
        ConsoleTraceSink(stream).record_outcome(SearchOutcome(0, True, (3, 7, 11)))
        lines = stream.getvalue().splitlines()
        assert "intersect at node 3" in lines[0]
        assert lines[1] == "Route: 3 -> 7 -> 11"

    def test_not_found_outcome(self) -> None:
        stream = io.StringIO()
        ConsoleTraceSink(stream).record_outcome(SearchOutcome(0, False, (1, 2)))
        assert stream.getvalue().startswith("No intersection")


def test_multi_sink_fans_out() -> None:
    a, b = MemoryTraceSink(), MemoryTraceSink()
    multi = MultiTraceSink(a, b)
    multi.record_hop(_hop(1, 0, 2, 4))
    multi.record_outcome(SearchOutcome(0, False, (1,)))
    assert a.hops == b.hops and len(a.hops) == 1
    assert a.outcomes == b.outcomes and len(a.outcomes) == 1


class TestParquetTraceSink:
    def test_writes_rows_with_trace_schema(self, tmp_path: Path) -> None:
        path = tmp_path / "logs" / "trace_log.parquet"
        with ParquetTraceSink(path, flush_threshold=2) as sink:
            sink.start_run("run0_s0")
            sink.record_hop(_hop(5, 0, 1, 2))
            sink.record_hop(_hop(1, 1, 0, 1))
            sink.record_hop(_hop(0, 2, None, 0))
            sink.record_outcome(SearchOutcome(0, True, (0, 4)))
        table = pq.read_table(path)
        assert table.column_names == TRACE_SCHEMA.names
        assert table.num_rows == 4
        assert sink.rows_written == 4
        rows = table.to_pylist()
        assert [r["node_id"] for r in rows[:3]] == [5, 1, 0]
        assert rows[2]["next_pointer"] is None
        assert rows[0]["table_snapshot"] == [
            {"event_id": 0, "jumps_to_event": 0, "next_neighbor_toward_event": 1}
        ]
        assert rows[3]["outcome"] == "FOUND"
        assert rows[3]["route"] == [0, 4]
        assert rows[3]["node_id"] is None
        assert {r["run_id"] for r in rows} == {"run0_s0"}

    def test_empty_sink_writes_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "trace.parquet"
        ParquetTraceSink(path).close()
        table = pq.read_table(path)
        assert table.num_rows == 0
        assert table.column_names == TRACE_SCHEMA.names

    def test_close_is_idempotent(self, tmp_path: Path) -> None:
        path = tmp_path / "trace.parquet"
        sink = ParquetTraceSink(path)
        sink.record_hop(_hop(2, 0, 3, 1))
        sink.close()
        sink.close()
        assert pq.read_table(path).num_rows == 1

    def test_rejects_bad_flush_threshold(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError):
            ParquetTraceSink(tmp_path / "t.parquet", flush_threshold=0)
