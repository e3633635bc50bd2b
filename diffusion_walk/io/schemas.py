"""Arrow schema definitions for simulation artifacts.

The trace log holds one row per visited node plus one outcome row per search
walk; hop rows leave ``outcome`` and ``route`` null.
"""

from __future__ import annotations

import pyarrow as pa

TRACE_SCHEMA_VERSION = 1

EVENT_RECORD_TYPE = pa.struct(
    [
        ("event_id", pa.int64()),
        ("jumps_to_event", pa.int64()),
        ("next_neighbor_toward_event", pa.int64()),
    ]
)

TRACE_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("phase", pa.string()),
        ("node_id", pa.int64()),
        ("event_id", pa.int64()),
        ("jumps", pa.int64()),
        ("next_pointer", pa.int64()),
        ("ttl", pa.int64()),
        ("table_snapshot", pa.list_(EVENT_RECORD_TYPE)),
        ("outcome", pa.string()),
        ("route", pa.list_(pa.int64())),
    ]
)

RUN_SUMMARY_SCHEMA = pa.schema(
    [
        ("schema_version", pa.int64()),
        ("run_id", pa.string()),
        ("seed", pa.int64()),
        ("agent_origin", pa.int64()),
        ("sink_node", pa.int64()),
        ("found", pa.bool_()),
        ("intersection", pa.int64()),
        ("route_length", pa.int64()),
        ("search_hops", pa.int64()),
        ("nodes_with_event", pa.int64()),
    ]
)
