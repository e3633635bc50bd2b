"""Per-node event tables and the agent message that fills them.

An event table maps an event id to the best route record a node has seen for
that event. Records only ever improve: a candidate replaces the stored record
when it is strictly closer to the event, so on equal distance the record that
arrived first is kept.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class EventRecord:
    """What a node knows about reaching the region where an event was sensed."""

    event_id: int
    jumps_to_event: int
    next_neighbor_toward_event: int | None  # None once the agent's TTL ran out


@dataclass(frozen=True)
class AgentMessage:
    """Agent message for one hop: the record it deposits plus its remaining TTL."""

    record: EventRecord
    ttl: int

    @property
    def event_id(self) -> int:
        return self.record.event_id

    @property
    def jumps_to_event(self) -> int:
        return self.record.jumps_to_event

    @property
    def next_neighbor_toward_event(self) -> int | None:
        return self.record.next_neighbor_toward_event


class EventTable:
    """Insert-or-improve mapping from event id to :class:`EventRecord`."""

    def __init__(self) -> None:
        self._records: dict[int, EventRecord] = {}

    def upsert(self, record: EventRecord) -> bool:
        """Store *record* if it is new or strictly better; return whether it was stored."""
        current = self._records.get(record.event_id)
        if current is not None and record.jumps_to_event >= current.jumps_to_event:
            return False
        self._records[record.event_id] = record
        return True

    def contains(self, event_id: int) -> bool:
        return event_id in self._records

    def get(self, event_id: int) -> EventRecord | None:
        return self._records.get(event_id)

    def snapshot(self) -> tuple[EventRecord, ...]:
        """Return the stored records ordered by event id."""
        return tuple(self._records[key] for key in sorted(self._records))

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[EventRecord]:
        return iter(self.snapshot())

    def __repr__(self) -> str:
        return f"EventTable({list(self.snapshot())!r})"
