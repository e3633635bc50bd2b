"""I/O layer: trace sinks, Arrow schemas, and output paths."""

from diffusion_walk.io.trace import (
    ConsoleTraceSink,
    MemoryTraceSink,
    MultiTraceSink,
    ParquetTraceSink,
    Phase,
    SearchOutcome,
    TraceRecord,
    TraceSink,
)

__all__ = [
    "ConsoleTraceSink",
    "MemoryTraceSink",
    "MultiTraceSink",
    "ParquetTraceSink",
    "Phase",
    "SearchOutcome",
    "TraceRecord",
    "TraceSink",
]
