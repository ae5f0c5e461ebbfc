"""Processors for trace assembly and critical path computation."""

from .file_processor import TraceFileProcessor
from .clock_skew import clock_skew, correct_clock_skew
from .trace_assembler import TraceAssembler
from .critical_path_scanner import CriticalPathScanner, structural_hash
from .path_aggregator import PathAggregator
from .parallel_processor import ParallelCriticalPathProcessor
from .event_lookup import find_item_events

__all__ = [
    "TraceFileProcessor",
    "clock_skew",
    "correct_clock_skew",
    "TraceAssembler",
    "CriticalPathScanner",
    "structural_hash",
    "PathAggregator",
    "ParallelCriticalPathProcessor",
    "find_item_events",
]
