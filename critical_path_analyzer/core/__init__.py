"""Core components for critical path analysis."""

from .analyzer import CriticalPathAnalyzer
from .errors import AmbiguousTraceRootError, CriticalPathError, UnrecognizedItemKindError
from .types import CriticalPathConfig, CriticalPathItem, Trace, TraceItem

__all__ = [
    "CriticalPathAnalyzer",
    "CriticalPathConfig",
    "CriticalPathItem",
    "Trace",
    "TraceItem",
    "CriticalPathError",
    "UnrecognizedItemKindError",
    "AmbiguousTraceRootError",
]
