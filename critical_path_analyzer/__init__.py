"""
Critical Path Analyzer - Distributed Trace Critical Path Analysis
"""

__version__ = "1.0.0"

from .core.analyzer import CriticalPathAnalyzer
from .core.errors import AmbiguousTraceRootError, CriticalPathError, UnrecognizedItemKindError
from .core.types import CriticalPathConfig, CriticalPathItem, TraceItem

__all__ = [
    "CriticalPathAnalyzer",
    "CriticalPathConfig",
    "CriticalPathItem",
    "TraceItem",
    "CriticalPathError",
    "UnrecognizedItemKindError",
    "AmbiguousTraceRootError",
]
