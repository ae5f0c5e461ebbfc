"""
Parallel critical path processor for multi-trace batches.
"""

import os
from multiprocessing import Pool
from typing import Dict, List, Optional, Tuple

from ..core.types import CriticalPathItem, Trace
from .critical_path_scanner import CriticalPathScanner
from .path_aggregator import PathAggregator


def _scan_single_trace(args: Tuple[str, Trace]) -> Tuple[str, List[CriticalPathItem]]:
    """
    Scan a single trace independently. Designed to run in a worker process.

    Args:
        args: Tuple of (trace_id, trace)

    Returns:
        Tuple of (trace_id, critical_path)
    """
    trace_id, trace = args
    return trace_id, CriticalPathScanner().scan(trace)


class ParallelCriticalPathProcessor:
    """Scan traces in parallel using multiprocessing, then merge in one place."""

    def __init__(self, num_workers: Optional[int] = None):
        """
        Initialize parallel processor.

        Args:
            num_workers: Number of worker processes (default: CPU count)
        """
        self.num_workers = num_workers or os.cpu_count() or 4
        self.critical_paths: Dict[str, List[CriticalPathItem]] = {}
        self.sample_size = 0

    def scan_traces(self, traces: Dict[str, Trace], progress_callback=None) -> Dict[str, List[CriticalPathItem]]:
        """
        Scan every assembled trace.

        Args:
            traces: Dictionary mapping trace_id -> Trace
            progress_callback: Optional callback(completed, total) for progress updates

        Returns:
            Dictionary mapping trace_id -> critical path, in input order
        """
        trace_count = len(traces)

        if trace_count <= 1 or self.num_workers <= 1:
            return self._scan_sequential(traces, progress_callback)

        work_items = list(traces.items())
        critical_paths = {}
        completed = 0

        effective_workers = min(self.num_workers, trace_count)

        with Pool(processes=effective_workers) as pool:
            for trace_id, critical_path in pool.imap(_scan_single_trace, work_items, chunksize=1):
                critical_paths[trace_id] = critical_path

                completed += 1
                if progress_callback:
                    progress_callback(completed, trace_count)

        return critical_paths

    def process_traces(self, traces: Dict[str, Trace], progress_callback=None) -> List[CriticalPathItem]:
        """
        Scan traces in parallel and fold the results into one merged critical path.

        Args:
            traces: Dictionary mapping trace_id -> Trace
            progress_callback: Optional callback(completed, total) for progress updates

        Returns:
            Merged critical path items
        """
        self.critical_paths = self.scan_traces(traces, progress_callback)
        self.sample_size = len(self.critical_paths)
        return PathAggregator.merge(self.critical_paths.values(), self.sample_size)

    def _scan_sequential(self, traces: Dict[str, Trace], progress_callback=None) -> Dict[str, List[CriticalPathItem]]:
        """
        Fallback sequential scanning for single trace or single worker.
        """
        scanner = CriticalPathScanner()
        critical_paths = {}

        total = len(traces)
        completed = 0

        for trace_id, trace in traces.items():
            critical_paths[trace_id] = scanner.scan(trace)

            completed += 1
            if progress_callback:
                progress_callback(completed, total)

        return critical_paths
