"""
Path aggregator merging critical paths across traces.
"""

from typing import Dict, Iterable, List, Optional

from ..core.types import CriticalPathItem, TraceItem
from .critical_path_scanner import CriticalPathScanner
from .trace_assembler import TraceAssembler


class PathAggregator:
    """Averages critical path items with identical structural hashes."""

    def __init__(self, assembler: Optional[TraceAssembler] = None,
                 scanner: Optional[CriticalPathScanner] = None):
        """
        Args:
            assembler: TraceAssembler instance (default: non-strict assembler)
            scanner: CriticalPathScanner instance
        """
        self.assembler = assembler or TraceAssembler()
        self.scanner = scanner or CriticalPathScanner()
        self.critical_paths: Dict[str, List[CriticalPathItem]] = {}
        self.sample_size = 0

    def aggregate(self, items: Iterable[TraceItem]) -> List[CriticalPathItem]:
        """
        Assemble and scan every trace in the batch, then merge the results.

        Args:
            items: Flat trace items from one or more traces

        Returns:
            Merged critical path, in first-seen order. The number of traces
            averaged over is kept on sample_size.
        """
        traces = self.assembler.assemble_all(items)
        self.critical_paths = {
            trace_id: self.scanner.scan(trace)
            for trace_id, trace in traces.items()
        }
        self.sample_size = len(self.critical_paths)
        return self.merge(self.critical_paths.values(), self.sample_size)

    @staticmethod
    def merge(critical_paths: Iterable[List[CriticalPathItem]], n: int) -> List[CriticalPathItem]:
        """
        Fold per-trace critical paths into per-hash means over n traces.

        Every contribution is divided by n before it is added, so a trace
        without a node at some hash counts as zero for that hash.

        Args:
            critical_paths: One critical path per scanned trace
            n: Number of traces scanned

        Returns:
            Merged critical path items, in first-seen order
        """
        merged: Dict[str, CriticalPathItem] = {}

        for critical_path in critical_paths:
            for item in critical_path:
                existing = merged.get(item['hash'])
                if existing is None:
                    # first trace seen at a hash supplies its identifying fields
                    merged[item['hash']] = dict(
                        item,
                        self_duration=item['self_duration'] / n,
                        duration=item['duration'] / n,
                        layers=dict(item['layers']),
                    )
                else:
                    existing['self_duration'] += item['self_duration'] / n
                    existing['duration'] += item['duration'] / n

        return list(merged.values())

    @staticmethod
    def sort_items(items: List[CriticalPathItem], sort_by: Optional[str]) -> List[CriticalPathItem]:
        """
        Order merged items for callers needing a stable ordering.

        Args:
            items: Merged critical path items
            sort_by: None, 'hash', 'depth' or 'duration'

        Returns:
            Sorted copy of the items (or the items unchanged when sort_by is None)
        """
        if sort_by is None:
            return items
        if sort_by == 'hash':
            return sorted(items, key=lambda i: i['hash'])
        if sort_by == 'depth':
            return sorted(items, key=lambda i: (i['depth'], -i['duration'], i['hash']))
        if sort_by == 'duration':
            return sorted(items, key=lambda i: (-i['duration'], i['hash']))
        raise ValueError(f"Invalid sort_by {sort_by!r}")
