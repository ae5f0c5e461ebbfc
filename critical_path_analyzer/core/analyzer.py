"""
Main critical path analyzer orchestrator.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from ..core.types import CriticalPathConfig, CriticalPathItem, TraceItem
from ..extractors import ItemExtractor
from ..processors import (
    TraceFileProcessor,
    TraceAssembler,
    PathAggregator,
    ParallelCriticalPathProcessor,
    find_item_events,
)
from ..formatters import format_duration_us

logger = logging.getLogger(__name__)


class CriticalPathAnalyzer:
    """Main orchestrator for critical path analysis."""

    def __init__(
        self,
        num_workers: int = 1,
        strict_roots: bool = False,
        sort_by: Optional[str] = None,
        correct_clock_skew: bool = True
    ):
        """
        Initialize the CriticalPathAnalyzer.

        Args:
            num_workers: Number of worker processes used to scan traces
            strict_roots: If True, traces with several root items raise instead of being dropped
            sort_by: Ordering of the merged result (None, 'hash', 'depth' or 'duration')
            correct_clock_skew: If True, align downstream services onto their caller's clock
        """
        # Configuration
        self.config = CriticalPathConfig(
            num_workers=num_workers,
            strict_roots=strict_roots,
            sort_by=sort_by,
            correct_clock_skew=correct_clock_skew
        )

        # Results of the last run
        self.documents: List[Any] = []
        self.critical_path: List[CriticalPathItem] = []
        self.critical_paths: Dict[str, List[CriticalPathItem]] = {}
        self.sample_size = 0
        self.trace_summary: Dict[str, Dict[str, Any]] = {}
        self.dropped_trace_ids: List[str] = []

        # Initialize components
        self.item_extractor = ItemExtractor()
        self.file_processor = TraceFileProcessor()
        self.assembler = TraceAssembler(strict_roots=strict_roots, correct_skew=correct_clock_skew)
        self.parallel_processor = ParallelCriticalPathProcessor(num_workers)

    def calculate_critical_path(self, events: Iterable[Any]) -> List[CriticalPathItem]:
        """
        Compute the merged critical path of a batch of spans and transactions.

        Args:
            events: APM span/transaction documents and/or TraceItems, from any number of traces

        Returns:
            Merged critical path items; the number of traces they average
            over is stored on sample_size

        Raises:
            UnrecognizedItemKindError: If a document is neither a span nor a transaction
        """
        self.documents = list(events)
        self.critical_path = []
        self.critical_paths = {}
        self.sample_size = 0
        self.trace_summary = {}

        # Step 1: Normalize documents
        items = self.item_extractor.to_trace_items(self.documents)

        # Step 2: Build one tree per trace
        traces = self.assembler.assemble_all(items)
        self.dropped_trace_ids = list(self.assembler.dropped_trace_ids)

        # Step 3: Scan each trace and merge
        merged = self.parallel_processor.process_traces(traces)
        self.critical_paths = self.parallel_processor.critical_paths
        self.sample_size = self.parallel_processor.sample_size

        self.critical_path = PathAggregator.sort_items(merged, self.config.sort_by)

        for trace_id, trace in traces.items():
            duration_us = trace.root.end - trace.root.start
            self.trace_summary[trace_id] = {
                'root_name': trace.root.name,
                'duration_us': duration_us,
                'duration_formatted': format_duration_us(duration_us),
                'item_count': trace.item_count,
                'critical_path_length': len(self.critical_paths[trace_id]) - 1,
            }

        logger.info(
            "Computed critical path over %d traces (%d dropped): %d merged items",
            len(traces), len(self.dropped_trace_ids), len(self.critical_path)
        )
        return self.critical_path

    def process_trace_file(self, file_path: str) -> List[CriticalPathItem]:
        """
        Read span and transaction documents from a JSON file and compute
        their merged critical path.

        Args:
            file_path: Path to the JSON file

        Returns:
            Merged critical path items
        """
        documents = self.file_processor.process_file(file_path)
        critical_path = self.calculate_critical_path(documents)

        print(f"\nFound {len(self.trace_summary)} traces with a single root")
        if self.dropped_trace_ids:
            print(f"Dropped {len(self.dropped_trace_ids)} traces without a usable root")
        print(f"Merged critical path has {len(critical_path)} items")

        return critical_path

    def to_result(self) -> Dict[str, Any]:
        """Merged items of the last run together with the number of traces behind them."""
        return {
            'items': self.critical_path,
            'sample_size': self.sample_size,
        }

    def find_item_events(self, item_id: str) -> Dict[str, Dict[str, Any]]:
        """
        Look up the span and/or transaction behind an item id in the last batch.

        Args:
            item_id: Span or transaction id

        Returns:
            Dict with 'span' and/or 'transaction' keys, empty when nothing matches
        """
        documents = [
            d.source if isinstance(d, TraceItem) else d
            for d in self.documents
        ]
        return find_item_events([d for d in documents if d], item_id)
