"""
Trace assembler for flat lists of trace items.
"""

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from ..core.errors import AmbiguousTraceRootError
from ..core.types import ROOT_ID, Trace, TraceItem
from .clock_skew import correct_clock_skew

logger = logging.getLogger(__name__)


class TraceAssembler:
    """Builds per-trace root and children index from a flat list of items."""

    def __init__(self, strict_roots: bool = False, correct_skew: bool = True):
        """
        Args:
            strict_roots: If True, raise AmbiguousTraceRootError for traces with
                          more than one root item instead of dropping them
            correct_skew: If True, shift downstream transactions and their spans
                          onto the root's clock after assembly
        """
        self.strict_roots = strict_roots
        self.correct_skew = correct_skew
        self.dropped_trace_ids: List[str] = []

    @staticmethod
    def group_by_trace(items: Iterable[TraceItem]) -> Dict[str, List[TraceItem]]:
        """
        Group items by trace id, keeping first-seen order.

        Args:
            items: Flat, unordered trace items from one or more traces

        Returns:
            Dictionary mapping trace_id -> list of items
        """
        traces = defaultdict(list)
        for item in items:
            traces[item.trace_id].append(item)
        return dict(traces)

    def assemble(self, items: List[TraceItem], trace_id: Optional[str] = None) -> Optional[Trace]:
        """
        Build one trace from its items. Items without a parent are bucketed
        under the reserved 'root' key; the trace is only assembled when that
        bucket holds exactly one item. Timestamps are then corrected for clock
        skew between services unless correct_skew is off.

        Args:
            items: All items sharing one trace id
            trace_id: Trace id, used for logging and errors

        Returns:
            The assembled Trace, or None when the trace has no usable root
        """
        children_by_parent_id = defaultdict(list)
        for item in items:
            children_by_parent_id[item.parent_id or ROOT_ID].append(item)

        roots = children_by_parent_id.get(ROOT_ID, [])

        if not roots:
            logger.debug("Dropping trace %s: no root item among %d items", trace_id, len(items))
            return None

        if len(roots) > 1:
            if self.strict_roots:
                raise AmbiguousTraceRootError(trace_id, [r.id for r in roots])
            logger.warning(
                "Dropping trace %s: %d items without a parent (%s)",
                trace_id, len(roots), ', '.join(str(r.id) for r in roots)
            )
            return None

        trace = Trace(trace_id, roots[0], dict(children_by_parent_id))
        if self.correct_skew:
            trace = correct_clock_skew(trace)
        return trace

    def assemble_all(self, items: Iterable[TraceItem]) -> Dict[str, Trace]:
        """
        Group items by trace and assemble every trace that has a single root.

        Args:
            items: Flat trace items from one or more traces

        Returns:
            Dictionary mapping trace_id -> Trace, without the dropped traces
        """
        self.dropped_trace_ids = []
        traces = {}
        for trace_id, trace_items in self.group_by_trace(items).items():
            trace = self.assemble(trace_items, trace_id)
            if trace is None:
                self.dropped_trace_ids.append(trace_id)
            else:
                traces[trace_id] = trace
        return traces
