"""
Clock skew correction for assembled traces.
"""

from collections import deque
from typing import Optional

from ..core.types import SPAN, TRANSACTION, Trace, TraceItem


def clock_skew(item: TraceItem, parent: Optional[TraceItem]) -> float:
    """
    Skew to add to an item so it lines up with its (already corrected) parent.

    A transaction is the entry point of a service and may run on another
    host's clock. When it starts before its parent it is moved forward by
    that offset plus half of the time the parent spent beyond it, which
    splits the network latency evenly on both sides. Spans run on their
    transaction's clock and take their parent's skew.

    Args:
        item: Item to place
        parent: Corrected parent item, None for the trace root

    Returns:
        Skew in microseconds
    """
    if parent is None:
        return 0
    if item.kind == SPAN:
        return parent.skew
    if item.kind == TRANSACTION:
        offset_start = parent.start - item.start
        if offset_start > 0:
            latency = max(parent.duration - item.duration, 0) / 2
            return offset_start + latency
    return 0


def correct_clock_skew(trace: Trace) -> Trace:
    """
    Walk the trace breadth-first from the root and shift every item onto the
    root's clock. Shifted items are new TraceItems; the input trace is not
    modified. Items not reachable from the root keep their timestamps.

    Args:
        trace: Assembled trace

    Returns:
        Trace with corrected timestamps
    """
    corrected = {}
    queue = deque([(trace.root, None)])

    while queue:
        item, parent = queue.popleft()
        if id(item) in corrected:
            continue

        skew = clock_skew(item, parent)
        placed = item.shifted(skew) if skew else item
        corrected[id(item)] = placed

        for child in trace.children_of(item):
            queue.append((child, placed))

    children_by_parent_id = {
        parent_id: [corrected.get(id(child), child) for child in children]
        for parent_id, children in trace.children_by_parent_id.items()
    }
    return Trace(trace.trace_id, corrected[id(trace.root)], children_by_parent_id)
