"""
Type definitions for critical path analysis.
"""

from typing import Any, Dict, List, Optional, TypedDict


ROOT_ID = 'root'

SPAN = 'span'
TRANSACTION = 'transaction'
ITEM_KINDS = (SPAN, TRANSACTION)

SORT_OPTIONS = ('hash', 'depth', 'duration')


class CriticalPathItem(TypedDict):
    """One node of a critical path, merged across traces by its hash."""
    hash: str
    name: str
    self_duration: float
    duration: float
    parent_hash: str
    depth: int
    layers: Dict[int, str]
    doc_type: str
    sample_id: Optional[str]
    sample_doc: Optional[Dict[str, Any]]


class TraceItem:
    """A span or transaction normalized to a common shape."""

    __slots__ = ('id', 'parent_id', 'name', 'start', 'end', 'kind', 'trace_id', 'source', 'skew')

    def __init__(
        self,
        id: str,
        name: str,
        start: int,
        end: int,
        kind: str = SPAN,
        parent_id: Optional[str] = None,
        trace_id: Optional[str] = None,
        source: Optional[Dict[str, Any]] = None,
        skew: float = 0
    ):
        """
        Args:
            id: Span or transaction id
            name: Span or transaction name
            start: Start timestamp in microseconds
            end: End timestamp in microseconds (start + duration)
            kind: Either 'span' or 'transaction'
            parent_id: Id of the parent item, None for the trace root
            trace_id: Id of the trace this item belongs to
            source: The original document the item was read from
            skew: Clock skew already applied to start and end, in microseconds
        """
        self.id = id
        self.parent_id = parent_id
        self.name = name
        self.start = start
        self.end = end
        self.kind = kind
        self.trace_id = trace_id
        self.source = source
        self.skew = skew

    @property
    def duration(self) -> int:
        return self.end - self.start

    def shifted(self, skew: float) -> 'TraceItem':
        """Copy of this item moved by skew microseconds onto its parent's clock."""
        return TraceItem(
            id=self.id,
            name=self.name,
            start=self.start + skew,
            end=self.end + skew,
            kind=self.kind,
            parent_id=self.parent_id,
            trace_id=self.trace_id,
            source=self.source,
            skew=self.skew + skew
        )

    def __repr__(self) -> str:
        return (f"TraceItem(id={self.id!r}, parent_id={self.parent_id!r}, "
                f"name={self.name!r}, start={self.start}, end={self.end})")


class Trace:
    """An assembled trace: its root item plus a parent id -> children index."""

    def __init__(self, trace_id: Optional[str], root: TraceItem,
                 children_by_parent_id: Dict[str, List[TraceItem]]):
        self.trace_id = trace_id
        self.root = root
        self.children_by_parent_id = children_by_parent_id

    def children_of(self, item: TraceItem) -> List[TraceItem]:
        return self.children_by_parent_id.get(item.id, [])

    @property
    def item_count(self) -> int:
        return sum(len(children) for children in self.children_by_parent_id.values())


class TraceSegment:
    """A node waiting on the scanner's work stack, clipped to its window."""

    __slots__ = ('item', 'interval_start', 'interval_end', 'parent_hash', 'depth', 'layers')

    def __init__(self, item: TraceItem, interval_start: int, interval_end: int,
                 parent_hash: str, depth: int, layers: Dict[int, str]):
        self.item = item
        self.interval_start = interval_start
        self.interval_end = interval_end
        self.parent_hash = parent_hash
        self.depth = depth
        self.layers = layers


class CriticalPathConfig:
    """Configuration for critical path analysis."""

    def __init__(
        self,
        num_workers: int = 1,
        strict_roots: bool = False,
        sort_by: Optional[str] = None,
        correct_clock_skew: bool = True
    ):
        """
        Initialize critical path analysis configuration.

        Args:
            num_workers: Number of worker processes used to scan traces.
                         Default: 1 (scan sequentially in-process)

            strict_roots: If True, a trace with more than one root-less item
                          raises AmbiguousTraceRootError instead of being dropped.
                          Default: False (log a warning and drop the trace)

            sort_by: Ordering of the merged critical path: None keeps first-seen
                     order, 'hash' sorts by hash, 'depth' by depth then longest
                     duration, 'duration' by longest duration.
                     Default: None

            correct_clock_skew: If True, downstream transactions that start before
                                their parent are shifted onto the parent's clock
                                before scanning, and their spans follow them.
                                Default: True
        """
        if sort_by is not None and sort_by not in SORT_OPTIONS:
            raise ValueError(
                f"Invalid sort_by {sort_by!r}, expected one of {', '.join(SORT_OPTIONS)}"
            )
        if num_workers < 1:
            raise ValueError("num_workers must be at least 1")

        self.num_workers = num_workers
        self.strict_roots = strict_roots
        self.sort_by = sort_by
        self.correct_clock_skew = correct_clock_skew
