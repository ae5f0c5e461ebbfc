"""
Critical path scanner for assembled traces.
"""

import hashlib
import json
from typing import List, Tuple

from ..core.types import ROOT_ID, CriticalPathItem, Trace, TraceItem, TraceSegment


def structural_hash(name: str, parent_hash: str) -> str:
    """
    Identity of a node by its name and its parent's hash, so the same logical
    call gets the same hash in every trace regardless of span ids.

    Args:
        name: Span or transaction name
        parent_hash: Hash of the parent node ('root' for the trace root)

    Returns:
        SHA-1 hex digest of the canonical JSON encoding of the pair
    """
    payload = json.dumps({'name': name, 'parent': parent_hash},
                         sort_keys=True, separators=(',', ':'))
    return hashlib.sha1(payload.encode('utf-8')).hexdigest()


def child_scan_order(child: TraceItem) -> Tuple:
    """
    Sort key for the backward scan: latest end first. Among equal ends the
    earlier start (longer child) comes first, then the item id.
    """
    return (-child.end, child.start, child.id or '')


class CriticalPathScanner:
    """Computes the critical path decomposition of one trace."""

    @staticmethod
    def root_item(trace: Trace) -> CriticalPathItem:
        """Synthetic root carrying the whole trace duration and no self time."""
        return {
            'hash': ROOT_ID,
            'name': ROOT_ID,
            'self_duration': 0,
            'duration': trace.root.end - trace.root.start,
            'parent_hash': '',
            'depth': 0,
            'layers': {0: ROOT_ID},
            'doc_type': 'none',
            'sample_id': None,
            'sample_doc': None,
        }

    def scan(self, trace: Trace) -> List[CriticalPathItem]:
        """
        Walk the trace from the root with an explicit stack, clipping every
        child to the part of its parent's window not yet claimed by a
        later-ending sibling.

        Args:
            trace: Assembled trace

        Returns:
            The synthetic root item followed by one item per visited segment
        """
        stack = [
            TraceSegment(
                item=trace.root,
                interval_start=trace.root.start,
                interval_end=trace.root.end,
                parent_hash=ROOT_ID,
                depth=1,
                layers={0: ROOT_ID},
            )
        ]

        segments = []
        while stack:
            segment = stack.pop()
            path_item, children_on_path = self.scan_segment(trace, segment)
            stack.extend(children_on_path)
            segments.append(path_item)

        return [self.root_item(trace)] + segments

    def scan_segment(self, trace: Trace, segment: TraceSegment) -> Tuple[CriticalPathItem, List[TraceSegment]]:
        """
        Compute self time of one segment and the child segments on its critical path.

        Args:
            trace: Trace the segment belongs to
            segment: Segment popped from the work stack

        Returns:
            Tuple of (critical path item, child segments to visit)
        """
        item = segment.item
        this_hash = structural_hash(item.name, segment.parent_hash)
        this_layers = dict(segment.layers)
        this_layers[segment.depth] = this_hash

        self_duration = 0
        children_on_path = []
        children = trace.children_of(item)

        if children:
            scan_timestamp = segment.interval_end
            for child in sorted(children, key=child_scan_order):
                child_start = max(child.start, segment.interval_start)
                child_end = min(child.end, scan_timestamp)

                if child_start >= scan_timestamp or child_end < segment.interval_start:
                    # shadowed by a later-ending sibling or outside the window
                    continue

                if child_end < scan_timestamp:
                    self_duration += scan_timestamp - child_end

                children_on_path.append(TraceSegment(
                    item=child,
                    interval_start=child_start,
                    interval_end=child_end,
                    parent_hash=this_hash,
                    depth=segment.depth + 1,
                    layers=this_layers,
                ))
                scan_timestamp = child_start

            if scan_timestamp > segment.interval_start:
                self_duration += scan_timestamp - segment.interval_start
        else:
            self_duration = segment.interval_end - segment.interval_start

        path_item: CriticalPathItem = {
            'hash': this_hash,
            'name': item.name,
            'self_duration': self_duration,
            'duration': segment.interval_end - segment.interval_start,
            'parent_hash': segment.parent_hash,
            'depth': segment.depth,
            'layers': this_layers,
            'doc_type': item.kind,
            'sample_id': item.id,
            'sample_doc': item.source,
        }
        return path_item, children_on_path
