"""
Exceptions raised during critical path analysis.
"""


class CriticalPathError(Exception):
    """Base class for critical path analysis errors."""


class UnrecognizedItemKindError(CriticalPathError, ValueError):
    """An input document is neither a span nor a transaction."""

    def __init__(self, kind, document_id=None):
        self.kind = kind
        self.document_id = document_id
        message = f"Unrecognized trace item kind: {kind!r}"
        if document_id:
            message += f" (document {document_id})"
        super().__init__(message)


class AmbiguousTraceRootError(CriticalPathError):
    """A trace has more than one item without a parent."""

    def __init__(self, trace_id, root_ids):
        self.trace_id = trace_id
        self.root_ids = list(root_ids)
        super().__init__(
            f"Trace {trace_id} has {len(self.root_ids)} root items: {', '.join(self.root_ids)}"
        )
