"""
Normalization of APM span and transaction documents into trace items.
"""

from typing import Any, Dict, Iterable, List, Optional

from ..core.errors import UnrecognizedItemKindError
from ..core.types import SPAN, TRANSACTION, TraceItem


class ItemExtractor:
    """Extracts TraceItem fields from span and transaction documents."""

    @staticmethod
    def extract_kind(document: Dict[str, Any]) -> Optional[str]:
        """
        Extract the document kind from 'processor.event'.

        Args:
            document: APM span or transaction document

        Returns:
            'span', 'transaction' or whatever else the document declares
        """
        return (document.get('processor') or {}).get('event')

    @staticmethod
    def extract_trace_id(document: Dict[str, Any]) -> Optional[str]:
        return (document.get('trace') or {}).get('id')

    @staticmethod
    def extract_parent_id(document: Dict[str, Any]) -> Optional[str]:
        """
        Extract the parent id, treating a missing or empty 'parent.id' as no parent.
        """
        return (document.get('parent') or {}).get('id') or None

    @staticmethod
    def extract_timestamp_us(document: Dict[str, Any]) -> int:
        return int((document.get('timestamp') or {}).get('us', 0))

    def to_trace_item(self, document: Dict[str, Any]) -> TraceItem:
        """
        Normalize one document into a TraceItem.

        The kind only decides whether identity, name and duration are read
        from the 'span' or the 'transaction' section of the document.

        Args:
            document: APM span or transaction document

        Returns:
            TraceItem carrying the original document as its source

        Raises:
            UnrecognizedItemKindError: If the document is neither a span nor a transaction
        """
        kind = self.extract_kind(document)
        if kind not in (SPAN, TRANSACTION):
            raise UnrecognizedItemKindError(kind, self.extract_trace_id(document))

        section = document.get(kind) or {}
        start = self.extract_timestamp_us(document)
        duration_us = int((section.get('duration') or {}).get('us', 0))

        return TraceItem(
            id=section.get('id'),
            name=section.get('name', ''),
            start=start,
            end=start + duration_us,
            kind=kind,
            parent_id=self.extract_parent_id(document),
            trace_id=self.extract_trace_id(document),
            source=document
        )

    def to_trace_items(self, documents: Iterable[Any]) -> List[TraceItem]:
        """
        Normalize a batch of documents. Items that are already TraceItems pass through.

        Args:
            documents: Iterable of APM documents and/or TraceItems

        Returns:
            List of TraceItems in input order
        """
        items = []
        for document in documents:
            if isinstance(document, TraceItem):
                items.append(document)
            else:
                items.append(self.to_trace_item(document))
        return items
