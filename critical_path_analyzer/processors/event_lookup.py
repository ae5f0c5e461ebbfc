"""
Lookup of the span and transaction behind a critical path item.
"""

from typing import Any, Dict, Iterable, Optional

from ..core.types import SPAN, TRANSACTION
from ..extractors import ItemExtractor


def _find(documents, kind: str, item_id: str) -> Optional[Dict[str, Any]]:
    for document in documents:
        if (ItemExtractor.extract_kind(document) == kind and
                (document.get(kind) or {}).get('id') == item_id):
            return document
    return None


def find_item_events(documents: Iterable[Dict[str, Any]], item_id: str) -> Dict[str, Dict[str, Any]]:
    """
    Find the document with the given span or transaction id. For a span, the
    transaction it belongs to ('transaction.id' on the span) is returned too.

    Args:
        documents: APM span and transaction documents
        item_id: Span or transaction id

    Returns:
        Dict with 'span' and/or 'transaction' keys, empty when nothing matches
    """
    documents = list(documents)

    transaction = _find(documents, TRANSACTION, item_id)
    if transaction is not None:
        return {'transaction': transaction}

    span = _find(documents, SPAN, item_id)
    if span is None:
        return {}

    result = {'span': span}
    owner_id = (span.get('transaction') or {}).get('id')
    if owner_id:
        owner = _find(documents, TRANSACTION, owner_id)
        if owner is not None:
            result['transaction'] = owner
    return result
