"""
Pytest configuration and shared fixtures for critical path analyzer tests.
"""
import json
import pytest

from critical_path_analyzer.core.types import TraceItem, TRANSACTION


def make_item(item_id, start, end, parent_id=None, name=None, trace_id="trace-1", kind=None):
    """Build a TraceItem; root items default to transactions, others to spans."""
    if kind is None:
        kind = TRANSACTION if parent_id is None else "span"
    return TraceItem(
        id=item_id,
        name=name or item_id,
        start=start,
        end=end,
        kind=kind,
        parent_id=parent_id,
        trace_id=trace_id,
    )


def make_span_doc(span_id, trace_id, parent_id, name, timestamp_us, duration_us, transaction_id=None):
    """APM span document."""
    doc = {
        "processor": {"event": "span"},
        "trace": {"id": trace_id},
        "parent": {"id": parent_id},
        "timestamp": {"us": timestamp_us},
        "span": {"id": span_id, "name": name, "duration": {"us": duration_us}},
    }
    if transaction_id:
        doc["transaction"] = {"id": transaction_id}
    return doc


def make_transaction_doc(transaction_id, trace_id, name, timestamp_us, duration_us, parent_id=None):
    """APM transaction document."""
    doc = {
        "processor": {"event": "transaction"},
        "trace": {"id": trace_id},
        "timestamp": {"us": timestamp_us},
        "transaction": {"id": transaction_id, "name": name, "duration": {"us": duration_us}},
    }
    if parent_id:
        doc["parent"] = {"id": parent_id}
    return doc


@pytest.fixture
def item_factory():
    """Factory for TraceItems."""
    return make_item


@pytest.fixture
def sample_documents():
    """
    Two traces with the same call shape and a third without a root.

    trace-a: GET /orders [0, 1000]
               -> SELECT orders [100, 400]
               -> POST /payments (downstream transaction) [500, 900]
                    -> INSERT payment [600, 800]
    trace-b: same shape, every duration doubled
    trace-orphan: a single span whose parent was never ingested
    """
    docs = []
    for trace_id, scale in (("trace-a", 1), ("trace-b", 2)):
        docs.extend([
            make_transaction_doc(f"{trace_id}-tx1", trace_id, "GET /orders", 0, 1000 * scale),
            make_span_doc(f"{trace_id}-s1", trace_id, f"{trace_id}-tx1", "SELECT orders",
                          100 * scale, 300 * scale, transaction_id=f"{trace_id}-tx1"),
            make_span_doc(f"{trace_id}-s2", trace_id, f"{trace_id}-tx1", "POST /payments",
                          500 * scale, 400 * scale, transaction_id=f"{trace_id}-tx1"),
            make_transaction_doc(f"{trace_id}-tx2", trace_id, "POST /payments", 500 * scale,
                                 400 * scale, parent_id=f"{trace_id}-s2"),
            make_span_doc(f"{trace_id}-s3", trace_id, f"{trace_id}-tx2", "INSERT payment",
                          600 * scale, 200 * scale, transaction_id=f"{trace_id}-tx2"),
        ])
    docs.append(make_span_doc("orphan-s1", "trace-orphan", "missing", "GET /lost", 0, 50))
    return docs


@pytest.fixture
def skewed_documents():
    """
    One trace crossing two services whose clocks disagree.

    GET /a [1000, 2000]
      -> call b (exit span) [1100, 1900]
           -> GET /b (downstream transaction, clock 550us behind) [550, 1350]
    """
    return [
        make_transaction_doc("tx1", "trace-s", "GET /a", 1000, 1000),
        make_span_doc("s1", "trace-s", "tx1", "call b", 1100, 800, transaction_id="tx1"),
        make_transaction_doc("tx2", "trace-s", "GET /b", 550, 800, parent_id="s1"),
    ]


@pytest.fixture
def sample_events_file(tmp_path, sample_documents):
    """Documents written as a top-level JSON array."""
    events_file = tmp_path / "events.json"
    with open(events_file, "w") as f:
        json.dump(sample_documents, f)
    return str(events_file)


@pytest.fixture
def sample_search_response_file(tmp_path, sample_documents):
    """Documents written as an Elasticsearch search response."""
    response = {
        "took": 3,
        "hits": {
            "total": {"value": len(sample_documents)},
            "hits": [
                {"_index": "apm", "_id": str(i), "_source": doc, "sort": [doc["trace"]["id"]]}
                for i, doc in enumerate(sample_documents)
            ],
        },
    }
    response_file = tmp_path / "search_response.json"
    with open(response_file, "w") as f:
        json.dump(response, f)
    return str(response_file)
