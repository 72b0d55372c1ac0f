"""Shared test fixtures for all test modules."""

import pytest


@pytest.fixture
def airline_documents() -> list[dict]:
    """Flat documents with a sparse boolean field."""
    return [
        {"id": 1, "name": "A"},
        {"id": 2, "name": "B", "active": True},
    ]


@pytest.fixture
def wrapped_documents() -> list[dict]:
    """Rows as returned by SELECT * over a collection aliased 'airline'."""
    return [
        {"airline": {"id": 10, "name": "40-Mile Air", "geo": {"lat": 64.1, "lon": -145.5}}},
        {"airline": {"id": 11, "name": "Texas Wings", "website": "https://texaswings.example"}},
    ]


@pytest.fixture
def flavor() -> dict:
    """One flavor as produced by an INFER statement."""
    return {
        "Flavor": "`type` = \"hotel\"",
        "properties": {
            "id": {"type": "number", "samples": [1, 2]},
            "name": {"type": "string", "samples": ["Hotel A", "Hotel B"]},
            "url": {"type": ["string", "null"], "samples": ["https://hotel.example", None]},
            "pets_ok": {"type": "boolean", "samples": [True]},
            "geo": {
                "type": "object",
                "properties": {
                    "lat": {"type": "number", "samples": [51.5]},
                    "accuracy": {"type": "string", "samples": ["ROOFTOP"]},
                },
            },
            "reviews": {"type": "array", "samples": [[]]},
        },
    }


@pytest.fixture
def query_result(airline_documents) -> dict:
    """Successful query service response."""
    return {"status": "success", "results": airline_documents}


@pytest.fixture
def infer_result(flavor) -> dict:
    """INFER response: results hold one list of flavors."""
    second = {"properties": {"other": {"type": "string"}}}
    return {"status": "success", "results": [[flavor, second]]}
