"""Pytest configuration and fixtures."""

import pytest
import tempfile
import json
from pathlib import Path
from typing import Dict, Any


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def sample_users() -> Dict[str, Any]:
    """A single uniform table of user records."""
    return {
        "users": [
            {"id": 1, "name": "John", "active": True},
            {"id": 2, "name": "Jane", "active": False},
            {"id": 3, "name": "Bob", "active": True},
        ]
    }


@pytest.fixture
def sample_nested_records() -> Dict[str, Any]:
    """Records with a two-level nested object column."""
    return {
        "places": [
            {
                "id": 1,
                "name": "Office",
                "address": {"city": "Berlin", "geo": {"lat": 52.52, "lng": 13.405}},
            },
            {
                "id": 2,
                "name": "Warehouse",
                "address": {"city": "Hamburg", "geo": {"lat": 53.55, "lng": 9.993}},
            },
        ]
    }


@pytest.fixture
def sample_document() -> Dict[str, Any]:
    """A document mixing tables, inline arrays, objects and scalars."""
    return {
        "products": [
            {"sku": "A-1", "price": 9.5, "tags": ["new", "sale"]},
            {"sku": "B-2", "price": 12, "tags": []},
        ],
        "settings": {"theme": "dark", "notifications": True},
        "version": 3,
        "empty": [],
        "mixed": [1, "two", None, {"three": 3}],
    }


@pytest.fixture
def ort_file(temp_dir):
    """Write a small ORT document and return its path."""
    path = temp_dir / "users.ort"
    path.write_text("users:id,name:\n1,John\n2,Jane\n", encoding="utf-8")
    return path


@pytest.fixture
def json_file(temp_dir, sample_users):
    """Write the sample users as a JSON document and return its path."""
    path = temp_dir / "users.json"
    path.write_text(json.dumps(sample_users), encoding="utf-8")
    return path
