"""Pytest configuration and fixtures."""

import json
import tempfile
from pathlib import Path
from typing import Any, Dict

import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def write_json(temp_dir):
    """Write a document to a file in the temporary directory and return its path."""
    def _write(name: str, data: Any) -> str:
        path = temp_dir / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def sample_typed_json() -> Dict[str, Any]:
    """Sample DynamoDB typed document for testing."""
    return {
        "id": {"S": "user-001"},
        "name": {"S": "Alice"},
        "age": {"N": "30"},
        "balance": {"N": "12.5"},
        "active": {"BOOL": "true"},
        "deleted": {"BOOL": "false"},
        "nickname": {"NULL": "true"},
        "created_at": {"S": "2000-01-01T00:00:00Z"},
        "profile": {
            "M": {
                "city": {"S": "New York"},
                "zip": {"N": "10001"}
            }
        },
        "orders": {
            "L": [
                {"M": {"sku": {"S": "A-1"}, "qty": {"N": "2"}}},
                {"M": {"sku": {"S": "B-2"}, "qty": {"N": "1"}}}
            ]
        }
    }


@pytest.fixture
def sample_plain_json() -> Dict[str, Any]:
    """Expected plain form of sample_typed_json."""
    return {
        "id": "user-001",
        "name": "Alice",
        "age": 30.0,
        "balance": 12.5,
        "active": True,
        "deleted": False,
        "nickname": None,
        "created_at": 946684800,
        "profile": {
            "city": "New York",
            "zip": 10001.0
        },
        "orders": [
            {"sku": "A-1", "qty": 2.0},
            {"sku": "B-2", "qty": 1.0}
        ]
    }
