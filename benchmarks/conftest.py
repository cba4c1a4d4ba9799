from __future__ import annotations

import json
import os
import platform
import sys
from pathlib import Path
from typing import Any

import pytest
from jinja2 import Environment as Jinja2Environment

try:
    import importlib.metadata as importlib_metadata
except ModuleNotFoundError:  # pragma: no cover
    import importlib_metadata  # type: ignore


BASE_DIR = Path(__file__).resolve().parent
BENCHMARK_OUTPUT_DIR = BASE_DIR.parent / ".benchmarks"


def _version(dist: str) -> str:
    try:
        return importlib_metadata.version(dist)
    except importlib_metadata.PackageNotFoundError:
        return "unknown"


def collect_environment_metadata() -> dict[str, object]:
    """Capture reproducibility metadata for each benchmark run."""
    return {
        "python": {
            "version": platform.python_version(),
            "implementation": platform.python_implementation(),
            "executable": sys.executable,
        },
        "os": {
            "system": platform.system(),
            "release": platform.release(),
            "machine": platform.machine(),
        },
        "cpu": {
            "processor": platform.processor(),
            "count": os.cpu_count(),
        },
        "simplejinja": _version("simplejinja"),
        "jinja2": _version("jinja2"),
    }


@pytest.fixture(scope="session")
def environment_metadata() -> dict[str, object]:
    """Write environment metadata to .benchmarks for ingestion."""
    metadata = collect_environment_metadata()
    BENCHMARK_OUTPUT_DIR.mkdir(exist_ok=True)
    (BENCHMARK_OUTPUT_DIR / "environment.json").write_text(json.dumps(metadata, indent=2))
    return metadata


@pytest.fixture(scope="session")
def jinja2_env() -> Jinja2Environment:
    # Keep the final newline so outputs compare byte for byte
    return Jinja2Environment(keep_trailing_newline=True)


@pytest.fixture(scope="session")
def small_context() -> dict[str, Any]:
    """Small context: a handful of scalars and one short list."""
    return {
        "title": "Benchmark",
        "user": {"name": "Ada", "admin": True},
        "items": [f"item-{i}" for i in range(5)],
    }


@pytest.fixture(scope="session")
def medium_context() -> dict[str, Any]:
    """Medium context: 100 records with nested fields."""
    return {
        "title": "Catalog",
        "items": [
            {"id": i, "name": f"Item_{i}", "price": i * 1.5, "tags": [f"t{i % 3}", "all"]}
            for i in range(100)
        ],
        "threshold": 50,
    }


@pytest.fixture(scope="session")
def large_context() -> dict[str, Any]:
    """Large context: 1000 rows of 10 cells."""
    return {"rows": [[r * 10 + c for c in range(10)] for r in range(1000)]}
