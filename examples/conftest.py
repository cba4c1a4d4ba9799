"""Shared pytest configuration for simplejinja examples.

``example_app`` runs the ``app.py`` next to the test file and returns its
globals as a namespace. Each test gets a fresh run, so module-level
renders happen again and no state carries over between tests.

``example_templates`` collects the compiled templates an app defines, so
tests can re-render them with their own data.
"""

import runpy
from pathlib import Path
from types import SimpleNamespace

import pytest

from simplejinja import Template


@pytest.fixture
def example_app(request: pytest.FixtureRequest) -> SimpleNamespace:
    """Run the sibling app.py without triggering its ``__main__`` block."""
    app_path = Path(request.path).parent / "app.py"
    namespace = runpy.run_path(str(app_path), run_name=f"example_{app_path.parent.name}")
    return SimpleNamespace(**namespace)


@pytest.fixture
def example_templates(example_app: SimpleNamespace) -> dict[str, Template]:
    """Templates defined at the top level of the app, by variable name."""
    return {name: value for name, value in vars(example_app).items() if isinstance(value, Template)}
