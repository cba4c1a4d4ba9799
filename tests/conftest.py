"""Pytest configuration and fixtures for simplejinja tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from simplejinja import ParseError, RenderError, Template


@pytest.fixture
def render() -> Callable[..., str]:
    """Compile and render a one-shot template."""

    def _render(source: str, data: Any = None, **kwargs: Any) -> str:
        return Template.from_string(source).render(data, **kwargs)

    return _render


@pytest.fixture
def parse_error() -> Callable[[str], ParseError]:
    """Parse a template that must fail and return the error."""

    def _parse_error(source: str) -> ParseError:
        with pytest.raises(ParseError) as exc_info:
            Template.from_string(source)
        return exc_info.value

    return _parse_error


@pytest.fixture
def render_error() -> Callable[..., RenderError]:
    """Render a template that must fail and return the error."""

    def _render_error(source: str, data: Any = None) -> RenderError:
        template = Template.from_string(source)
        with pytest.raises(RenderError) as exc_info:
            template.render(data)
        return exc_info.value

    return _render_error


@pytest.fixture
def no_color(monkeypatch: pytest.MonkeyPatch) -> None:
    """Disable terminal colors so diagnostics compare as plain text."""
    from simplejinja.utils import terminal

    monkeypatch.setattr(terminal, "_USE_COLORS", False)


class Article:
    """Plain host object with attributes, a property and a method."""

    def __init__(self, title: str, tags: list[str], author: Any = None):
        self.title = title
        self.tags = tags
        self.author = author
        self._secret = "hidden"

    @property
    def slug(self) -> str:
        return self.title.lower().replace(" ", "-")

    def publish(self) -> str:
        return "published"


@pytest.fixture
def article() -> Article:
    return Article("Hello World", ["python", "templates"], author={"name": "Ada"})
