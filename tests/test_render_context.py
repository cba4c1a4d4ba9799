"""RenderContext and the active-context ContextVar."""

from __future__ import annotations

import pytest

from simplejinja import RenderContext, RenderError, Template, get_render_context, render_context
from simplejinja.filters import DEFAULT_FILTERS


class TestDefaults:
    def test_filters_default_to_shared_registry(self) -> None:
        first = RenderContext(source="")
        second = RenderContext(source="")
        assert first.filters is DEFAULT_FILTERS
        assert second.filters is first.filters
        assert first.locals is not second.locals
        assert first.output is not second.output


class TestShadow:
    def test_unbound_name_is_removed(self) -> None:
        ctx = RenderContext(source="")
        with ctx.shadow("x"):
            ctx.locals["x"] = 1
        assert "x" not in ctx.locals

    def test_bound_name_is_restored(self) -> None:
        ctx = RenderContext(source="", locals={"x": "outer"})
        with ctx.shadow("x"):
            ctx.locals["x"] = "inner"
        assert ctx.locals["x"] == "outer"

    def test_restored_on_error(self) -> None:
        ctx = RenderContext(source="", locals={"x": 1})
        with pytest.raises(RuntimeError), ctx.shadow("x"):
            ctx.locals["x"] = 2
            raise RuntimeError("boom")
        assert ctx.locals["x"] == 1


class TestActiveContext:
    def test_none_outside_render(self) -> None:
        assert get_render_context() is None

    def test_render_context_sets_and_resets(self) -> None:
        with render_context("src", {"a": 1}, template_name="t.html") as ctx:
            assert get_render_context() is ctx
            assert ctx.template_name == "t.html"
            assert ctx.filters is DEFAULT_FILTERS
        assert get_render_context() is None

    def test_nested_contexts(self) -> None:
        with render_context("outer") as outer:
            with render_context("inner") as inner:
                assert get_render_context() is inner
            assert get_render_context() is outer

    def test_host_object_sees_template_name(self) -> None:
        class Watcher:
            @property
            def current(self) -> str:
                ctx = get_render_context()
                return ctx.template_name if ctx else "none"

        template = Template.from_string("{{ watcher.current }}", name="watch.html")
        assert template.render({"watcher": Watcher()}) == "watch.html"
        assert get_render_context() is None

    def test_context_reset_after_error(self) -> None:
        template = Template.from_string("{{ 1 // 0 }}")
        with pytest.raises(RenderError):
            template.render()
        assert get_render_context() is None

    def test_output_buffer(self) -> None:
        ctx = RenderContext(source="")
        ctx.write("a")
        ctx.write("b")
        assert ctx.getvalue() == "ab"
