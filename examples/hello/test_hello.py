"""Tests for the hello example."""


class TestHelloApp:
    """Verify the hello example renders correctly."""

    def test_output(self, example_app) -> None:
        assert example_app.output == "Hello, World!"

    def test_rerender_with_different_data(self, example_app) -> None:
        result = example_app.template.render(name="Ada")
        assert result == "Hello, Ada!"

    def test_missing_name_renders_empty(self, example_app) -> None:
        assert example_app.template.render() == "Hello, !"

    def test_template_is_inline(self, example_templates) -> None:
        assert list(example_templates) == ["template"]
        assert example_templates["template"].name is None
