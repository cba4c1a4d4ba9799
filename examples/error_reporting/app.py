"""Error reporting -- positions, kinds and source snippets.

Parse errors and render errors carry the offending offset, a 1-based
row and column, and a stable kind name. ``str(error)`` is plain text;
``format_compact()`` adds terminal colors when supported.

Run:
    python app.py
"""

from simplejinja import ParseError, RenderError, Template

BROKEN_SOURCE = """\
<ul>
{% for item in items %}
  <li>{{ item.name }}</li>
</ul>"""

FAILING_SOURCE = """\
<p>Average: {{ total / count }}</p>"""

try:
    Template.from_string(BROKEN_SOURCE, name="list.html")
except ParseError as e:
    parse_error = e

stats = Template.from_string(FAILING_SOURCE, name="stats.html")

try:
    stats.render({"total": 10, "count": 0})
except RenderError as e:
    render_error = e


def main() -> None:
    for error in (parse_error, render_error):
        print(error.format_compact())
        print()


if __name__ == "__main__":
    main()
