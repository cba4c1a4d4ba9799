"""Concurrent rendering -- one template, 8 threads.

A compiled Template is immutable. Each render gets its own RenderContext
(published through a ContextVar), so simultaneous renders never see each
other's loop variables or output.

Run:
    python app.py
"""

from concurrent.futures import ThreadPoolExecutor

from simplejinja import Template

TEMPLATE_SOURCE = """\
<article id="page-{{ page_id }}">
  <h1>{{ title }}</h1>
  <ul>
  {% for tag in tags %}
    <li>{{ tag }}</li>
  {% endfor %}
  </ul>
</article>"""

template = Template.from_string(TEMPLATE_SOURCE, name="article.html")

pages = [
    {"page_id": i, "title": f"Page {i}", "tags": [f"tag-{i}-a", f"tag-{i}-b", f"tag-{i}-c"]}
    for i in range(8)
]


def render_page(page: dict) -> str:
    """Render a single page -- called from a worker thread."""
    return template.render(page)


with ThreadPoolExecutor(max_workers=8) as pool:
    results = list(pool.map(render_page, pages))

output = "\n".join(results)


def main() -> None:
    print(f"Rendered {len(results)} pages across 8 threads:\n")
    for i, html in enumerate(results):
        print(f"--- Thread {i} ---")
        print(html)
        print()


if __name__ == "__main__":
    main()
