"""Loops, conditionals, member access and the replace filter.

Data can be any mix of mappings, sequences and plain objects. Templates
read keys and public attributes; methods and underscore names stay
hidden.

Run:
    python app.py
"""

from dataclasses import dataclass, field

from simplejinja import Template


@dataclass
class Item:
    name: str
    price: float
    qty: int
    tags: list[str] = field(default_factory=list)

    @property
    def total(self) -> float:
        return self.price * self.qty


TEMPLATE_SOURCE = """\
Order for {{ customer.name | replace('_', ' ') }}
{% for item in items %}\
- {{ item.name }} x{{ item.qty }} = {{ item.total }}\
{% if item.qty > 1 %} (bulk){% elif item.tags[0] == 'sale' %} (sale){% endif %}
{% endfor %}\
Items: {{ items_count }}, first tag: {{ items[0].tags[0] }}
{% if not vip %}Standard shipping{% else %}Express shipping{% endif %}"""

template = Template.from_string(TEMPLATE_SOURCE, name="order.txt")

items = [
    Item("Widget", 2.5, 4, ["tools"]),
    Item("Gadget", 10.0, 1, ["sale"]),
    Item("Gizmo", 7.25, 1),
]

output = template.render(
    {
        "customer": {"name": "Ada_Lovelace"},
        "items": items,
        "items_count": len(items),
        "vip": False,
    }
)


def main() -> None:
    print(output)


if __name__ == "__main__":
    main()
