"""Hello World -- the simplest simplejinja example.

Compile a template from a string and render it with data.

Run:
    python app.py
"""

from simplejinja import Template

# Compile from string
template = Template.from_string("Hello, {{ name }}!")

# Render with data
output = template.render({"name": "World"})


def main() -> None:
    print(output)
    print()

    # Multiple renders with different data
    for name in ["Ada", "Grace", "Python"]:
        print(template.render(name=name))


if __name__ == "__main__":
    main()
