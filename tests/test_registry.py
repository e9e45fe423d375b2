import re

from field_formatter.parsing.line_parser import parse_line
from field_formatter.parsing.registry import GrammarRegistry
from field_formatter.schemas import FormatterItem

PRICE_RE = re.compile(r"^(.+?)\s+\$(\d+(?:\.\d{2})?)$")


def parse_price(text, section=None):
    m = PRICE_RE.match(text)
    if not m:
        return None
    return FormatterItem(
        row_type="priced", content=m.group(1), extra={"price": m.group(2)}
    )


def test_builtin_registry():
    registry = GrammarRegistry.builtin()
    assert set(registry) == {"time_block", "contact", "item"}
    assert len(registry) == 3
    assert "drink_item" not in registry
    assert registry.resolve("drink_item") is registry.resolve("item")
    assert registry.resolve("text") is None


def test_registered_grammar_takes_part_in_dispatch(section_of):
    registry = GrammarRegistry.builtin()
    registry.register("priced", parse_price)

    section = section_of("item", "priced")
    assert parse_line("Coffee $3.50", section, registry) == FormatterItem(
        row_type="priced", content="Coffee", extra={"price": "3.50"}
    )
    assert parse_line("(2) Coffee", section, registry).row_type == "item"


def test_registries_are_independent(section_of):
    custom = GrammarRegistry.builtin()
    custom.register("priced", parse_price)

    section = section_of("priced")
    assert parse_line("Coffee $3.50", section, custom).row_type == "priced"
    # the same line through a fresh registry never sees the custom grammar
    assert parse_line("Coffee $3.50", section, GrammarRegistry.builtin()) == (
        FormatterItem(row_type="priced", content="Coffee $3.50")
    )
    assert "priced" not in GrammarRegistry.builtin()


def test_register_replaces_builtin(section_of):
    registry = GrammarRegistry.builtin()
    registry.register("contact", lambda text, section=None: None)
    result = parse_line("Jane Doe (Manager)", section_of("contact", "category"), registry)
    assert result == FormatterItem(row_type="category", content="Jane Doe (Manager)")
