import logging
from typing import Optional

from field_formatter.enums import RowType
from field_formatter.parsing.registry import GrammarRegistry
from field_formatter.schemas import FormatterItem, SectionTypeConfig


def _fallback_row_type(allowed: list[str], section: Optional[SectionTypeConfig]) -> str:
    if RowType.CATEGORY.value in allowed:
        return RowType.CATEGORY.value
    default = section.default_row_type if section else None
    return default or (allowed[0] if allowed else RowType.TEXT.value)


def parse_line(
    text: str,
    section: Optional[SectionTypeConfig] = None,
    registry: Optional[GrammarRegistry] = None,
) -> Optional[FormatterItem]:
    """
    Parse one line into an item.

    Tries the section's allowed row types in order; the first grammar that
    matches wins. Lines no grammar matches become plain records of the
    section's fallback row type. Blank lines give None.

    :param text: one line of text, surrounding whitespace is ignored
    :param section: section config; without one only `text` is allowed
    :param registry: grammar registry, defaults to the built-in grammars
    :return: FormatterItem or None
    """
    trimmed = (text or "").strip()
    if not trimmed:
        return None
    if registry is None:
        registry = GrammarRegistry.builtin()

    try:
        allowed = [RowType.TEXT.value]
        if section is not None and section.allowed_row_types is not None:
            allowed = list(section.allowed_row_types)

        for row_type in allowed:
            grammar = registry.resolve(row_type)
            if grammar is None:
                continue
            result = grammar(trimmed, section)
            if result is not None:
                return result

        return FormatterItem(
            row_type=_fallback_row_type(allowed, section), content=trimmed
        )
    except Exception as e:
        # A failing grammar degrades the line to plain text.
        logging.debug(f"Grammar failed on {trimmed!r}: {e!r}")
        return FormatterItem(row_type=RowType.TEXT.value, content=trimmed)


def parse_text_to_items(
    text: str,
    section: Optional[SectionTypeConfig] = None,
    registry: Optional[GrammarRegistry] = None,
) -> list[FormatterItem]:
    """Parse a block of text, one item per non-blank line, ordered 0..N-1."""
    if not text:
        return []
    if registry is None:
        registry = GrammarRegistry.builtin()

    lines = [line.strip() for line in text.split("\n")]
    items: list[FormatterItem] = []
    for index, line in enumerate(line for line in lines if line):
        item = parse_line(line, section, registry) or FormatterItem(
            row_type=RowType.TEXT.value, content=line
        )
        item.order = index
        items.append(item)
    return items
