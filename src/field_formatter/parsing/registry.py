import logging
from collections.abc import Iterator
from typing import Optional

from field_formatter.enums import RowType
from field_formatter.parsing.grammars import parse_contact, parse_item, parse_time_block
from field_formatter.schemas import Grammar

BUILTIN_GRAMMARS: dict[str, Grammar] = {
    RowType.TIME_BLOCK.value: parse_time_block,
    RowType.CONTACT.value: parse_contact,
    RowType.ITEM.value: parse_item,
}

# Row types parsed by another row type's grammar.
GRAMMAR_ALIASES: dict[str, str] = {
    RowType.DRINK_ITEM.value: RowType.ITEM.value,
}


class GrammarRegistry:
    """
    Mapping from row-type identifier to its grammar.

    Instances are independent: registering a grammar on one registry never
    affects another, so several configurations can coexist.
    """

    def __init__(self, grammars: Optional[dict[str, Grammar]] = None):
        self._grammars: dict[str, Grammar] = dict(grammars or {})

    @classmethod
    def builtin(cls) -> "GrammarRegistry":
        """A fresh registry holding the `time_block`, `contact` and `item` grammars."""
        return cls(BUILTIN_GRAMMARS)

    def register(self, row_type: str, grammar: Grammar) -> None:
        if row_type in self._grammars:
            logging.debug(f"Replacing grammar for row type {row_type!r}")
        self._grammars[row_type] = grammar

    def resolve(self, row_type: str) -> Optional[Grammar]:
        """Grammar that parses `row_type`, following aliases such as drink_item → item."""
        return self._grammars.get(GRAMMAR_ALIASES.get(row_type, row_type))

    def __contains__(self, row_type: str) -> bool:
        return row_type in self._grammars

    def __iter__(self) -> Iterator[str]:
        return iter(self._grammars)

    def __len__(self) -> int:
        return len(self._grammars)
