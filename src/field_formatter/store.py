"""
Section/document store.

Holds the ordered sections of one editing session. Each section is either
edited as structured items ("hybrid" view) or as raw text ("plain" view), and
records which of the two is authoritative so the other can be derived on read.

The store is not thread-safe; one session owns one instance.
"""

import logging
from typing import Optional, TypeVar

from field_formatter.enums import ActionType, Source, ViewMode
from field_formatter.io.envelope import encode_envelope, try_decode_envelope
from field_formatter.parsing.line_parser import parse_line, parse_text_to_items
from field_formatter.parsing.registry import GrammarRegistry
from field_formatter.schemas import (
    FormatterConfig,
    FormatterItem,
    FormatterSection,
    FormatterState,
    SectionTypeConfig,
)
from field_formatter.serialize import items_to_plain_text
from field_formatter.transitions import apply_action

FALLBACK_SECTION_TYPE = "generic"

T = TypeVar("T")


def move(xs: list[T], from_index: int, to_index: int) -> bool:
    """
    Remove the element at `from_index` and insert it at `to_index`.

    `to_index` is clamped to the list, so out-of-range targets land at either end.
    """
    if not (0 <= from_index < len(xs)):
        return False
    moved = xs.pop(from_index)
    xs.insert(max(0, min(to_index, len(xs))), moved)
    return True


def renumber(xs: list[FormatterItem] | list[FormatterSection]) -> None:
    for index, x in enumerate(xs):
        x.order = index


class FormatterStore:
    def __init__(
        self,
        config: FormatterConfig,
        *,
        fixed_type: Optional[str] = None,
        default_mode: ViewMode = ViewMode.HYBRID,
        registry: Optional[GrammarRegistry] = None,
    ):
        self.config = config
        self.fixed_type = fixed_type
        self.default_mode = ViewMode(default_mode)
        self.registry = registry if registry is not None else GrammarRegistry.builtin()
        self.sections: list[FormatterSection] = []

    @classmethod
    def from_input(
        cls,
        raw: str,
        config: FormatterConfig,
        *,
        fixed_type: Optional[str] = None,
        default_mode: ViewMode = ViewMode.HYBRID,
        registry: Optional[GrammarRegistry] = None,
    ) -> "FormatterStore":
        """
        Build a store from a stored value.

        The value is either empty, a structured envelope, or freeform text that
        becomes a single section of the fallback section type.
        """
        store = cls(
            config, fixed_type=fixed_type, default_mode=default_mode, registry=registry
        )
        store.load(raw)
        return store

    def load(self, raw: str) -> None:
        value = (raw or "").strip()
        if not value:
            self.sections = []
            return

        # Envelope sections without a stored mode open in hybrid view.
        sections = try_decode_envelope(value)
        if sections is not None:
            logging.debug(f"Loaded {len(sections)} section(s) from envelope")
            self.sections = sections
            return

        section_type = self._fallback_section_type()
        section = self._new_section(section_type, order=0)
        section.items = self._parse_block(value, section_type)
        section.raw_text = value
        section.source = Source.PLAIN_TEXT
        self.sections = [section]

    # Lookups

    def _fallback_section_type(self) -> str:
        return self.fixed_type or self.config.first_section_type() or FALLBACK_SECTION_TYPE

    def _section_config(self, section_type: str) -> Optional[SectionTypeConfig]:
        return self.config.section_type(section_type)

    def _label(self, section_type: str) -> str:
        cfg = self._section_config(section_type)
        return (cfg.label if cfg else "") or section_type

    def _new_section(self, section_type: str, order: int) -> FormatterSection:
        return FormatterSection(
            type=section_type,
            title=self._label(section_type),
            order=order,
            view_mode=self.default_mode,
        )

    def _parse_block(self, text: str, section_type: str) -> list[FormatterItem]:
        return parse_text_to_items(
            text, self._section_config(section_type), self.registry
        )

    def _section(self, index: int) -> Optional[FormatterSection]:
        if 0 <= index < len(self.sections):
            return self.sections[index]
        logging.debug(f"No section at index {index}")
        return None

    def _item(self, index: int, item_index: int) -> Optional[FormatterItem]:
        section = self._section(index)
        if section is None:
            return None
        if 0 <= item_index < len(section.items):
            return section.items[item_index]
        logging.debug(f"No item at index {item_index} in section {index}")
        return None

    def _items_changed(self, section: FormatterSection) -> None:
        # Edits through the structured view make the items authoritative again.
        section.source = Source.ITEMS
        section.raw_text = ""

    # Sections

    def add_section(self, section_type: Optional[str] = None) -> FormatterSection:
        section = self._new_section(
            section_type or self._fallback_section_type(), order=len(self.sections)
        )
        self.sections.append(section)
        return section

    def remove_section(self, index: int) -> None:
        section = self._section(index)
        if section is None:
            return
        if self.fixed_type:
            # Fixed sections are cleared, never removed.
            self._clear(section)
            return
        del self.sections[index]
        renumber(self.sections)

    def clear_all(self) -> None:
        if self.fixed_type and self.sections:
            self._clear(self.sections[0])
        else:
            self.sections = []

    def _clear(self, section: FormatterSection) -> None:
        section.items = []
        section.raw_text = ""
        section.source = Source.PLAIN_TEXT

    def change_section_type(self, index: int, new_type: str) -> None:
        section = self._section(index)
        if section is None:
            return
        cfg = self._section_config(new_type)
        section.type = new_type
        if not (cfg and cfg.requires_title):
            section.title = self._label(new_type)
        self._clear(section)

    def set_section_title(self, index: int, title: str) -> None:
        section = self._section(index)
        if section is not None:
            section.title = title

    def move_section(self, from_index: int, to_index: int) -> None:
        if move(self.sections, from_index, to_index):
            renumber(self.sections)

    def toggle_section_view(self, index: int) -> None:
        """
        Switch a section between plain and hybrid view.

        To plain: the serialized items become the authoritative text.
        To hybrid: the text is re-parsed and replaces the items.
        """
        section = self._section(index)
        if section is None:
            return
        if section.view_mode == ViewMode.PLAIN:
            section.items = self._parse_block(self.plain_text(index), section.type)
            section.source = Source.ITEMS
            section.raw_text = ""
            section.view_mode = ViewMode.HYBRID
        else:
            section.raw_text = items_to_plain_text(section.items, self.config)
            section.source = Source.PLAIN_TEXT
            section.view_mode = ViewMode.PLAIN

    def sync_section_from_plain_text(self, index: int, text: str) -> None:
        section = self._section(index)
        if section is None:
            return
        section.raw_text = text
        section.source = Source.PLAIN_TEXT
        section.items = self._parse_block(text, section.type)

    def plain_text(self, index: int) -> str:
        """Plain-text rendering of a section, derived from its authoritative source."""
        section = self._section(index)
        if section is None:
            return ""
        if section.source == Source.PLAIN_TEXT:
            return section.raw_text
        return items_to_plain_text(section.items, self.config)

    # Items

    def add_item(self, index: int, text: str) -> Optional[FormatterItem]:
        section = self._section(index)
        if section is None:
            return None
        item = parse_line(text, self._section_config(section.type), self.registry)
        if item is None:
            return None
        item.order = len(section.items)
        section.items.append(item)
        self._items_changed(section)
        return item

    def add_items(self, index: int, text: str) -> list[FormatterItem]:
        """Append every non-blank line of a pasted block."""
        section = self._section(index)
        if section is None:
            return []
        items = self._parse_block(text, section.type)
        section.items.extend(items)
        renumber(section.items)
        self._items_changed(section)
        return items

    def apply_item_action(self, index: int, item_index: int, action: str) -> None:
        item = self._item(index, item_index)
        if item is None:
            return
        section = self.sections[index]
        if apply_action(item, action, self.config) is None:
            del section.items[item_index]
            renumber(section.items)
        self._items_changed(section)

    def edit_item_content(self, index: int, item_index: int, text: str) -> bool:
        """Inline edit, for row types that declare the `dblclick` action."""
        item = self._item(index, item_index)
        if item is None:
            return False
        actions = self.config.row_type(item.row_type).actions
        if ActionType.DOUBLE_CLICK.value not in actions:
            return False
        value = (text or "").strip()
        if not value or value == item.content:
            return False
        item.content = value
        self._items_changed(self.sections[index])
        return True

    def move_item(self, index: int, from_index: int, to_index: int) -> None:
        section = self._section(index)
        if section is not None and move(section.items, from_index, to_index):
            renumber(section.items)
            self._items_changed(section)

    # Output

    @property
    def state(self) -> FormatterState:
        return FormatterState(sections=list(self.sections))

    def can_store_plain(self) -> bool:
        """Plain text is lossless only for a single (or fixed) all-plain document."""
        if not self.sections:
            return False
        all_plain = all(s.view_mode == ViewMode.PLAIN for s in self.sections)
        return all_plain and (bool(self.fixed_type) or len(self.sections) == 1)

    def externalize(self) -> str:
        """The stored value: raw plain text when lossless, else an envelope."""
        if not self.sections:
            return ""
        if self.can_store_plain():
            return self.plain_text(0)
        return encode_envelope(self.sections)
