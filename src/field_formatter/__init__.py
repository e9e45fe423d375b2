from typing import Optional

from field_formatter.config import default_config, load_config, validate_config
from field_formatter.enums import (
    ActionType,
    RowType,
    SectionType,
    SegmentKind,
    Source,
    ViewMode,
)
from field_formatter.parsing.line_parser import parse_line, parse_text_to_items
from field_formatter.parsing.registry import GrammarRegistry
from field_formatter.parsing.timeparse import normalize_time
from field_formatter.schemas import (
    FormatterConfig,
    FormatterItem,
    FormatterSection,
    FormatterState,
    RowTypeConfig,
    SectionTypeConfig,
    SegmentConfig,
)
from field_formatter.serialize import item_to_plain_text, items_to_plain_text
from field_formatter.store import FormatterStore
from field_formatter.transitions import apply_action


def load_store(
    raw: str,
    config: Optional[FormatterConfig] = None,
    **kwargs,
) -> FormatterStore:
    """
    Build a FormatterStore from a stored value, using the built-in config by default.
    Keyword arguments are passed on to FormatterStore.from_input.
    """
    return FormatterStore.from_input(raw, config or default_config(), **kwargs)


__all__ = [
    "ActionType",
    "FormatterConfig",
    "FormatterItem",
    "FormatterSection",
    "FormatterState",
    "FormatterStore",
    "GrammarRegistry",
    "RowType",
    "RowTypeConfig",
    "SectionType",
    "SectionTypeConfig",
    "SegmentConfig",
    "SegmentKind",
    "Source",
    "ViewMode",
    "apply_action",
    "default_config",
    "item_to_plain_text",
    "items_to_plain_text",
    "load_config",
    "load_store",
    "normalize_time",
    "parse_line",
    "parse_text_to_items",
    "validate_config",
]
