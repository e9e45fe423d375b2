from enum import Enum


class RowType(str, Enum):
    TEXT = "text"
    TIME_BLOCK = "time_block"
    CONTACT = "contact"
    ITEM = "item"
    DRINK_ITEM = "drink_item"
    CATEGORY = "category"


class SectionType(str, Enum):
    GENERIC = "generic"


class SegmentKind(str, Enum):
    TEXT = "text"
    COUNTER = "counter"
    TIME = "time"
    BADGE = "badge"
    ICON = "icon"


class ActionType(str, Enum):
    INCREMENT = "increment"
    DECREMENT = "decrement"
    REMOVE = "remove"
    CONVERT_TO_ITEM = "convert-to-item"
    DOUBLE_CLICK = "dblclick"
    DECREMENT_ZERO = "decrement_zero"


class ViewMode(str, Enum):
    PLAIN = "plain"
    HYBRID = "hybrid"


class Source(str, Enum):
    """Which representation of a section is authoritative."""

    ITEMS = "items"
    PLAIN_TEXT = "plain_text"
