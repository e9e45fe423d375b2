"""
Built-in row-type grammars.

Each grammar takes one trimmed line (and optionally the section config) and
returns a FormatterItem, or None when its pattern does not apply.
"""

import re
from typing import Optional

from field_formatter.enums import RowType
from field_formatter.parsing.timeparse import normalize_time
from field_formatter.schemas import FormatterItem, SectionTypeConfig

DASHES = "-–—"

# `H[:MM] [am|pm]` or `H:MM`. Digits are ASCII only throughout.
TIME_TOKEN = r"([0-9]{1,2}(?::[0-9]{2})?\s*(?:am|pm)?|[0-9]{1,2}:[0-9]{2})"

TIME_BLOCK_RE = re.compile(
    rf"^{TIME_TOKEN}\s*[{DASHES}]\s*{TIME_TOKEN}[:\s]+(.+)$", re.I
)

# Permissive: digits, hyphens, parens and spaces, at least 7 of them.
PHONE_CHARS = r"[0-9\-( )\s]{7,}"
PHONE_RE = re.compile(PHONE_CHARS)

CONTACT_PAREN_RE = re.compile(r"^(.+?)\s*\(([^)]+)\)$")
CONTACT_DASH_RE = re.compile(rf"^(.+?)\s*[{DASHES}]\s*({PHONE_CHARS})$")

COUNT_FIRST_RE = re.compile(r"^\(([0-9]+)\)\s*(.+)$")
COUNT_LAST_RE = re.compile(r"^(.+?)\s*\(([0-9]+)\)$")


def parse_time_block(
    text: str, section: Optional[SectionTypeConfig] = None
) -> Optional[FormatterItem]:
    """`10:00 - 11:00: Meeting`, `2:30 pm - 4pm Standup`"""
    m = TIME_BLOCK_RE.match(text)
    if not m:
        return None
    return FormatterItem(
        row_type=RowType.TIME_BLOCK.value,
        content=m.group(3).strip(),
        start=normalize_time(m.group(1)),
        end=normalize_time(m.group(2)),
    )


def parse_contact(
    text: str, section: Optional[SectionTypeConfig] = None
) -> Optional[FormatterItem]:
    """`Name (role)`, `Name (phone)` or `Name - phone`."""
    m = CONTACT_PAREN_RE.match(text)
    if m:
        name = m.group(1).strip()
        extra = m.group(2).strip()
        if PHONE_RE.search(extra):
            return FormatterItem(
                row_type=RowType.CONTACT.value, content=name, phone=extra
            )
        return FormatterItem(row_type=RowType.CONTACT.value, content=name, role=extra)

    m = CONTACT_DASH_RE.match(text)
    if m:
        return FormatterItem(
            row_type=RowType.CONTACT.value,
            content=m.group(1).strip(),
            phone=m.group(2).strip(),
        )
    return None


def parse_item(
    text: str, section: Optional[SectionTypeConfig] = None
) -> Optional[FormatterItem]:
    """
    `(5) Chairs` or `Chairs (5)`.

    Produces a `drink_item` when the section accepts drink items, else an `item`.
    """
    allowed = (section.allowed_row_types if section else None) or []
    row_type = (
        RowType.DRINK_ITEM.value
        if RowType.DRINK_ITEM.value in allowed
        else RowType.ITEM.value
    )

    m = COUNT_FIRST_RE.match(text)
    if m:
        count, name = m.group(1), m.group(2)
    else:
        m = COUNT_LAST_RE.match(text)
        if not m:
            return None
        name, count = m.group(1), m.group(2)

    return FormatterItem(row_type=row_type, content=name.strip(), count=int(count))
