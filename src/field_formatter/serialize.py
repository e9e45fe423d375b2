"""
Items back to their canonical one-line text form.

Only counter and time segments are written back. Badges (contact `phone` and
`role`) are not, so contacts do not survive a serialize/parse round trip with
their extras. This is a known limitation kept on purpose: the plain-text
storage choice in the store relies on exactly this output.
"""

from collections.abc import Iterable

from field_formatter.enums import SegmentKind
from field_formatter.schemas import FormatterConfig, FormatterItem


def item_to_plain_text(item: FormatterItem, config: FormatterConfig) -> str:
    segments = config.row_type(item.row_type).segments
    parts: list[str] = []

    for seg in segments:
        if seg.kind == SegmentKind.COUNTER:
            count = item.get(seg.field or "count", 0)
            if isinstance(count, int) and count > 0:
                parts.append(f"({count})")
        elif seg.kind == SegmentKind.TIME and seg.field and item.get(seg.field):
            parts.append(str(item.get(seg.field)))

    if item.start and item.end:
        return f"{item.start} - {item.end}: {item.content}"
    if parts:
        return f"{' '.join(parts)} {item.content}"
    return item.content


def items_to_plain_text(items: Iterable[FormatterItem], config: FormatterConfig) -> str:
    return "\n".join(item_to_plain_text(item, config) for item in items)
