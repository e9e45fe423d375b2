"""
Structured envelope codec.

An envelope is ``{"sections": [{"type", "title", "order", "items": [...]}]}``.
On input it may be preceded by arbitrary text: decoding starts at the first
``{`` or ``[``, whichever comes first.
"""

import logging
from collections.abc import Iterable
from typing import Optional

import orjson

from field_formatter.enums import ViewMode
from field_formatter.errors import EnvelopeError
from field_formatter.schemas import FormatterSection, FormatterState


def payload_start(raw: str) -> Optional[int]:
    """
    Index of the earliest bracket in `raw`, or None.

    >>> payload_start('data: {"sections": []}')
    6
    >>> payload_start("plain text") is None
    True
    """
    positions = [i for i in (raw.find("{"), raw.find("[")) if i != -1]
    return min(positions) if positions else None


def decode_envelope(
    raw: str, default_mode: ViewMode = ViewMode.HYBRID
) -> list[FormatterSection]:
    """
    Decode the sections of an envelope embedded in `raw`.

    :raises EnvelopeError: no bracket, or the payload lacks a `sections` list
    :raises orjson.JSONDecodeError: the payload is not valid JSON
    :raises TypeError, ValueError: a section or item has the wrong shape
    """
    start = payload_start(raw)
    if start is None:
        raise EnvelopeError("No structured data found")

    parsed = orjson.loads(raw[start:])
    if not isinstance(parsed, dict) or not isinstance(parsed.get("sections"), list):
        raise EnvelopeError("Payload has no 'sections' list")

    return [FormatterSection.from_dict(s, default_mode) for s in parsed["sections"]]


def try_decode_envelope(
    raw: str, default_mode: ViewMode = ViewMode.HYBRID
) -> Optional[list[FormatterSection]]:
    """Like decode_envelope, but None instead of an error."""
    try:
        return decode_envelope(raw, default_mode)
    except (EnvelopeError, TypeError, ValueError) as e:
        logging.debug(f"Input is not a structured envelope: {e}")
        return None


def encode_envelope(sections: Iterable[FormatterSection]) -> str:
    """Serialize sections without their ephemeral editing state."""
    return FormatterState(sections=list(sections)).to_json()
