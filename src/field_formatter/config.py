"""
Formatter configuration: built-in defaults, validation and file loading.

A configuration document looks like::

    {"sectionTypes": {...}, "rowTypes": {...}}

Malformed documents never halt anything: they are logged and replaced by the
empty configuration, under which every line parses to a plain record.
"""

import logging
from pathlib import Path
from typing import Any

import orjson
import yaml
from pydantic import ValidationError
from pyrsistent import freeze, thaw

from field_formatter.enums import ActionType, RowType, SectionType, SegmentKind
from field_formatter.errors import ConfigError
from field_formatter.schemas import FormatterConfig

PERSON_ICON = "M16 7a4 4 0 11-8 0 4 4 0 018 0zM12 14a7 7 0 00-7 7h14a7 7 0 00-7-7z"
GLASS_ICON = (
    "M19.428 15.428a2 2 0 00-1.022-.547l-2.387-.477a6 6 0 00-3.86.517l-.318.158"
    "a6 6 0 01-3.86.517L6.05 15.21a2 2 0 00-1.806.547M8 4h8l-1 1v5.172a2 2 0 00"
    ".586 1.414l5 5c1.26 1.26.367 3.414-1.415 3.414H4.828c-1.782 0-2.674-2.154"
    "-1.414-3.414l5-5A2 2 0 009 10.172V5L8 4z"
)

# Persistent so no caller can mutate the defaults; thawed per use.
DEFAULT_CONFIG = freeze(
    {
        "sectionTypes": {
            SectionType.GENERIC.value: {
                "label": "General Section",
                "requiresTitle": False,
                "allowedRowTypes": [
                    RowType.TEXT.value,
                    RowType.TIME_BLOCK.value,
                    RowType.CONTACT.value,
                    RowType.ITEM.value,
                    RowType.DRINK_ITEM.value,
                    RowType.CATEGORY.value,
                ],
                "defaultRowType": RowType.TEXT.value,
                "examples": [
                    "Simple text item",
                    "10:00 - 11:00: Meeting",
                    "John Doe (555-0123)",
                    "(5) Equipment Count",
                ],
            }
        },
        "rowTypes": {
            RowType.TEXT.value: {
                "label": "Text",
                "segments": [{"kind": SegmentKind.TEXT.value}],
            },
            RowType.TIME_BLOCK.value: {
                "label": "Schedule",
                "segments": [
                    {"kind": SegmentKind.TIME.value, "field": "start", "key": "start"},
                    {"kind": SegmentKind.TIME.value, "field": "end", "key": "end"},
                    {"kind": SegmentKind.TEXT.value},
                ],
            },
            RowType.CONTACT.value: {
                "label": "Contact",
                "segments": [
                    {"kind": SegmentKind.ICON.value, "iconPath": PERSON_ICON},
                    {"kind": SegmentKind.TEXT.value},
                    {"kind": SegmentKind.BADGE.value, "field": "phone"},
                    {"kind": SegmentKind.BADGE.value, "field": "role"},
                ],
                "actions": [ActionType.DOUBLE_CLICK.value],
            },
            RowType.ITEM.value: {
                "label": "Equipment",
                "segments": [
                    {"kind": SegmentKind.COUNTER.value, "field": "count"},
                    {"kind": SegmentKind.TEXT.value},
                ],
                "actions": [ActionType.INCREMENT.value, ActionType.DECREMENT.value],
            },
            RowType.DRINK_ITEM.value: {
                "label": "Beverage",
                "segments": [
                    {"kind": SegmentKind.COUNTER.value, "field": "count"},
                    {"kind": SegmentKind.ICON.value, "iconPath": GLASS_ICON},
                    {"kind": SegmentKind.TEXT.value},
                ],
                "actions": [ActionType.INCREMENT.value, ActionType.DECREMENT.value],
            },
            RowType.CATEGORY.value: {
                "label": "Category",
                "segments": [{"kind": SegmentKind.TEXT.value}],
                "transitions": {
                    ActionType.CONVERT_TO_ITEM.value: RowType.ITEM.value,
                    ActionType.INCREMENT.value: RowType.ITEM.value,
                },
                "extraFields": {"count": {"default": 1}},
            },
        },
    }
)


def empty_config() -> FormatterConfig:
    return FormatterConfig()


def default_config() -> FormatterConfig:
    """A fresh copy of the built-in configuration."""
    return validate_config(thaw(DEFAULT_CONFIG))


def validate_config(raw: Any) -> FormatterConfig:
    """
    Minimal shape check of a configuration document.

    Both `sectionTypes` and `rowTypes` must be objects; row types without a
    `segments` list get an empty one. Anything else that does not validate is
    replaced by the empty configuration.
    """
    if not isinstance(raw, dict):
        logging.error(
            f"Config validation failed: expected an object, got {type(raw).__name__}"
        )
        return empty_config()

    issues: list[str] = []
    for key in ("sectionTypes", "rowTypes"):
        if not isinstance(raw.get(key), dict):
            issues.append(f"Missing '{key}' object")
    if issues:
        logging.error(f"Config validation failed: {issues}")
        return empty_config()

    row_types: dict[str, Any] = {}
    for name, row in raw["rowTypes"].items():
        row = dict(row) if isinstance(row, dict) else {}
        if not isinstance(row.get("segments"), list):
            logging.warning(
                f"RowType '{name}' is missing 'segments' array. Defaulting to empty."
            )
            row["segments"] = []
        row_types[name] = row

    try:
        return FormatterConfig.model_validate(
            {"sectionTypes": raw["sectionTypes"], "rowTypes": row_types}
        )
    except ValidationError as e:
        logging.error(f"Config validation failed: {e.error_count()} error(s)\n{e}")
        return empty_config()


def read_config_document(path: Path) -> Any:
    """Read a JSON or YAML (.yaml/.yml) document without validating it."""
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e

    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            return yaml.safe_load(data)
        return orjson.loads(data)
    except (orjson.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot decode config {path}: {e}") from e


def load_config(path: Path) -> FormatterConfig:
    logging.info(f"Loading formatter config from {path}")
    return validate_config(read_config_document(path))
