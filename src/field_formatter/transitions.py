"""
Per-item state machine.

Row types are states and actions are labelled edges, declared per row type in
its `transitions` table. `decrement_zero` is the edge taken when a decrement
brings `count` from 1 to 0; it drops the `count` field. Nothing is terminal,
so transitions may cycle (category -> item -> text ...).
"""

import copy
import logging
from typing import Optional

from field_formatter.enums import ActionType
from field_formatter.schemas import FormatterConfig, FormatterItem


def ensure_defaults(item: FormatterItem, config: FormatterConfig) -> None:
    """Backfill `extraFields` defaults of the item's row type onto absent fields."""
    extra_fields = config.row_type(item.row_type).extra_fields
    for name, field_cfg in extra_fields.items():
        if item.get(name) is None and field_cfg.default is not None:
            item.set(name, copy.deepcopy(field_cfg.default))


def change_row_type(item: FormatterItem, row_type: str, config: FormatterConfig) -> None:
    logging.debug(f"{item.content!r}: {item.row_type} -> {row_type}")
    item.row_type = row_type
    ensure_defaults(item, config)


def apply_action(
    item: FormatterItem, action: str, config: FormatterConfig
) -> Optional[FormatterItem]:
    """
    Apply a user action to `item` in place.

    :param item: item to mutate
    :param action: `increment`, `decrement`, `remove` or a custom transition key
    :param config: configuration holding the row types' transition tables
    :return: the item, or None when the action removes it
    """
    if action == ActionType.REMOVE.value:
        return None

    transitions = config.row_type(item.row_type).transitions

    if action == ActionType.INCREMENT.value:
        target = transitions.get(ActionType.INCREMENT.value)
        if target:
            change_row_type(item, target, config)
        item.count = (item.count or 0) + 1
        return item

    if action in transitions:
        change_row_type(item, transitions[action], config)
        return item

    if action == ActionType.DECREMENT.value:
        if (item.count or 0) > 0:
            item.count -= 1
            zero_target = transitions.get(ActionType.DECREMENT_ZERO.value)
            if item.count == 0 and zero_target:
                item.row_type = zero_target
                item.discard("count")
        return item

    logging.debug(f"No transition for action {action!r} on row type {item.row_type!r}")
    return item
