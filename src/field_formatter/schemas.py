from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

import orjson
from pydantic import BaseModel, ConfigDict, Field, field_validator

from field_formatter.enums import RowType, SegmentKind, Source, ViewMode

# Configuration models. Documents use camelCase keys; snake_case names are
# accepted too so configs can be built directly in Python.


class SegmentConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    kind: SegmentKind
    field: Optional[str] = None
    key: Optional[str] = None
    icon_path: Optional[str] = Field(default=None, alias="iconPath")
    title: Optional[str] = None


class ExtraFieldConfig(BaseModel):
    default: Any = None


class RowTypeConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    segments: list[SegmentConfig] = Field(default_factory=list)
    transitions: dict[str, str] = Field(default_factory=dict)
    extra_fields: dict[str, ExtraFieldConfig] = Field(
        default_factory=dict, alias="extraFields"
    )
    actions: list[str] = Field(default_factory=list)
    label: Optional[str] = None

    @field_validator("segments", mode="before")
    @classmethod
    def default_segments(cls, v: Any) -> Any:
        return v if isinstance(v, list) else []


class SectionTypeConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    label: str
    requires_title: bool = Field(default=False, alias="requiresTitle")
    # Order matters: it is the parser precedence list.
    allowed_row_types: Optional[list[str]] = Field(
        default=None, alias="allowedRowTypes"
    )
    default_row_type: Optional[str] = Field(default=None, alias="defaultRowType")
    examples: list[str] = Field(default_factory=list)


class FormatterConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    section_types: dict[str, SectionTypeConfig] = Field(
        default_factory=dict, alias="sectionTypes"
    )
    row_types: dict[str, RowTypeConfig] = Field(default_factory=dict, alias="rowTypes")

    def row_type(self, name: str) -> RowTypeConfig:
        """Config for `name`, or an empty config for unknown row types."""
        return self.row_types.get(name) or RowTypeConfig()

    def section_type(self, name: str) -> Optional[SectionTypeConfig]:
        return self.section_types.get(name)

    def first_section_type(self) -> Optional[str]:
        return next(iter(self.section_types), None)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


# Records


ITEM_FIELDS = ("row_type", "content", "order", "count", "start", "end", "phone", "role")


@dataclass
class FormatterItem:
    """
    One row of a section.

    Known optional fields are attributes; anything else a configuration declares
    (through `extraFields`) or a payload carries lives in `extra` and is preserved
    opaquely.
    """

    row_type: str
    content: str
    order: Optional[int] = None
    count: Optional[int] = None
    start: Optional[str] = None
    end: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        value = getattr(self, name) if name in ITEM_FIELDS else self.extra.get(name)
        return default if value is None else value

    def set(self, name: str, value: Any) -> None:
        if name in ITEM_FIELDS:
            setattr(self, name, value)
        else:
            self.extra[name] = value

    def discard(self, name: str) -> None:
        if name in ("row_type", "content"):
            raise KeyError(f"{name} is always present on an item")
        if name in ITEM_FIELDS:
            setattr(self, name, None)
        else:
            self.extra.pop(name, None)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"row_type": self.row_type, "content": self.content}
        for name in ITEM_FIELDS[2:]:
            value = getattr(self, name)
            if value is not None:
                out[name] = value
        for name, value in self.extra.items():
            if value is not None:
                out[name] = value
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FormatterItem":
        if not isinstance(data, dict):
            raise TypeError(f"item must be an object, got {type(data).__name__}")
        item = cls(
            row_type=str(data.get("row_type") or RowType.TEXT.value),
            content=str(data.get("content") or ""),
        )
        for name, value in data.items():
            if name in ("row_type", "content") or value is None:
                continue
            if name == "order":
                value = int(value)
            elif name == "count":
                # count is never negative
                value = max(0, int(value))
            item.set(name, value)
        return item


@dataclass
class FormatterSection:
    """
    An ordered group of items of one section type.

    `view_mode` and `source` are ephemeral editing state and never persisted.
    `raw_text` only matters while `source` is `Source.PLAIN_TEXT`.
    """

    type: str
    title: str
    order: int = 0
    items: list[FormatterItem] = field(default_factory=list)
    view_mode: ViewMode = ViewMode.HYBRID
    source: Source = Source.ITEMS
    raw_text: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "title": self.title,
            "order": self.order,
            "items": [item.to_dict() for item in self.items],
        }

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], default_mode: ViewMode = ViewMode.HYBRID
    ) -> "FormatterSection":
        if not isinstance(data, dict):
            raise TypeError(f"section must be an object, got {type(data).__name__}")
        items = data.get("items")
        section_type = str(data.get("type") or "")
        return cls(
            type=section_type,
            title=str(data.get("title") or section_type),
            order=int(data.get("order") or 0),
            items=[FormatterItem.from_dict(i) for i in items]
            if isinstance(items, list)
            else [],
            view_mode=ViewMode(data.get("_viewMode") or default_mode),
        )


@dataclass
class FormatterState:
    sections: list[FormatterSection] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"sections": [section.to_dict() for section in self.sections]}

    def to_json(self) -> str:
        return orjson.dumps(self.to_dict()).decode("utf-8")


class Grammar(Protocol):
    """A row-type parser: returns a record, or None when its pattern does not apply."""

    def __call__(
        self, text: str, section: Optional[SectionTypeConfig] = None
    ) -> Optional[FormatterItem]: ...
