from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from core.errors import MalformedDocumentError
from ui_types import ClassName, ObjectName, ItemKind
from utils.text import parse_int_list


# ---------- Scalar value kinds ----------
@dataclass(frozen=True)
class BoolValue:
    value: bool


@dataclass(frozen=True)
class NumberValue:
    value: int


@dataclass(frozen=True)
class FloatValue:
    """32-bit float (`<float>`)."""
    value: float


@dataclass(frozen=True)
class DoubleValue:
    value: float


@dataclass(frozen=True)
class LongLongValue:
    value: int


@dataclass(frozen=True)
class ULongLongValue:
    value: int


@dataclass(frozen=True)
class CStringValue:
    """Raw narrow string; only meaningful for the `buddy` association."""
    value: str


@dataclass(frozen=True)
class CharValue:
    unicode: int


@dataclass(frozen=True)
class UrlValue:
    value: str


@dataclass(frozen=True)
class StringValue:
    value: str
    notr: bool = False
    comment: str = ""
    extracomment: str = ""


@dataclass(frozen=True)
class StringListValue:
    strings: Tuple[str, ...] = ()


# ---------- Enum references ----------
@dataclass(frozen=True)
class EnumValue:
    value: str


@dataclass(frozen=True)
class SetValue:
    """Pipe-joined enum references, e.g. ``Qt::AlignLeft|Qt::AlignTop``."""
    value: str

    @property
    def tokens(self) -> List[str]:
        return [t.strip() for t in self.value.split("|") if t.strip()]


# ---------- Geometry ----------
@dataclass(frozen=True)
class Point:
    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class PointF:
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class Size:
    width: int = 0
    height: int = 0


@dataclass(frozen=True)
class SizeF:
    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True)
class Rect:
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0


@dataclass(frozen=True)
class RectF:
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


# ---------- Date / time ----------
@dataclass(frozen=True)
class Date:
    year: int = 0
    month: int = 0
    day: int = 0


@dataclass(frozen=True)
class Time:
    hour: int = 0
    minute: int = 0
    second: int = 0


@dataclass(frozen=True)
class DateTime:
    year: int = 0
    month: int = 0
    day: int = 0
    hour: int = 0
    minute: int = 0
    second: int = 0


# ---------- Composite kinds ----------
@dataclass(frozen=True)
class Color:
    red: int = 0
    green: int = 0
    blue: int = 0
    alpha: int = 255


@dataclass(frozen=True)
class CursorValue:
    """Bitmap cursor by number; not supported by the generator."""
    value: int


@dataclass(frozen=True)
class CursorShape:
    value: str


@dataclass(frozen=True)
class Font:
    family: str = ""
    point_size: int = 0
    weight: int = 0
    italic: bool = False
    bold: bool = False
    underline: bool = False
    strikeout: bool = False
    antialiasing: bool = False
    style_strategy: str = ""
    kerning: bool = False


@dataclass(frozen=True)
class Locale:
    language: str
    country: str


@dataclass(frozen=True)
class SizePolicy:
    hsizetype: str
    vsizetype: str
    hor_stretch: int = 0
    ver_stretch: int = 0


@dataclass(frozen=True)
class Pixmap:
    value: str


@dataclass(frozen=True)
class IconSet:
    theme: str = ""
    resource: str = ""
    normal_off: str = ""
    normal_on: str = ""
    disabled_off: str = ""
    disabled_on: str = ""
    active_off: str = ""
    active_on: str = ""
    selected_off: str = ""
    selected_on: str = ""

    def pixmaps(self) -> List[Tuple[str, str, str]]:
        """(path, mode, state) for every populated state pixmap, in a fixed order."""
        slots = [
            (self.normal_off, "Normal", "Off"),
            (self.normal_on, "Normal", "On"),
            (self.disabled_off, "Disabled", "Off"),
            (self.disabled_on, "Disabled", "On"),
            (self.active_off, "Active", "Off"),
            (self.active_on, "Active", "On"),
            (self.selected_off, "Selected", "Off"),
            (self.selected_on, "Selected", "On"),
        ]
        return [s for s in slots if s[0]]


@dataclass(frozen=True)
class GradientStop:
    position: float
    color: Color


@dataclass(frozen=True)
class Gradient:
    gradient_type: str = ""
    spread: str = ""
    coordinate_mode: str = ""
    stops: Tuple[GradientStop, ...] = ()


@dataclass(frozen=True)
class Brush:
    style: str = "SolidPattern"
    color: Optional[Color] = None
    gradient: Optional[Gradient] = None
    texture: Optional[Pixmap] = None


@dataclass(frozen=True)
class ColorRole:
    role: str
    brush: Brush


@dataclass(frozen=True)
class ColorGroupItem:
    """Either a bare colour (legacy format) or a role with its brush."""
    color: Optional[Color] = None
    role: Optional[ColorRole] = None

    @property
    def is_color(self) -> bool:
        return self.role is None


@dataclass(frozen=True)
class ColorGroup:
    items: Tuple[ColorGroupItem, ...] = ()


@dataclass(frozen=True)
class Palette:
    active: Optional[ColorGroup] = None
    inactive: Optional[ColorGroup] = None
    disabled: Optional[ColorGroup] = None


PropertyValue = Union[
    BoolValue, NumberValue, FloatValue, DoubleValue, LongLongValue, ULongLongValue,
    Color, CursorValue, CursorShape, EnumValue, SetValue, Font, Locale, Palette,
    Point, PointF, Rect, RectF, Size, SizeF, SizePolicy, StringValue, StringListValue,
    Date, Time, DateTime, Brush, CStringValue, CharValue, UrlValue, Pixmap, IconSet,
]


# ---------- Properties and attributes ----------
@dataclass(frozen=True)
class Property:
    name: str
    value: PropertyValue
    std_set: bool = True


@dataclass(frozen=True)
class Attribute:
    """Metadata on a widget (tab title, toolbar area, header flags); never a setter call."""
    name: str
    value: PropertyValue


def find_property(props: List[Property], name: str) -> Optional[Property]:
    for p in props:
        if p.name == name:
            return p
    return None


# ---------- Structural nodes ----------
@dataclass
class Spacer:
    name: ObjectName
    properties: List[Property] = field(default_factory=list)


@dataclass
class WidgetItem:
    """Combo/list row, table cell or (possibly nested) tree item."""
    properties: List[Property] = field(default_factory=list)
    items: List['WidgetItem'] = field(default_factory=list)
    row: int = 0
    column: int = 0


@dataclass
class Row:
    properties: List[Property] = field(default_factory=list)


@dataclass
class Column:
    properties: List[Property] = field(default_factory=list)


@dataclass
class Action:
    name: ObjectName
    properties: List[Property] = field(default_factory=list)
    attributes: List[Attribute] = field(default_factory=list)


@dataclass
class ActionGroup:
    name: ObjectName
    actions: List[Action] = field(default_factory=list)
    action_groups: List['ActionGroup'] = field(default_factory=list)
    properties: List[Property] = field(default_factory=list)
    attributes: List[Attribute] = field(default_factory=list)


SEPARATOR = "separator"


@dataclass
class ActionRef:
    name: ObjectName

    @property
    def is_separator(self) -> bool:
        return self.name == SEPARATOR


@dataclass
class LayoutItem:
    view: Union['Layout', Spacer, 'Widget']
    row: int = 0
    column: int = 0
    rowspan: int = 0
    colspan: int = 0
    alignment: str = ""

    @property
    def kind(self) -> ItemKind:
        if isinstance(self.view, Layout):
            return ItemKind.LAYOUT
        if isinstance(self.view, Spacer):
            return ItemKind.SPACER
        return ItemKind.WIDGET


@dataclass
class Layout:
    class_name: ClassName
    name: ObjectName
    properties: List[Property] = field(default_factory=list)
    items: List[LayoutItem] = field(default_factory=list)
    stretch: str = ""
    row_stretch: str = ""
    column_stretch: str = ""
    row_minimum_height: str = ""
    column_minimum_width: str = ""
    attributes: List[Attribute] = field(default_factory=list)

    def factor_lists(self) -> List[Tuple[str, List[int]]]:
        """(setter suffix, integer list) for each stretch/minimum-size string, in emission order."""
        return [
            ("Stretch", parse_int_list(self.stretch)),
            ("ColumnStretch", parse_int_list(self.column_stretch)),
            ("RowStretch", parse_int_list(self.row_stretch)),
            ("RowMinimumHeight", parse_int_list(self.row_minimum_height)),
            ("ColumnMinimumWidth", parse_int_list(self.column_minimum_width)),
        ]


@dataclass
class Widget:
    class_name: ClassName
    name: ObjectName
    native: bool = False
    properties: List[Property] = field(default_factory=list)
    attributes: List[Attribute] = field(default_factory=list)
    rows: List[Row] = field(default_factory=list)
    columns: List[Column] = field(default_factory=list)
    items: List[WidgetItem] = field(default_factory=list)
    layout: Optional[Layout] = None
    widgets: List['Widget'] = field(default_factory=list)
    actions: List[Action] = field(default_factory=list)
    action_groups: List[ActionGroup] = field(default_factory=list)
    add_actions: List[ActionRef] = field(default_factory=list)
    zorders: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._validate_children()

    def _validate_children(self) -> None:
        if self.layout is not None and self.widgets:
            raise MalformedDocumentError(
                f"MUST no child if layout set. widget name: {self.name}",
                tag="widget", name=str(self.name),
            )

    def get_property(self, name: str) -> Optional[Property]:
        return find_property(self.properties, name)

    def get_attribute(self, name: str) -> Optional[Attribute]:
        for a in self.attributes:
            if a.name == name:
                return a
        return None


# ---------- Document-level structures ----------
@dataclass(frozen=True)
class Connection:
    sender: str
    signal: str
    receiver: str
    slot: str


@dataclass(frozen=True)
class LayoutDefault:
    spacing: int = 0
    margin: int = 0


@dataclass
class UiDocument:
    """Result of one Tree Builder pass."""
    widget: Widget
    class_name: str = ""
    layout_default: Optional[LayoutDefault] = None
    tab_stops: List[str] = field(default_factory=list)
    button_groups: List[str] = field(default_factory=list)
    connections: List[Connection] = field(default_factory=list)
    source_path: Optional[str] = None


__all__ = [
    "BoolValue", "NumberValue", "FloatValue", "DoubleValue", "LongLongValue", "ULongLongValue",
    "CStringValue", "CharValue", "UrlValue", "StringValue", "StringListValue",
    "EnumValue", "SetValue", "Point", "PointF", "Size", "SizeF", "Rect", "RectF",
    "Date", "Time", "DateTime", "Color", "CursorValue", "CursorShape", "Font", "Locale",
    "SizePolicy", "Pixmap", "IconSet", "GradientStop", "Gradient", "Brush", "ColorRole",
    "ColorGroupItem", "ColorGroup", "Palette", "PropertyValue", "Property", "Attribute",
    "find_property", "Spacer", "WidgetItem", "Row", "Column", "Action", "ActionGroup",
    "SEPARATOR", "ActionRef", "LayoutItem", "Layout", "Widget", "Connection",
    "LayoutDefault", "UiDocument",
]
