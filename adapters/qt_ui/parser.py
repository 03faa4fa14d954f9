"""
Tree builder for Qt Designer ``.ui`` documents.

Walks the lxml element tree depth-first and produces the typed document model
in :mod:`core.ui_model`. Documents are assumed to come out of Designer, so any
structural surprise (wrong child count on a property, unknown child tag, a
widget with both a layout and child widgets) raises
:class:`core.errors.MalformedDocumentError` instead of being papered over.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Union

from lxml import etree

from core.errors import MalformedDocumentError
from core.ui_model import (
    Action, ActionGroup, ActionRef, Attribute, BoolValue, Brush, CStringValue, CharValue,
    Color, ColorGroup, ColorGroupItem, ColorRole, Column, Connection, CursorShape,
    CursorValue, Date, DateTime, DoubleValue, EnumValue, FloatValue, Font, Gradient,
    GradientStop, IconSet, Layout, LayoutDefault, LayoutItem, Locale, LongLongValue,
    NumberValue, Palette, Pixmap, Point, PointF, Property, PropertyValue, Rect, RectF, Row,
    SetValue, Size, SizeF, SizePolicy, Spacer, StringListValue, StringValue, Time,
    UiDocument, ULongLongValue, UrlValue, Widget, WidgetItem,
)
from ui_types import ClassName, ObjectName
from utils.xml import (
    attr_bool, attr_int, attr_str, child_bool, child_float, child_int, child_node,
    child_nodes, child_text, element_children, node_text, text_bool, text_float, text_int,
)

logger = logging.getLogger(__name__)

# Root-level sections the translator does not consume.
IGNORED_ROOT_SECTIONS = frozenset({
    "author", "comment", "exportmacro", "resources", "customwidgets", "includes",
    "pixmapfunction", "layoutfunction", "slots", "designerdata", "images",
})

PALETTE_GROUPS = ("active", "inactive", "disabled")

ValueParser = Callable[[etree._Element], PropertyValue]


class UiParser:
    def __init__(self, root: etree._Element, source_path: Optional[str] = None) -> None:
        self.root = root
        self.source_path = source_path
        self._value_parsers: Dict[str, ValueParser] = {
            "bool": lambda n: BoolValue(text_bool(n)),
            "number": lambda n: NumberValue(text_int(n)),
            "float": lambda n: FloatValue(text_float(n)),
            "double": lambda n: DoubleValue(text_float(n)),
            "longlong": lambda n: LongLongValue(text_int(n)),
            "ulonglong": lambda n: ULongLongValue(text_int(n)),
            "color": self.parse_color,
            "cursor": lambda n: CursorValue(text_int(n)),
            "cursorShape": lambda n: CursorShape(node_text(n)),
            "enum": lambda n: EnumValue(node_text(n)),
            "set": lambda n: SetValue(node_text(n)),
            "font": self.parse_font,
            "iconset": self.parse_iconset,
            "pixmap": lambda n: Pixmap(node_text(n)),
            "locale": self.parse_locale,
            "palette": self.parse_palette,
            "point": lambda n: Point(child_int(n, "x"), child_int(n, "y")),
            "pointf": lambda n: PointF(child_float(n, "x"), child_float(n, "y")),
            "rect": self.parse_rect,
            "rectf": self.parse_rectf,
            "size": lambda n: Size(child_int(n, "width"), child_int(n, "height")),
            "sizef": lambda n: SizeF(child_float(n, "width"), child_float(n, "height")),
            "sizepolicy": self.parse_size_policy,
            "string": self.parse_string,
            "stringlist": self.parse_string_list,
            "date": lambda n: Date(child_int(n, "year"), child_int(n, "month"), child_int(n, "day")),
            "time": lambda n: Time(child_int(n, "hour"), child_int(n, "minute"), child_int(n, "second")),
            "datetime": self.parse_datetime,
            "brush": self.parse_brush,
            "cstring": lambda n: CStringValue(node_text(n)),
            "char": lambda n: CharValue(attr_int(n, "unicode")),
            "url": lambda n: UrlValue(child_text(n, "string")),
        }

    # ---------- construction ----------
    @classmethod
    def from_file(cls, path: str) -> "UiParser":
        parser = etree.XMLParser(remove_blank_text=True, remove_comments=True)
        root = etree.parse(path, parser).getroot()
        return cls(root, source_path=path)

    @classmethod
    def from_string(cls, text: Union[str, bytes], source_path: Optional[str] = None) -> "UiParser":
        parser = etree.XMLParser(remove_blank_text=True, remove_comments=True)
        if isinstance(text, str):
            text = text.encode("utf-8")
        return cls(etree.fromstring(text, parser), source_path=source_path)

    # ---------- leaf value parsers ----------
    def parse_value(self, n: etree._Element) -> PropertyValue:
        handler = self._value_parsers.get(n.tag)
        if handler is None:
            raise MalformedDocumentError(f"Bad property type {n.tag}", tag=n.tag)
        return handler(n)

    def parse_color(self, n: etree._Element) -> Color:
        return Color(
            red=child_int(n, "red"),
            green=child_int(n, "green"),
            blue=child_int(n, "blue"),
            alpha=attr_int(n, "alpha", 255),
        )

    def parse_font(self, n: etree._Element) -> Font:
        return Font(
            family=child_text(n, "family"),
            point_size=child_int(n, "pointsize"),
            weight=child_int(n, "weight"),
            italic=child_bool(n, "italic"),
            bold=child_bool(n, "bold"),
            underline=child_bool(n, "underline"),
            strikeout=child_bool(n, "strikeout"),
            antialiasing=child_bool(n, "antialiasing"),
            style_strategy=child_text(n, "stylestrategy"),
            kerning=child_bool(n, "kerning"),
        )

    def parse_iconset(self, n: etree._Element) -> IconSet:
        children = element_children(n)
        if not children:
            # Old-style iconset: the text is the normal/off pixmap.
            return IconSet(theme=attr_str(n, "theme"), resource=attr_str(n, "resource"),
                           normal_off=node_text(n))
        return IconSet(
            theme=attr_str(n, "theme"),
            resource=attr_str(n, "resource"),
            normal_off=child_text(n, "normaloff"),
            normal_on=child_text(n, "normalon"),
            disabled_off=child_text(n, "disabledoff"),
            disabled_on=child_text(n, "disabledon"),
            active_off=child_text(n, "activeoff"),
            active_on=child_text(n, "activeon"),
            selected_off=child_text(n, "selectedoff"),
            selected_on=child_text(n, "selectedon"),
        )

    def parse_locale(self, n: etree._Element) -> Locale:
        return Locale(language=attr_str(n, "language"), country=attr_str(n, "country"))

    def parse_rect(self, n: etree._Element) -> Rect:
        return Rect(child_int(n, "x"), child_int(n, "y"), child_int(n, "width"), child_int(n, "height"))

    def parse_rectf(self, n: etree._Element) -> RectF:
        return RectF(child_float(n, "x"), child_float(n, "y"),
                     child_float(n, "width"), child_float(n, "height"))

    def parse_size_policy(self, n: etree._Element) -> SizePolicy:
        return SizePolicy(
            hsizetype=attr_str(n, "hsizetype"),
            vsizetype=attr_str(n, "vsizetype"),
            hor_stretch=child_int(n, "horstretch"),
            ver_stretch=child_int(n, "verstretch"),
        )

    def parse_string(self, n: etree._Element) -> StringValue:
        return StringValue(
            value=n.text or "",
            notr=attr_bool(n, "notr"),
            comment=attr_str(n, "comment"),
            extracomment=attr_str(n, "extracomment"),
        )

    def parse_string_list(self, n: etree._Element) -> StringListValue:
        return StringListValue(tuple(ch.text or "" for ch in child_nodes(n, "string")))

    def parse_datetime(self, n: etree._Element) -> DateTime:
        return DateTime(
            year=child_int(n, "year"), month=child_int(n, "month"), day=child_int(n, "day"),
            hour=child_int(n, "hour"), minute=child_int(n, "minute"), second=child_int(n, "second"),
        )

    def parse_brush(self, n: etree._Element) -> Brush:
        style = attr_str(n, "brushstyle", "SolidPattern")
        color_node = child_node(n, "color")
        if color_node is not None:
            return Brush(style=style, color=self.parse_color(color_node))
        gradient_node = child_node(n, "gradient")
        if gradient_node is not None:
            return Brush(style=style, gradient=self.parse_gradient(gradient_node))
        texture_node = child_node(n, "texture")
        if texture_node is not None:
            return Brush(style=style, texture=Pixmap(node_text(texture_node)))
        return Brush(style=style)

    def parse_gradient(self, n: etree._Element) -> Gradient:
        stops = []
        for stop in child_nodes(n, "gradientstop"):
            color_node = child_node(stop, "color")
            color = self.parse_color(color_node) if color_node is not None else Color()
            stops.append(GradientStop(position=float(attr_str(stop, "position", "0") or 0), color=color))
        return Gradient(
            gradient_type=attr_str(n, "type"),
            spread=attr_str(n, "spread"),
            coordinate_mode=attr_str(n, "coordinatemode"),
            stops=tuple(stops),
        )

    def parse_color_group(self, n: etree._Element) -> ColorGroup:
        items: List[ColorGroupItem] = []
        for ch in element_children(n):
            if ch.tag == "colorrole":
                brush_node = child_node(ch, "brush")
                brush = self.parse_brush(brush_node) if brush_node is not None else Brush()
                items.append(ColorGroupItem(role=ColorRole(role=attr_str(ch, "role"), brush=brush)))
            elif ch.tag == "color":
                items.append(ColorGroupItem(color=self.parse_color(ch)))
            else:
                raise MalformedDocumentError(f"Bad child type {ch.tag} of color group", tag=ch.tag)
        return ColorGroup(items=tuple(items))

    def parse_palette(self, n: etree._Element) -> Palette:
        groups: Dict[str, Optional[ColorGroup]] = {g: None for g in PALETTE_GROUPS}
        for ch in element_children(n):
            if ch.tag not in groups:
                raise MalformedDocumentError(f"Bad child type {ch.tag} of palette", tag=ch.tag)
            groups[ch.tag] = self.parse_color_group(ch)
        return Palette(active=groups["active"], inactive=groups["inactive"], disabled=groups["disabled"])

    # ---------- value holders ----------
    def _single_value_child(self, n: etree._Element, what: str) -> etree._Element:
        name = attr_str(n, "name")
        children = element_children(n)
        if len(children) != 1:
            raise MalformedDocumentError(
                f"Bad {what} {name}: expected exactly one value element, got {len(children)}",
                tag=n.tag, name=name,
            )
        return children[0]

    def parse_property(self, n: etree._Element) -> Property:
        value = self.parse_value(self._single_value_child(n, "property"))
        return Property(name=attr_str(n, "name"), value=value, std_set=attr_str(n, "stdset", "1") != "0")

    def parse_attribute(self, n: etree._Element) -> Attribute:
        value = self.parse_value(self._single_value_child(n, "attribute"))
        return Attribute(name=attr_str(n, "name"), value=value)

    def _properties_only(self, n: etree._Element, owner: str) -> List[Property]:
        props: List[Property] = []
        for ch in element_children(n):
            if ch.tag != "property":
                raise MalformedDocumentError(f"Bad child type {ch.tag} of {owner}", tag=ch.tag)
            props.append(self.parse_property(ch))
        return props

    # ---------- structural nodes ----------
    def parse_spacer(self, n: etree._Element) -> Spacer:
        return Spacer(name=ObjectName(attr_str(n, "name")), properties=self._properties_only(n, "spacer"))

    def parse_layout_item(self, n: etree._Element) -> LayoutItem:
        children = element_children(n)
        if len(children) != 1:
            raise MalformedDocumentError(f"Bad layout item: {len(children)} children", tag="item")
        child = children[0]
        view: Union[Layout, Spacer, Widget]
        if child.tag == "layout":
            view = self.parse_layout(child)
        elif child.tag == "spacer":
            view = self.parse_spacer(child)
        elif child.tag == "widget":
            view = self.parse_widget(child)
        else:
            raise MalformedDocumentError(f"Bad layout item child type {child.tag}", tag=child.tag)
        return LayoutItem(
            view=view,
            row=attr_int(n, "row"),
            column=attr_int(n, "column"),
            rowspan=attr_int(n, "rowspan"),
            colspan=attr_int(n, "colspan"),
            alignment=attr_str(n, "alignment"),
        )

    def parse_layout(self, n: etree._Element) -> Layout:
        name = attr_str(n, "name")
        layout = Layout(
            class_name=ClassName(attr_str(n, "class")),
            name=ObjectName(name),
            stretch=attr_str(n, "stretch"),
            row_stretch=attr_str(n, "rowstretch"),
            column_stretch=attr_str(n, "columnstretch"),
            row_minimum_height=attr_str(n, "rowminimumheight"),
            column_minimum_width=attr_str(n, "columnminimumwidth"),
        )
        for ch in element_children(n):
            if ch.tag == "property":
                layout.properties.append(self.parse_property(ch))
            elif ch.tag == "attribute":
                layout.attributes.append(self.parse_attribute(ch))
            elif ch.tag == "item":
                layout.items.append(self.parse_layout_item(ch))
            else:
                raise MalformedDocumentError(f"Bad child type {ch.tag} of layout {name}", tag=ch.tag, name=name)
        return layout

    def parse_widget_item(self, n: etree._Element) -> WidgetItem:
        item = WidgetItem(row=attr_int(n, "row"), column=attr_int(n, "column"))
        for ch in element_children(n):
            if ch.tag == "property":
                item.properties.append(self.parse_property(ch))
            elif ch.tag == "item":
                item.items.append(self.parse_widget_item(ch))
            else:
                raise MalformedDocumentError(f"Bad child type {ch.tag} of item", tag=ch.tag)
        return item

    def parse_action(self, n: etree._Element) -> Action:
        action = Action(name=ObjectName(attr_str(n, "name")))
        for ch in element_children(n):
            if ch.tag == "property":
                action.properties.append(self.parse_property(ch))
            elif ch.tag == "attribute":
                action.attributes.append(self.parse_attribute(ch))
            else:
                raise MalformedDocumentError(f"Bad child type {ch.tag} of action {action.name}", tag=ch.tag)
        return action

    def parse_action_group(self, n: etree._Element) -> ActionGroup:
        group = ActionGroup(name=ObjectName(attr_str(n, "name")))
        for ch in element_children(n):
            if ch.tag == "action":
                group.actions.append(self.parse_action(ch))
            elif ch.tag == "actiongroup":
                group.action_groups.append(self.parse_action_group(ch))
            elif ch.tag == "property":
                group.properties.append(self.parse_property(ch))
            elif ch.tag == "attribute":
                group.attributes.append(self.parse_attribute(ch))
            else:
                raise MalformedDocumentError(f"Bad child type {ch.tag} of action group {group.name}", tag=ch.tag)
        return group

    def parse_widget(self, n: etree._Element) -> Widget:
        name = attr_str(n, "name")
        properties: List[Property] = []
        attributes: List[Attribute] = []
        rows: List[Row] = []
        columns: List[Column] = []
        items: List[WidgetItem] = []
        layout: Optional[Layout] = None
        widgets: List[Widget] = []
        actions: List[Action] = []
        action_groups: List[ActionGroup] = []
        add_actions: List[ActionRef] = []
        zorders: List[str] = []

        for ch in element_children(n):
            tag = ch.tag
            if tag == "property":
                properties.append(self.parse_property(ch))
            elif tag == "attribute":
                attributes.append(self.parse_attribute(ch))
            elif tag == "widget":
                widgets.append(self.parse_widget(ch))
            elif tag == "layout":
                if layout is not None:
                    raise MalformedDocumentError(f"More than one layout in widget {name}", tag=tag, name=name)
                layout = self.parse_layout(ch)
            elif tag == "item":
                items.append(self.parse_widget_item(ch))
            elif tag == "row":
                rows.append(Row(properties=self._properties_only(ch, "row")))
            elif tag == "column":
                columns.append(Column(properties=self._properties_only(ch, "column")))
            elif tag == "action":
                actions.append(self.parse_action(ch))
            elif tag == "actiongroup":
                action_groups.append(self.parse_action_group(ch))
            elif tag == "addaction":
                add_actions.append(ActionRef(name=ObjectName(attr_str(ch, "name"))))
            elif tag == "zorder":
                zorders.append(node_text(ch))
            else:
                raise MalformedDocumentError(f"Bad child type {tag} of widget {name}", tag=tag, name=name)

        if attributes:
            logger.debug("widget name: %s has %d attributes", name, len(attributes))

        return Widget(
            class_name=ClassName(attr_str(n, "class")),
            name=ObjectName(name),
            native=attr_bool(n, "native"),
            properties=properties,
            attributes=attributes,
            rows=rows,
            columns=columns,
            items=items,
            layout=layout,
            widgets=widgets,
            actions=actions,
            action_groups=action_groups,
            add_actions=add_actions,
            zorders=zorders,
        )

    # ---------- document sections ----------
    def parse_connection(self, n: etree._Element) -> Connection:
        return Connection(
            sender=child_text(n, "sender"),
            signal=child_text(n, "signal"),
            receiver=child_text(n, "receiver"),
            slot=child_text(n, "slot"),
        )

    def parse(self) -> UiDocument:
        root = self.root
        if root.tag != "ui":
            raise MalformedDocumentError(f"Root element must be <ui>, got <{root.tag}>", tag=root.tag)

        widget_node = child_node(root, "widget")
        if widget_node is None:
            raise MalformedDocumentError("Document has no root widget", tag="ui")

        doc = UiDocument(widget=self.parse_widget(widget_node), source_path=self.source_path)

        for ch in element_children(root):
            tag = ch.tag
            if tag == "class":
                doc.class_name = node_text(ch)
            elif tag == "layoutdefault":
                doc.layout_default = LayoutDefault(spacing=attr_int(ch, "spacing"), margin=attr_int(ch, "margin"))
            elif tag == "tabstops":
                doc.tab_stops = [node_text(t) for t in child_nodes(ch, "tabstop")]
            elif tag == "buttongroups":
                doc.button_groups = [attr_str(g, "name") for g in child_nodes(ch, "buttongroup")]
            elif tag == "connections":
                doc.connections = [self.parse_connection(c) for c in child_nodes(ch, "connection")]
            elif tag == "widget" or tag in IGNORED_ROOT_SECTIONS:
                continue
            else:
                logger.warning("Ignoring unknown document section <%s>", tag)
        return doc


def parse_ui_file(path: str) -> UiDocument:
    return UiParser.from_file(path).parse()


def parse_ui_string(text: Union[str, bytes], source_path: Optional[str] = None) -> UiDocument:
    return UiParser.from_string(text, source_path=source_path).parse()


__all__ = ["UiParser", "parse_ui_file", "parse_ui_string"]
