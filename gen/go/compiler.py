"""
Structural translation of a parsed ``.ui`` document into Go statement streams.

:class:`UiCompiler` walks the widget tree once, depth-first, and appends to the
per-document :class:`~gen.go.streams.CodeStreams`. The final file layout is
left to :mod:`gen.go.writer`.
"""
from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple

from core.names import generated_class_name, resolve_variable_name, setter_name
from core.ui_model import (
    Action, ActionGroup, ActionRef, Attribute, BoolValue, EnumValue, IconSet, Layout, LayoutItem,
    NumberValue, Property, Size, Spacer, StringValue, UiDocument, Widget, WidgetItem, find_property,
)
from gen.go.connections import ConnectionCompiler
from gen.go.properties import PropertyEmitter, scoped_token
from gen.go.resolver import GoResolver
from gen.go.streams import CodeStreams
from meta import DEFAULT_META, ToolkitMetaModel
from types_profiles.registry import EnumNamespaceRegistry
from ui_types import ClassName, ItemKind, VarName
from utils.text import go_bool, go_quote

logger = logging.getLogger(__name__)

MARGIN_PROPERTIES = ("margin", "leftMargin", "topMargin", "rightMargin", "bottomMargin")
SPACING_PROPERTIES = ("spacing",)

# Parent classes whose children attach themselves through the constructor argument.
SELF_ATTACHING_PARENTS = frozenset({
    "QWidget", "QFrame", "QSplitter", "QMenuBar", "QMenu", "QGroupBox", "QDialog", "QMainWindow",
})

TABLE_HEADER_FAMILIES = (("horizontalHeader", "HorizontalHeader"), ("verticalHeader", "VerticalHeader"))
TREE_HEADER_FAMILIES = (("header", "Header"),)


@dataclass
class CompiledUi:
    """Everything the Code Assembler needs for one document."""
    class_name: str
    root_name: str
    root_var: VarName
    root_class: ClassName
    imports: List[str]
    streams: CodeStreams
    tab_stops: List[str] = field(default_factory=list)
    connections: List[str] = field(default_factory=list)
    needs_subclass: bool = False
    root_slots: List[Tuple[str, List[str]]] = field(default_factory=list)
    tree_item_log: List[Tuple[str, str]] = field(default_factory=list)


def normalize_line_widget(widget: Widget) -> Widget:
    """Rewrite a ``Line`` widget as a sunken horizontal or vertical ``QFrame``."""
    if widget.class_name != "Line":
        return widget
    props: List[Property] = []
    for prop in widget.properties:
        if prop.name == "orientation":
            props.append(Property("frameShadow", EnumValue("QFrame::Sunken")))
            horizontal = isinstance(prop.value, EnumValue) and prop.value.value == "Qt::Horizontal"
            props.append(Property("frameShape", EnumValue("QFrame::HLine" if horizontal else "QFrame::VLine")))
        else:
            props.append(prop)
    return dataclasses.replace(widget, class_name=ClassName("QFrame"), properties=props)


def tree_item_needs_var(item: WidgetItem) -> bool:
    if item.items:
        return True
    return any(p.name != "text" for p in item.properties)


class UiCompiler:
    def __init__(self, document: UiDocument, meta: Optional[ToolkitMetaModel] = None,
                 registry: Optional[EnumNamespaceRegistry] = None) -> None:
        self.document = document
        self.meta = meta or DEFAULT_META
        self.registry = registry or EnumNamespaceRegistry(meta=self.meta)
        root = document.widget
        self.root_var: VarName = resolve_variable_name(root.name)
        self.root_class = root.class_name
        self.class_name = generated_class_name(root.name, document.source_path)
        self.streams = CodeStreams()
        self.resolver = GoResolver(self.streams, self.root_var, self.meta, self.registry)
        self.props = PropertyEmitter(self.resolver)
        self.connections = ConnectionCompiler(root.name, self.root_var, self.registry)
        self._menu_names: Set[str] = set()
        self._result: Optional[CompiledUi] = None

    # ---------- entry point ----------
    def compile(self) -> CompiledUi:
        if self._result is not None:
            return self._result

        root = self.document.widget
        self._collect_menus(root)
        root_var = self.root_var
        logger.debug("Translating %s (%s) as UI%s", root.name, root.class_name, self.class_name)

        self.streams.emit(f"{root_var}.SetObjectName({go_quote(root.name)})")
        self._widget_properties(root_var, root.properties)

        if root.layout is not None:
            self.translate_layout(root_var, root.layout, widget_parent=root_var)
        for child in root.widgets:
            self.translate_widget(root_var, child)
            self._attach_child(root_var, root.class_name, child)
            self._attach_to_main_window(child)
        self._translate_actions(root_var, root)

        self.streams.setup.extend(self.streams.add_actions)
        self.streams.add_actions.clear()

        self._result = CompiledUi(
            class_name=self.class_name,
            root_name=root.name,
            root_var=root_var,
            root_class=root.class_name,
            imports=list(self.resolver.imports()),
            streams=self.streams,
            tab_stops=self.tab_stop_lines(),
            connections=self.connections.emit_connections(self.document.connections),
            needs_subclass=self.connections.needs_subclass(self.document.connections),
            root_slots=self.connections.root_slots(self.document.connections),
            tree_item_log=list(self.resolver.tree_items.log),
        )
        return self._result

    def _collect_menus(self, widget: Widget) -> None:
        for child in widget.widgets:
            if child.class_name == "QMenu":
                self._menu_names.add(child.name)
            self._collect_menus(child)
        if widget.layout is not None:
            self._collect_layout_menus(widget.layout)

    def _collect_layout_menus(self, layout: Layout) -> None:
        for item in layout.items:
            if isinstance(item.view, Widget):
                self._collect_menus(item.view)
            elif isinstance(item.view, Layout):
                self._collect_layout_menus(item.view)

    # ---------- widgets ----------
    def _widget_properties(self, target: str, props: List[Property]) -> None:
        for prop in props:
            if prop.name == "currentIndex" and isinstance(prop.value, NumberValue):
                self.streams.emit_current_index(f"{target}.SetCurrentIndex({prop.value.value})")
            else:
                self.props.emit(target, prop)

    def _constructor(self, cls: str, parent: str) -> str:
        if cls in self.meta.flagged_widgets:
            self.resolver.request_import("core")
            return f"widgets.New{cls}({parent}, core.Qt__Widget)"
        if cls in self.meta.parent_only_widgets:
            return f"widgets.New{cls}2({parent})"
        return f"widgets.New{cls}({parent})"

    def translate_widget(self, parent: str, widget: Widget) -> None:
        widget = normalize_line_widget(widget)
        var = self.resolver.var(widget.name)
        target = f"this.{var}"
        cls = widget.class_name

        self.resolver.request_import("widgets")
        self.streams.declare(f"{var} *widgets.{cls}")
        self.streams.emit(f"{target} = {self._constructor(cls, parent)}")
        self.streams.emit(f"{target}.SetObjectName({go_quote(widget.name)})")
        self._widget_properties(target, widget.properties)

        if cls == "QComboBox":
            self.translate_combo_box(target, widget)
        elif cls == "QListWidget":
            self.translate_list_widget(target, widget)
        elif cls == "QTableWidget":
            self.translate_table_widget(target, widget)
        elif cls == "QTreeWidget":
            self.translate_tree_widget(target, widget)
        else:
            self._default_attributes(target, widget)

        if widget.layout is not None:
            self.translate_layout(target, widget.layout, widget_parent=target)
        for child in widget.widgets:
            self.translate_widget(target, child)
            self._attach_child(target, cls, child)

        self._translate_actions(target, widget)

    def _translate_actions(self, target: str, widget: Widget) -> None:
        for action in widget.actions:
            self.translate_action(action)
        for group in widget.action_groups:
            self.translate_action_group(group)
        for ref in widget.add_actions:
            self.translate_action_ref(target, widget.class_name, ref)
        for name in widget.zorders:
            self.streams.emit(f"{self.resolver.field(name)}.Raise()")

    def _default_attributes(self, target: str, widget: Widget) -> None:
        for attr in widget.attributes:
            if attr.name == "buttonGroup" and isinstance(attr.value, StringValue):
                group = self.resolver.ensure_button_group(attr.value.value)
                self.streams.emit(f"this.{group}.AddButton({target}, -1)")

    def _attach_child(self, parent: str, parent_class: str, child: Widget) -> None:
        child_field = self.resolver.field(child.name)
        if parent_class == "QTabWidget":
            self.streams.emit(f'{parent}.AddTab({child_field}, "")')
            title = child.get_attribute("title")
            if title is not None and isinstance(title.value, StringValue):
                self._page_text(f"{parent}.SetTabText({parent}.IndexOf({child_field}), ", title.value)
        elif parent_class == "QStackedWidget":
            self.streams.emit(f"{parent}.AddWidget({child_field})")
        elif parent_class == "QToolBox":
            self.streams.emit(f'{parent}.AddItem({child_field}, "")')
            label = child.get_attribute("label")
            if label is not None and isinstance(label.value, StringValue):
                self._page_text(f"{parent}.SetItemText({parent}.IndexOf({child_field}), ", label.value)
        elif parent_class in ("QScrollArea", "QDockWidget"):
            self.streams.emit(f"{parent}.SetWidget({child_field})")
        elif parent_class not in SELF_ATTACHING_PARENTS:
            logger.warning("Should add code for %s inner widget %s?", parent, child.name)

    def _page_text(self, call: str, value: StringValue) -> None:
        if value.notr:
            self.streams.emit(f"{call}{go_quote(value.value)})")
        else:
            self.streams.emit_translate(f"{call}{self.props.translated(value)})")

    def _attach_to_main_window(self, child: Widget) -> None:
        if self.root_class != "QMainWindow":
            return
        root_var = self.root_var
        child_field = self.resolver.field(child.name)
        cls = child.class_name
        if cls == "QMenuBar":
            self.streams.emit(f"{root_var}.SetMenuBar({child_field})")
        elif cls == "QStatusBar":
            self.streams.emit(f"{root_var}.SetStatusBar({child_field})")
        elif cls == "QToolBar":
            area = child.get_attribute("toolBarArea")
            if area is not None and isinstance(area.value, EnumValue):
                self.resolver.request_import("core")
                self.streams.emit(
                    f"{root_var}.AddToolBar(core.{scoped_token(area.value.value, 'Qt')}, {child_field})")
        elif cls == "QWidget":
            self.streams.emit(f"{root_var}.SetCentralWidget({child_field})")

    # ---------- item views ----------
    def translate_combo_box(self, target: str, widget: Widget) -> None:
        for i, item in enumerate(widget.items):
            self.resolver.request_import("core")
            icon = find_property(item.properties, "icon")
            if icon is not None and isinstance(icon.value, IconSet):
                name = self.props.icon_temp(icon.value)
                self.streams.emit(f'{target}.AddItem2({name}, "", core.NewQVariant())')
            else:
                self.streams.emit(f'{target}.AddItem("", core.NewQVariant())')
            for prop in item.properties:
                if prop.name == "icon":
                    continue
                if prop.name != "text" or not isinstance(prop.value, StringValue):
                    logger.error("unknown combobox item property %s", prop.name)
                    continue
                if prop.value.notr:
                    self.streams.emit(f"{target}.SetItemText({i}, {go_quote(prop.value.value)})")
                else:
                    self.streams.emit_translate(f"{target}.SetItemText({i}, {self.props.translated(prop.value)})")

    def _save_sorting(self, target: str) -> None:
        flag = self.resolver.ensure_sorting_enabled()
        self.streams.emit_translate(f"{flag} = {target}.IsSortingEnabled()")
        self.streams.emit_translate(f"{target}.SetSortingEnabled(false)")

    def _restore_sorting(self, target: str) -> None:
        self.streams.emit_translate(f"{target}.SetSortingEnabled(sortingEnabled)")

    def translate_list_widget(self, target: str, widget: Widget) -> None:
        if not widget.items:
            return
        temp = self.resolver.ensure_list_item_temp()
        self._save_sorting(target)
        for i, item in enumerate(widget.items):
            self.streams.emit(f"{temp} = widgets.NewQListWidgetItem(nil, 0)")
            self.streams.emit(f"{target}.AddItem2({temp})")
            for prop in item.properties:
                self.props.emit(temp, prop, translate_target=f"{target}.Item({i})")
        self._restore_sorting(target)

    def translate_table_widget(self, target: str, widget: Widget) -> None:
        self.streams.emit(f"{target}.SetColumnCount({len(widget.columns)})")
        self.streams.emit(f"{target}.SetRowCount({len(widget.rows)})")

        for i, row in enumerate(widget.rows):
            temp = self.resolver.ensure_table_item_temp()
            self.streams.emit(f"{temp} = widgets.NewQTableWidgetItem(0)")
            self.streams.emit(f"{target}.SetVerticalHeaderItem({i}, {temp})")
            for prop in row.properties:
                self.props.emit(temp, prop, translate_target=f"{target}.VerticalHeaderItem({i})")

        for i, column in enumerate(widget.columns):
            temp = self.resolver.ensure_table_item_temp()
            self.streams.emit(f"{temp} = widgets.NewQTableWidgetItem(0)")
            self.streams.emit(f"{target}.SetHorizontalHeaderItem({i}, {temp})")
            for prop in column.properties:
                self.props.emit(temp, prop, translate_target=f"{target}.HorizontalHeaderItem({i})")

        if widget.items:
            temp = self.resolver.ensure_table_item_temp()
            self._save_sorting(target)
            for item in widget.items:
                self.streams.emit(f"{temp} = widgets.NewQTableWidgetItem(0)")
                self.streams.emit(f"{target}.SetItem({item.row}, {item.column}, {temp})")
                for prop in item.properties:
                    self.props.emit(temp, prop, translate_target=f"{target}.Item({item.row}, {item.column})")
            self._restore_sorting(target)

        self._header_attributes(target, widget.attributes, TABLE_HEADER_FAMILIES)

    def _header_attributes(self, target: str, attributes: List[Attribute],
                           families: Tuple[Tuple[str, str], ...]) -> None:
        for attr in attributes:
            family = next(((p, acc) for p, acc in families if attr.name.startswith(p)), None)
            if family is None:
                logger.warning("unknown header attribute %s on %s", attr.name, target)
                continue
            prefix, accessor = family
            prop_name = "SortIndicatorShown" if attr.name.endswith("ShowSortIndicator") else attr.name[len(prefix):]
            if isinstance(attr.value, BoolValue):
                value = go_bool(attr.value.value)
            elif isinstance(attr.value, NumberValue):
                value = str(attr.value.value)
            else:
                logger.error("%s attribute %s not supported by header", type(attr.value).__name__, attr.name)
                continue
            self.streams.emit(f"{target}.{accessor}().{setter_name(prop_name)}({value})")

    # ---------- tree widgets ----------
    def translate_tree_widget(self, target: str, widget: Widget) -> None:
        pool = self.resolver.tree_items
        if widget.columns:
            header = pool.acquire()
            self.streams.emit(f"{header} = widgets.NewQTreeWidgetItem(0)")
            self.streams.emit(f"{target}.SetHeaderItem({header})")
            for i, column in enumerate(widget.columns):
                for prop in column.properties:
                    self.props.emit(header, prop, arg_prefix=f"{i}, ",
                                    translate_target=f"{target}.HeaderItem()")
            pool.release(header)

        if widget.items:
            self._save_sorting(target)
            for i, item in enumerate(widget.items):
                call_object = f"{target}.TopLevelItem({i})"
                self._tree_item(call_object, f"widgets.NewQTreeWidgetItem3({target}, 0)", item)
            self._restore_sorting(target)

        self._header_attributes(target, widget.attributes, TREE_HEADER_FAMILIES)

    def _tree_item(self, call_object: str, constructor: str, item: WidgetItem) -> None:
        if not tree_item_needs_var(item):
            self.streams.emit(constructor)
            self.translate_tree_item_props(call_object, None, item)
            return
        pool = self.resolver.tree_items
        var = pool.acquire()
        self.streams.emit(f"{var} = {constructor}")
        self.translate_tree_item_props(call_object, var, item)
        for i, child in enumerate(item.items):
            self._tree_item(f"{call_object}.Child({i})", f"widgets.NewQTreeWidgetItem6({var}, 0)", child)
        pool.release(var)

    def translate_tree_item_props(self, call_object: str, var: Optional[str], item: WidgetItem) -> None:
        """Apply item properties; the n-th ``text`` property fills column n."""
        column = -1
        for prop in item.properties:
            if prop.name == "text":
                column += 1
                if isinstance(prop.value, StringValue) and not prop.value.value:
                    continue
                self.props.emit(var or call_object, prop, arg_prefix=f"{column}, ",
                                translate_target=call_object)
                continue
            self.props.emit(var or call_object, prop, arg_prefix=f"{max(column, 0)}, ",
                            translate_target=call_object)

    # ---------- layouts ----------
    def translate_spacer(self, spacer: Spacer) -> None:
        var = self.resolver.var(spacer.name)
        self.resolver.request_import("widgets")
        width = height = 0
        vertical = False
        for prop in spacer.properties:
            if prop.name == "orientation" and isinstance(prop.value, EnumValue):
                vertical = prop.value.value == "Qt::Vertical"
            elif prop.name == "sizeHint" and isinstance(prop.value, Size):
                width, height = prop.value.width, prop.value.height
        stretchy = "widgets.QSizePolicy__Expanding"
        fixed = "widgets.QSizePolicy__Minimum"
        h_policy, v_policy = (fixed, stretchy) if vertical else (stretchy, fixed)
        self.streams.declare(f"{var} *widgets.QSpacerItem")
        self.streams.emit(f"this.{var} = widgets.NewQSpacerItem({width}, {height}, {h_policy}, {v_policy})")

    def translate_layout(self, parent: str, layout: Layout, widget_parent: str) -> None:
        """*parent* is the constructor argument (``nil`` for nested layouts);
        widgets inside the layout are parented to *widget_parent*."""
        var = self.resolver.var(layout.name)
        target = f"this.{var}"
        cls = layout.class_name
        self.resolver.request_import("widgets")
        self.streams.declare(f"{var} *widgets.{cls}")
        if cls in self.meta.box_layouts:
            self.streams.emit(f"{target} = widgets.New{cls}2({parent})")
        else:
            self.streams.emit(f"{target} = widgets.New{cls}({parent})")
        self.streams.emit(f"{target}.SetObjectName({go_quote(layout.name)})")

        default = self.document.layout_default
        margin = default.margin if default is not None else 0
        left = top = right = bottom = margin
        spacing = default.spacing if default is not None else 0
        for prop in layout.properties:
            if not isinstance(prop.value, NumberValue):
                continue
            value = prop.value.value
            if prop.name == "margin":
                left = top = right = bottom = value
            elif prop.name == "leftMargin":
                left = value
            elif prop.name == "topMargin":
                top = value
            elif prop.name == "rightMargin":
                right = value
            elif prop.name == "bottomMargin":
                bottom = value
            elif prop.name == "spacing":
                spacing = value
        self.streams.emit(f"{target}.SetContentsMargins({left}, {top}, {right}, {bottom})")
        self.streams.emit(f"{target}.SetSpacing({spacing})")
        for prop in layout.properties:
            if prop.name in MARGIN_PROPERTIES or prop.name in SPACING_PROPERTIES:
                continue
            self.props.emit(target, prop)

        for item in layout.items:
            self.translate_layout_item(widget_parent, target, cls, item)

        for suffix, values in layout.factor_lists():
            for i, value in enumerate(values):
                if value > 0:
                    self.streams.emit(f"{target}.Set{suffix}({i}, {value})")

    def _alignment(self, item: LayoutItem) -> str:
        if not item.alignment:
            return "0"
        tokens = [t for t in item.alignment.split("|") if t.strip()]
        return self.resolver.resolve_set(tokens) or "0"

    def translate_layout_item(self, widget_parent: str, layout_target: str, layout_class: str,
                              item: LayoutItem) -> None:
        view = item.view
        kind = item.kind
        if isinstance(view, Layout):
            self.translate_layout("nil", view, widget_parent)
        elif isinstance(view, Spacer):
            self.translate_spacer(view)
        else:
            self.translate_widget(widget_parent, view)
        child = self.resolver.field(view.name)
        emit = self.streams.emit

        if layout_class in self.meta.box_layouts:
            if kind is ItemKind.LAYOUT:
                emit(f"{layout_target}.AddLayout({child}, 0)")
            elif kind is ItemKind.SPACER:
                emit(f"{layout_target}.AddItem({child})")
            else:
                emit(f"{layout_target}.AddWidget({child}, 0, {self._alignment(item)})")
        elif layout_class == "QFormLayout":
            role = "widgets.QFormLayout__LabelRole" if item.column == 0 else "widgets.QFormLayout__FieldRole"
            emit(f"{layout_target}.Set{kind.value}({item.row}, {role}, {child})")
        elif layout_class == "QGridLayout":
            span = f"{item.row}, {item.column}, {item.rowspan or 1}, {item.colspan or 1}"
            if kind is ItemKind.WIDGET:
                emit(f"{layout_target}.AddWidget3({child}, {span}, {self._alignment(item)})")
            elif kind is ItemKind.LAYOUT:
                emit(f"{layout_target}.AddLayout2({child}, {span}, {self._alignment(item)})")
            else:
                logger.warning("QGridLayout.AddItem not supported now, QLayout.AddItem used for %s", view.name)
                emit(f"{layout_target}.AddItem({child})")
        else:
            logger.warning("Don't know how to add %s to layout class %s", view.name, layout_class)

    # ---------- actions ----------
    def translate_action(self, action: Action) -> None:
        var = self.resolver.var(action.name)
        target = f"this.{var}"
        self.resolver.request_import("widgets")
        self.streams.declare(f"{var} *widgets.QAction")
        self.streams.emit(f"{target} = widgets.NewQAction({self.root_var})")
        self.streams.emit(f"{target}.SetObjectName({go_quote(action.name)})")
        for prop in action.properties:
            if prop.name == "shortcut" and isinstance(prop.value, StringValue):
                self.resolver.request_import("gui")
                if prop.value.notr:
                    emit, text = self.streams.emit, go_quote(prop.value.value)
                else:
                    emit, text = self.streams.emit_translate, self.props.translated(prop.value)
                emit(f"{target}.{setter_name(prop.name)}(gui.QKeySequence_FromString("
                     f"{text}, gui.QKeySequence__NativeText))")
            else:
                self.props.emit(target, prop)

    def translate_action_group(self, group: ActionGroup) -> None:
        logger.warning("action group %s is not emitted", group.name)

    def translate_action_ref(self, parent: str, parent_class: str, ref: ActionRef) -> None:
        if ref.is_separator:
            self.streams.emit_add_action(f"{parent}.AddSeparator()")
            return
        action = self.resolver.field(ref.name)
        if parent_class == "QMenuBar" or ref.name in self._menu_names:
            if parent_class not in ("QMenuBar", "QMenu", "QToolBar"):
                logger.error("%s action %s not supported", parent_class, ref.name)
                return
            self.streams.emit_add_action(f"{parent}.QWidget.AddAction({action}.MenuAction())")
        elif parent_class in ("QToolBar", "QMenu"):
            self.streams.emit_add_action(f"{parent}.QWidget.AddAction({action})")
        else:
            logger.error("%s action %s not supported", parent_class, ref.name)

    # ---------- document level ----------
    def tab_stop_lines(self) -> List[str]:
        stops = self.document.tab_stops
        return [
            f"{self.root_var}.SetTabOrder({self.resolver.field(a)}, {self.resolver.field(b)})"
            for a, b in zip(stops, stops[1:])
        ]


def compile_document(document: UiDocument, meta: Optional[ToolkitMetaModel] = None,
                     registry: Optional[EnumNamespaceRegistry] = None) -> CompiledUi:
    return UiCompiler(document, meta=meta, registry=registry).compile()


__all__ = [
    "CompiledUi", "UiCompiler", "compile_document", "normalize_line_widget", "tree_item_needs_var",
]
