import pytest

from adapters.qt_ui import UiParser, parse_ui_string
from core.errors import MalformedDocumentError
from core.ui_model import (
    BoolValue, Color, EnumValue, Font, IconSet, Layout, NumberValue, Palette, Rect, SetValue,
    SizePolicy, Spacer, StringListValue, StringValue, Widget,
)
from ui_types import ItemKind


def test_parse_dialog_structure(dialog_ui):
    doc = parse_ui_string(dialog_ui)
    root = doc.widget
    assert doc.class_name == "Dialog"
    assert root.class_name == "QDialog"
    assert root.name == "Dialog"
    assert root.get_property("geometry").value == Rect(0, 0, 400, 300)
    assert root.get_property("windowTitle").value == StringValue("Dialog")

    layout = root.layout
    assert isinstance(layout, Layout)
    assert layout.class_name == "QVBoxLayout"
    assert len(layout.items) == 1
    item = layout.items[0]
    assert item.kind is ItemKind.WIDGET
    assert isinstance(item.view, Widget)
    assert item.view.name == "okButton"
    assert root.widgets == []


def test_parse_document_sections(main_window_ui):
    doc = parse_ui_string(main_window_ui)
    assert doc.tab_stops == ["nameEdit", "nameLabel"]
    assert len(doc.connections) == 1
    conn = doc.connections[0]
    assert (conn.sender, conn.signal, conn.receiver, conn.slot) == ("actionQuit", "triggered()", "MainWindow", "close()")
    assert [a.name for a in doc.widget.actions] == ["actionOpen", "actionQuit"]

    toolbar = [w for w in doc.widget.widgets if w.class_name == "QToolBar"][0]
    assert toolbar.get_attribute("toolBarArea").value == EnumValue("TopToolBarArea")
    assert toolbar.get_attribute("toolBarBreak").value == BoolValue(False)

    grid = doc.widget.widgets[0].layout
    assert grid.items[1].colspan == 2
    assert isinstance(grid.items[2].view, Spacer)
    assert grid.items[2].kind is ItemKind.SPACER
    label = grid.items[0].view
    assert label.get_property("buddy").value.value == "nameEdit"


def test_layout_and_children_are_exclusive(make_ui):
    text = make_ui(
        '<layout class="QVBoxLayout" name="l"/>'
        '<widget class="QLabel" name="stray"/>'
    )
    with pytest.raises(MalformedDocumentError):
        parse_ui_string(text)


def test_layout_without_children_is_fine(make_ui):
    doc = parse_ui_string(make_ui('<layout class="QVBoxLayout" name="l"/>'))
    assert doc.widget.layout is not None
    assert doc.widget.widgets == []


@pytest.mark.parametrize("prop", [
    '<property name="text"/>',
    '<property name="text"><string>a</string><string>b</string></property>',
])
def test_property_requires_exactly_one_value(make_ui, prop):
    with pytest.raises(MalformedDocumentError):
        parse_ui_string(make_ui(prop))


def test_unknown_value_tag_is_fatal(make_ui):
    with pytest.raises(MalformedDocumentError) as exc:
        parse_ui_string(make_ui('<property name="x"><hologram>1</hologram></property>'))
    assert exc.value.tag == "hologram"


def test_bad_layout_item_child(make_ui):
    text = make_ui('<layout class="QVBoxLayout" name="l"><item><action name="a"/></item></layout>')
    with pytest.raises(MalformedDocumentError):
        parse_ui_string(text)


def test_unknown_widget_child_tag(make_ui):
    with pytest.raises(MalformedDocumentError):
        parse_ui_string(make_ui('<gizmo/>'))


def test_root_must_be_ui_with_widget():
    with pytest.raises(MalformedDocumentError):
        parse_ui_string("<form/>")
    with pytest.raises(MalformedDocumentError):
        parse_ui_string('<ui version="4.0"><class>X</class></ui>')


def test_ignored_sections_are_tolerated(make_ui):
    text = make_ui("", extra="<resources/><customwidgets/><includes/><author>me</author><slots/>")
    doc = parse_ui_string(text)
    assert doc.widget.name == "Form"


def test_composite_values(make_ui):
    text = make_ui(
        '<property name="font"><font><family>Sans</family><pointsize>12</pointsize>'
        '<bold>true</bold><kerning>false</kerning></font></property>'
        '<property name="sizePolicy"><sizepolicy hsizetype="Preferred" vsizetype="Fixed">'
        '<horstretch>1</horstretch><verstretch>0</verstretch></sizepolicy></property>'
        '<property name="alignment"><set>Qt::AlignLeft|Qt::AlignTop</set></property>'
        '<property name="maximum"><number>99</number></property>'
        '<property name="items"><stringlist><string>a</string><string>b</string></stringlist></property>'
        '<property name="icon"><iconset theme="edit-copy"><normaloff>copy.png</normaloff></iconset></property>'
        '<property name="palette"><palette><active><colorrole role="WindowText">'
        '<brush brushstyle="SolidPattern"><color alpha="128"><red>1</red><green>2</green><blue>3</blue></color></brush>'
        '</colorrole></active><inactive/><disabled/></palette></property>'
        '<property name="toolTip"><string notr="true" comment="ctx">tip</string></property>'
    )
    w = parse_ui_string(text).widget
    assert w.get_property("font").value == Font(family="Sans", point_size=12, bold=True)
    assert w.get_property("sizePolicy").value == SizePolicy("Preferred", "Fixed", 1, 0)
    assert w.get_property("alignment").value == SetValue("Qt::AlignLeft|Qt::AlignTop")
    assert w.get_property("alignment").value.tokens == ["Qt::AlignLeft", "Qt::AlignTop"]
    assert w.get_property("maximum").value == NumberValue(99)
    assert w.get_property("items").value == StringListValue(("a", "b"))
    icon = w.get_property("icon").value
    assert isinstance(icon, IconSet)
    assert icon.theme == "edit-copy"
    assert icon.pixmaps() == [("copy.png", "Normal", "Off")]
    palette = w.get_property("palette").value
    assert isinstance(palette, Palette)
    role = palette.active.items[0].role
    assert role.role == "WindowText"
    assert role.brush.color == Color(1, 2, 3, 128)
    assert palette.inactive.items == ()
    tip = w.get_property("toolTip").value
    assert tip.notr is True
    assert tip.comment == "ctx"


def test_items_rows_and_columns(make_ui):
    text = make_ui(
        '<widget class="QTableWidget" name="table">'
        '<row><property name="text"><string>R0</string></property></row>'
        '<column><property name="text"><string>C0</string></property></column>'
        '<item row="0" column="0"><property name="text"><string>cell</string></property></item>'
        '</widget>'
    )
    table = parse_ui_string(text).widget.widgets[0]
    assert len(table.rows) == 1
    assert len(table.columns) == 1
    assert (table.items[0].row, table.items[0].column) == (0, 0)


def test_from_string_accepts_bytes_with_declaration(dialog_ui):
    parser = UiParser.from_string(dialog_ui.encode("utf-8"), source_path="dialog.ui")
    doc = parser.parse()
    assert doc.source_path == "dialog.ui"
