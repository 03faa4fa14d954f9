import pytest

from core.names import generated_class_name, resolve_variable_name, setter_name, to_camel_case
from utils.text import go_float, go_quote, indent_lines, parse_int_list


@pytest.mark.parametrize("raw,expected", [
    ("push_button", "PushButton"),
    ("_hidden", "_Hidden"),
    ("trailing_", "Trailing_"),
    ("a__b", "A_B"),
    ("okButton", "OkButton"),
    ("a", "A"),
    ("__x", "__X"),
    ("", ""),
])
def test_to_camel_case(raw, expected):
    assert to_camel_case(raw) == expected


def test_resolved_names_stay_distinct_within_document():
    names = ["push_button", "pushButton2", "label", "label_2", "line_edit", "lineEdit_3"]
    resolved = [resolve_variable_name(n) for n in names]
    assert len(set(resolved)) == len(names)


def test_setter_name_upper_cases_first_letter():
    assert setter_name("windowTitle") == "SetWindowTitle"
    assert setter_name("text") == "SetText"


def test_generic_root_names_take_file_stem():
    assert generated_class_name("Dialog", "/tmp/find_replace.ui") == "FindReplaceDialog"
    assert generated_class_name("MainWindow", "main.ui") == "MainMainWindow"
    assert generated_class_name("settings_panel", "whatever.ui") == "SettingsPanel"
    assert generated_class_name("Form") == "Form"


def test_go_literals():
    assert go_quote('say "hi"\n') == '"say \\"hi\\"\\n"'
    assert go_quote("Zürich") == '"Zürich"'
    assert go_float(1.5) == "1.500000"


def test_indent_lines_splits_multi_line_statements():
    lines = indent_lines(["a", "b(func() {\n\tc()\n})", ""], "\t")
    assert lines == ["\ta", "\tb(func() {", "\t\tc()", "\t})", ""]


def test_parse_int_list_zeroes_garbage():
    assert parse_int_list("1, x,3") == [1, 0, 3]
    assert parse_int_list("") == []
