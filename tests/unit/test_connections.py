import logging

import pytest

from core.errors import ConnectionMismatch
from core.ui_model import Connection
from gen.go.connections import ConnectionCompiler, normalize_param_type, parse_signature
from types_profiles.registry import DEFAULT_PROFILE, load_profiles


@pytest.fixture
def compiler():
    return ConnectionCompiler("Dialog", "Dialog")


@pytest.mark.parametrize("raw,expected", [
    ("int", "int"),
    ("const QString &", "QString"),
    ("const  QString&", "QString"),
    ("QTreeWidgetItem *", "QTreeWidgetItem *"),
])
def test_normalize_param_type(raw, expected):
    assert normalize_param_type(raw) == expected


def test_parse_signature():
    assert parse_signature("valueChanged(int, QString)") == ("valueChanged", ["int", "QString"])
    assert parse_signature("clicked()") == ("clicked", [])


def test_equal_arity_connects_directly(compiler):
    conn = Connection("lineEdit", "textChanged(const QString &)", "label", "setText(QString)")
    assert compiler.compile_connection(conn) == "this.LineEdit.ConnectTextChanged(this.Label.SetText)"


def test_root_receiver_and_sender(compiler):
    assert compiler.compile_connection(
        Connection("buttonBox", "accepted()", "Dialog", "accept()")) == "this.ButtonBox.ConnectAccepted(this.Accept)"
    assert compiler.compile_connection(
        Connection("Dialog", "finished(int)", "label", "setNum(int)")) == "Dialog.ConnectFinished(this.Label.SetNum)"


def test_fewer_slot_params_get_an_adapter(compiler):
    conn = Connection("spin", "changed(int,QString)", "label", "onChanged(int)")
    assert compiler.compile_connection(conn) == (
        "this.Spin.ConnectChanged(func(arg0 int, arg1 string) {\n"
        "\tthis.Label.OnChanged(arg0)\n"
        "})"
    )


def test_adapter_uses_profile_types():
    registry = load_profiles([DEFAULT_PROFILE])
    compiler = ConnectionCompiler("Form", "Form", registry, indent="    ")
    conn = Connection("view", "clicked(QModelIndex)", "Form", "refresh()")
    assert compiler.compile_connection(conn) == (
        "this.View.ConnectClicked(func(arg0 *core.QModelIndex) {\n"
        "    this.Refresh()\n"
        "})"
    )


@pytest.mark.parametrize("signal,slot", [
    ("onChanged(int)", "changed(int,QString)"),
    ("toggled(bool)", "setValue(int)"),
])
def test_mismatched_connections_raise(compiler, signal, slot):
    with pytest.raises(ConnectionMismatch):
        compiler.compile_connection(Connection("a", signal, "b", slot))


def test_emit_connections_logs_and_drops_mismatch(compiler, caplog):
    conns = [
        Connection("a", "onChanged(int)", "b", "changed(int,QString)"),
        Connection("okButton", "clicked()", "Dialog", "accept()"),
    ]
    with caplog.at_level(logging.ERROR):
        lines = compiler.emit_connections(conns)
    assert lines == ["this.OkButton.ConnectClicked(this.Accept)"]
    assert "argument mismatched" in caplog.text


def test_root_slots_and_subclass(compiler):
    conns = [
        Connection("okButton", "clicked()", "Dialog", "accept()"),
        Connection("box", "accepted()", "Dialog", "accept()"),
        Connection("spin", "valueChanged(int)", "Dialog", "setLevel(int)"),
        Connection("a", "clicked()", "b", "hide()"),
    ]
    assert compiler.needs_subclass(conns) is True
    assert compiler.root_slots(conns) == [("accept", []), ("setLevel", ["int"])]
    assert compiler.needs_subclass(conns[3:]) is False
