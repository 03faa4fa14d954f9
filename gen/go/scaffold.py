"""
Companion ``package main`` scaffold that opens the generated form.

When a connection targets the root widget itself, the scaffold embeds the
widget class in a ``Window`` type and emits one override stub per such slot so
the connection has somewhere to land.
"""
from __future__ import annotations

import logging
import os
from typing import List, Optional

from core.names import to_camel_case
from gen.go.compiler import CompiledUi

logger = logging.getLogger(__name__)


def derive_import_path(output_directory: str, gopath: Optional[str] = None) -> Optional[str]:
    """Import path of *output_directory* relative to ``$GOPATH/src``, if it lives there."""
    gopath = gopath if gopath is not None else os.environ.get("GOPATH", "")
    if not gopath:
        return None
    source_root = os.path.join(os.path.abspath(gopath), "src")
    directory = os.path.abspath(output_directory)
    if not directory.startswith(source_root + os.sep):
        return None
    return directory[len(source_root) + 1:].strip(os.sep).replace(os.sep, "/")


def _window_flag(root_class: str) -> str:
    if root_class == "QMainWindow":
        return "Window"
    return root_class[1:]


class ScaffoldGenerator:
    def __init__(self, indent: str = "\t") -> None:
        self.indent = indent

    def _imports(self, import_path: Optional[str]) -> List[str]:
        lines = ['"github.com/therecipe/qt/core"', '"github.com/therecipe/qt/widgets"', '"os"']
        if import_path:
            lines.append(f'"{import_path}"')
        return [self.indent + line for line in lines]

    def slot_overrides(self, ui: CompiledUi) -> List[str]:
        blocks: List[str] = []
        for slot, param_types in ui.root_slots:
            go_slot = to_camel_case(slot)
            declared = ", ".join(f"arg{i} {t}" for i, t in enumerate(param_types))
            forwarded = ", ".join(f"arg{i}" for i in range(len(param_types)))
            blocks.append("\n".join([
                f"func (this *Window) {go_slot}({declared}) {{",
                f"{self.indent}this.{ui.root_class}.{go_slot}({forwarded})",
                f"{self.indent}// TODO: Add code here",
                "}",
            ]))
        return blocks

    def render(self, ui: CompiledUi, import_path: Optional[str] = None) -> str:
        prefix = import_path.rsplit("/", 1)[-1] + "." if import_path else ""
        ui_type = f"{prefix}UI{ui.class_name}"
        flag = _window_flag(ui.root_class)
        ind = self.indent

        out: List[str] = ["package main", "", "import (", *self._imports(import_path), ")", ""]
        if ui.needs_subclass:
            out += [
                "//go:generate qtmoc",
                "type Window struct {",
                f"{ind}widgets.{ui.root_class}",
                f"{ind}{ui_type}",
                "}",
                "",
                "func NewWidget(parent widgets.QWidget_ITF) *Window {",
                f"{ind}window := NewWindow(parent, core.Qt__{flag})",
                "",
                f"{ind}window.SetupUI(&window.{ui.root_class})",
                f"{ind}return window",
                "}",
                "",
                "// Generated Override Slots",
                "",
                "\n\n".join(self.slot_overrides(ui)),
                "",
            ]
            show = "w.Show()"
        else:
            out += [
                "type Window struct {",
                f"{ind}{ui_type}",
                f"{ind}Widget *widgets.{ui.root_class}",
                "}",
                "",
                "func NewWidget(parent widgets.QWidget_ITF) *Window {",
                f"{ind}window := &Window{{",
                f"{ind}{ind}Widget: widgets.New{ui.root_class}(parent, core.Qt__{flag}),",
                f"{ind}}}",
                "",
                f"{ind}window.SetupUI(window.Widget)",
                f"{ind}return window",
                "}",
                "",
            ]
            show = "w.Widget.Show()"
        out += [
            "func main() {",
            f"{ind}app := widgets.NewQApplication(len(os.Args), os.Args)",
            f"{ind}w := NewWidget(nil)",
            f"{ind}{show}",
            "",
            f"{ind}os.Exit(app.Exec())",
            "}",
        ]
        return "\n".join(out) + "\n"

    def write(self, ui: CompiledUi, path: str, import_path: Optional[str] = None) -> str:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.render(ui, import_path))
        logger.info("Wrote scaffold %s", path)
        return path


__all__ = ["ScaffoldGenerator", "derive_import_path"]
