"""
Code Assembler: lays the statement streams of a :class:`CompiledUi` out as one
Go source file.
"""
from __future__ import annotations

import logging
import os
from typing import List, Optional

from gen.go.compiler import CompiledUi
from meta import DEFAULT_META, ToolkitMetaModel
from utils.text import indent_lines

logger = logging.getLogger(__name__)

HEADER = "// WARNING! All changes made in this file will be lost!"


def output_file_name(ui_path: str) -> str:
    """``main_window.ui`` -> ``main_window_ui.go``."""
    return os.path.basename(ui_path).replace(".", "_") + ".go"


class GoWriter:
    def __init__(self, meta: Optional[ToolkitMetaModel] = None, indent: str = "\t") -> None:
        self.meta = meta or DEFAULT_META
        self.indent = indent

    def _block(self, lines: List[str]) -> List[str]:
        return indent_lines(lines, self.indent)

    def setup_body(self, ui: CompiledUi) -> List[str]:
        streams = ui.streams
        body = list(streams.setup) + list(streams.buddies)
        body.append("")
        body.append(f"this.RetranslateUi({ui.root_var})")
        body.extend(streams.current_index)
        body.extend(ui.tab_stops)
        body.extend(ui.connections)
        return body

    def translate_body(self, ui: CompiledUi) -> List[str]:
        body = [f"_translate := {self.meta.translate_func}"]
        if ui.streams.translate:
            body.extend(ui.streams.translate)
        else:
            body.append("_ = _translate")
        return body

    def render(self, ui: CompiledUi, package_name: str) -> str:
        imports = [self.meta.import_line(sub) for sub in sorted(ui.imports)]
        signature = f"{ui.root_var} *widgets.{ui.root_class}"
        out: List[str] = [
            HEADER,
            f"package {package_name}",
            "",
            "import (",
            *self._block(imports),
            ")",
            "",
            f"type UI{ui.class_name} struct {{",
            *self._block(ui.streams.declarations),
            "}",
            "",
            f"func (this *UI{ui.class_name}) SetupUI({signature}) {{",
            *self._block(self.setup_body(ui)),
            "}",
            "",
            f"func (this *UI{ui.class_name}) RetranslateUi({signature}) {{",
            *self._block(self.translate_body(ui)),
            "}",
        ]
        return "\n".join(out) + "\n"

    def write(self, ui: CompiledUi, package_name: str, path: str) -> str:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        code = self.render(ui, package_name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(code)
        logger.debug("Wrote %s (%d bytes)", path, len(code))
        return path


__all__ = ["GoWriter", "output_file_name", "HEADER"]
