"""
Per-document name, import and helper-temporary bookkeeping.

One :class:`GoResolver` belongs to exactly one compiler run. Its import set,
helper temporaries and tree-item pool must never be reused for a second
document.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Set, Tuple

from core.errors import LogicError, UnknownEnumNamespace
from core.names import resolve_variable_name
from gen.go.streams import CodeStreams
from meta import DEFAULT_META, ToolkitMetaModel
from types_profiles.registry import EnumNamespaceRegistry
from ui_types import SubPackage, VarName
from utils.text import go_quote

logger = logging.getLogger(__name__)

ACQUIRE = "acquire"
RELEASE = "release"

# (declared type, subpackage) of every reusable helper temporary.
HELPER_TEMPS: Dict[str, Tuple[str, str]] = {
    "font": ("*gui.QFont", "gui"),
    "palette": ("*gui.QPalette", "gui"),
    "brush": ("*gui.QBrush", "gui"),
    "sizePolicy": ("*widgets.QSizePolicy", "widgets"),
    "listItem": ("*widgets.QListWidgetItem", "widgets"),
    "tableItem": ("*widgets.QTableWidgetItem", "widgets"),
    "icon": ("*gui.QIcon", "gui"),
}


class TreeItemPool:
    """Named ``treeItemN`` slots shared by sibling subtrees.

    ``acquire`` hands out the lowest-numbered free slot, declaring a new one
    only when every existing slot is busy. ``release`` frees a busy slot.
    """

    def __init__(self, on_allocate) -> None:
        self._slots: Dict[str, bool] = {}
        self._on_allocate = on_allocate
        self.log: List[Tuple[str, str]] = []

    def acquire(self) -> str:
        name: Optional[str] = None
        for slot, busy in self._slots.items():
            if not busy:
                name = slot
                break
        if name is None:
            name = f"treeItem{len(self._slots) + 1}"
            self._on_allocate(name)
        self._slots[name] = True
        self.log.append((ACQUIRE, name))
        return name

    def release(self, name: str) -> None:
        if name not in self._slots:
            raise LogicError(f"undefined tree item var {name}")
        if not self._slots[name]:
            raise LogicError(f"unused tree item var {name}")
        self._slots[name] = False
        self.log.append((RELEASE, name))

    def busy(self) -> List[str]:
        return [name for name, busy in self._slots.items() if busy]


class GoResolver:
    def __init__(self, streams: CodeStreams, root_var: str,
                 meta: Optional[ToolkitMetaModel] = None,
                 registry: Optional[EnumNamespaceRegistry] = None) -> None:
        self.streams = streams
        self.root_var = root_var
        self.meta = meta or DEFAULT_META
        self.registry = registry or EnumNamespaceRegistry(meta=self.meta)
        self._imports: Set[SubPackage] = set(SubPackage(s) for s in self.meta.always_imported)
        self._temps: Set[str] = set()
        self._sorting_enabled = False
        self._button_groups: Set[VarName] = set()
        self.tree_items = TreeItemPool(self._declare_tree_item)

    # ---------- names and imports ----------
    def var(self, raw_name: str) -> VarName:
        return resolve_variable_name(raw_name)

    def field(self, raw_name: str) -> str:
        return f"this.{self.var(raw_name)}"

    def request_import(self, subpackage: str) -> None:
        self._imports.add(SubPackage(subpackage))

    def imports(self) -> List[SubPackage]:
        return sorted(self._imports)

    def resolve_class_variable(self, namespace: str) -> SubPackage:
        sub = self.registry.subpackage_for(namespace)
        if sub is None:
            raise UnknownEnumNamespace(namespace)
        return SubPackage(sub)

    def resolve_enum(self, token: str) -> Optional[str]:
        """``NS::Member`` -> ``sub.NS__Member``; ``None`` (logged) for an unknown namespace."""
        token = token.strip()
        namespace = token.split("::", 1)[0]
        try:
            sub = self.resolve_class_variable(namespace)
        except UnknownEnumNamespace as e:
            logger.error("%s", e)
            return None
        self.request_import(sub)
        return f"{sub}.{token.replace(':', '_')}"

    def resolve_set(self, tokens: List[str]) -> Optional[str]:
        resolved = [r for r in (self.resolve_enum(t) for t in tokens) if r is not None]
        if not resolved:
            return None
        return " | ".join(resolved)

    # ---------- helper temporaries ----------
    def ensure_temp(self, name: str) -> str:
        if name not in self._temps:
            go_type, sub = HELPER_TEMPS[name]
            self.request_import(sub)
            self.streams.emit(f"var {name} {go_type}")
            self._temps.add(name)
        return name

    def ensure_font_temp(self) -> str:
        return self.ensure_temp("font")

    def ensure_palette_temp(self) -> str:
        return self.ensure_temp("palette")

    def ensure_brush_temp(self) -> str:
        return self.ensure_temp("brush")

    def ensure_size_policy_temp(self) -> str:
        return self.ensure_temp("sizePolicy")

    def ensure_list_item_temp(self) -> str:
        return self.ensure_temp("listItem")

    def ensure_table_item_temp(self) -> str:
        return self.ensure_temp("tableItem")

    def ensure_icon_temp(self) -> str:
        return self.ensure_temp("icon")

    def ensure_sorting_enabled(self) -> str:
        if not self._sorting_enabled:
            self.streams.emit_translate("var sortingEnabled bool")
            self._sorting_enabled = True
        return "sortingEnabled"

    def _declare_tree_item(self, name: str) -> None:
        self.request_import("widgets")
        self.streams.emit(f"var {name} *widgets.QTreeWidgetItem")

    # ---------- button groups ----------
    def ensure_button_group(self, raw_name: str) -> VarName:
        var_name = self.var(raw_name)
        if var_name in self._button_groups:
            return var_name
        self.request_import("widgets")
        self.streams.declare(f"{var_name} *widgets.QButtonGroup")
        self.streams.emit(f"this.{var_name} = widgets.NewQButtonGroup({self.root_var})")
        self.streams.emit(f"this.{var_name}.SetObjectName({go_quote(raw_name)})")
        self._button_groups.add(var_name)
        return var_name


__all__ = ["ACQUIRE", "RELEASE", "HELPER_TEMPS", "TreeItemPool", "GoResolver"]
