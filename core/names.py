"""
Identifier rules shared by the tree builder and the Go emitter.

Document names are arbitrary (``push_button``, ``_hidden``); generated Go
fields must be exported identifiers, so every widget, layout, spacer, action
and button-group name goes through :func:`resolve_variable_name`.
"""
from __future__ import annotations

import os
from typing import Optional

from ui_types import VarName
from utils.text import upper_first

# Root widget names that Designer gives to fresh forms; the generated type
# name is qualified with the file stem for these.
GENERIC_ROOT_NAMES = frozenset({"Form", "Dialog", "MainWindow"})


def to_camel_case(s: str) -> str:
    """Upper-case the first letter and every letter following a single underscore.

    The separating underscore is dropped, except that:
      * leading underscores are kept:            "_a"   -> "_A"
      * a trailing underscore is kept:           "ab_"  -> "Ab_"
      * a run of underscores keeps all but one:  "a__b" -> "A_B"
    """
    if not s:
        return ""

    stripped = s.lstrip("_")
    leading = s[:len(s) - len(stripped)]
    if not stripped:
        return leading

    out = [leading, stripped[0].upper()]
    rest = stripped[1:]
    if not rest:
        return "".join(out)

    pending = rest[0]
    for ch in rest[1:]:
        prev, pending = pending, ch
        if prev == "_" and pending != "_":
            pending = pending.upper()
        else:
            out.append(prev)
    out.append(pending)
    return "".join(out)


def resolve_variable_name(raw_name: str) -> VarName:
    return VarName(to_camel_case(raw_name))


def setter_name(prop_name: str) -> str:
    return "Set" + upper_first(prop_name)


def generated_class_name(root_name: str, source_path: Optional[str] = None) -> str:
    """Name of the generated type (without the ``UI`` prefix)."""
    if root_name in GENERIC_ROOT_NAMES and source_path:
        stem = os.path.splitext(os.path.basename(source_path))[0]
        return (to_camel_case(stem) + root_name).replace("_", "")
    return to_camel_case(root_name)


__all__ = [
    "GENERIC_ROOT_NAMES",
    "to_camel_case",
    "resolve_variable_name",
    "setter_name",
    "generated_class_name",
]
