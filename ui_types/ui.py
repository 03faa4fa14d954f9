#!/usr/bin/env python3
"""
UI document and code generation types for goqtuic.
"""

from typing import NewType
from enum import Enum

# ---------- Type aliases for document names ----------
ClassName = NewType('ClassName', str)
ObjectName = NewType('ObjectName', str)

# ---------- Type aliases for generated code ----------
VarName = NewType('VarName', str)
SubPackage = NewType('SubPackage', str)

# ---------- Enums ----------
class ItemKind(Enum):
    """Kind of view wrapped by a layout item."""
    LAYOUT = "Layout"
    SPACER = "Item"
    WIDGET = "Widget"
