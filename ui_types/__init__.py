#!/usr/bin/env python3
"""
Types module for goqtuic.
Centralized type definitions organized by domain.
"""

from .ui import (
    ClassName, ObjectName, VarName, SubPackage,
    ItemKind
)

__all__ = [
    'ClassName', 'ObjectName', 'VarName', 'SubPackage',
    'ItemKind',
]
