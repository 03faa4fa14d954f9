#!/usr/bin/env python3
"""
Core module: document model, naming rules and error types.
"""

from .errors import (
    UicError, MalformedDocumentError, LogicError, UnknownEnumNamespace, ConnectionMismatch
)
from .ui_model import (
    Property, Attribute, Widget, Layout, LayoutItem, Spacer, WidgetItem,
    Action, ActionGroup, ActionRef, Connection, LayoutDefault, UiDocument
)
from .names import to_camel_case, resolve_variable_name, setter_name, generated_class_name

__all__ = [
    'UicError', 'MalformedDocumentError', 'LogicError', 'UnknownEnumNamespace', 'ConnectionMismatch',
    'Property', 'Attribute', 'Widget', 'Layout', 'LayoutItem', 'Spacer', 'WidgetItem',
    'Action', 'ActionGroup', 'ActionRef', 'Connection', 'LayoutDefault', 'UiDocument',
    'to_camel_case', 'resolve_variable_name', 'setter_name', 'generated_class_name',
]
