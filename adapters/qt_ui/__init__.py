"""
Adapters for Qt Designer ``.ui`` documents.
"""

from .parser import UiParser, parse_ui_file, parse_ui_string

__all__ = ["UiParser", "parse_ui_file", "parse_ui_string"]
