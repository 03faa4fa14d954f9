from __future__ import annotations

from typing import List, Optional

from lxml import etree


def element_children(node: etree._Element) -> List[etree._Element]:
    """Element children only; comments and processing instructions are skipped."""
    return [ch for ch in node if isinstance(ch.tag, str)]


def node_text(node: Optional[etree._Element]) -> str:
    if node is None:
        return ""
    return (node.text or "").strip()


def _to_int(raw: Optional[str], default: int) -> int:
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _to_float(raw: Optional[str], default: float) -> float:
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


def _to_bool(raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    return raw.strip().lower() == "true"


def attr_str(node: etree._Element, name: str, default: str = "") -> str:
    value = node.get(name)
    return default if value is None else value


def attr_int(node: etree._Element, name: str, default: int = 0) -> int:
    return _to_int(node.get(name), default)


def attr_bool(node: etree._Element, name: str, default: bool = False) -> bool:
    return _to_bool(node.get(name), default)


def child_node(node: etree._Element, tag: str) -> Optional[etree._Element]:
    for ch in element_children(node):
        if ch.tag == tag:
            return ch
    return None


def child_nodes(node: etree._Element, tag: str) -> List[etree._Element]:
    return [ch for ch in element_children(node) if ch.tag == tag]


def child_text(node: etree._Element, tag: str, default: str = "") -> str:
    ch = child_node(node, tag)
    if ch is None:
        return default
    return node_text(ch)


def child_int(node: etree._Element, tag: str, default: int = 0) -> int:
    ch = child_node(node, tag)
    return default if ch is None else _to_int(ch.text, default)


def child_float(node: etree._Element, tag: str, default: float = 0.0) -> float:
    ch = child_node(node, tag)
    return default if ch is None else _to_float(ch.text, default)


def child_bool(node: etree._Element, tag: str, default: bool = False) -> bool:
    ch = child_node(node, tag)
    return default if ch is None else _to_bool(ch.text, default)


def text_int(node: etree._Element, default: int = 0) -> int:
    return _to_int(node.text, default)


def text_float(node: etree._Element, default: float = 0.0) -> float:
    return _to_float(node.text, default)


def text_bool(node: etree._Element, default: bool = False) -> bool:
    return _to_bool(node.text, default)


__all__ = [
    "element_children", "node_text",
    "attr_str", "attr_int", "attr_bool",
    "child_node", "child_nodes", "child_text", "child_int", "child_float", "child_bool",
    "text_int", "text_float", "text_bool",
]
