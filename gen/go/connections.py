from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from core.errors import ConnectionMismatch
from core.names import resolve_variable_name, to_camel_case
from core.ui_model import Connection
from types_profiles.registry import EnumNamespaceRegistry

logger = logging.getLogger(__name__)


def normalize_param_type(raw: str) -> str:
    """``const QString &`` -> ``QString``."""
    t = re.sub(r"\s+", " ", raw.strip())
    if t.startswith("const "):
        t = t[len("const "):]
    return t.rstrip("&").strip()


def parse_signature(signature: str) -> Tuple[str, List[str]]:
    """Split ``name(T1, T2)`` into the name and its parameter types."""
    open_at = signature.find("(")
    close_at = signature.rfind(")")
    if open_at < 0 or close_at < open_at:
        return signature.strip(), []
    name = signature[:open_at].strip()
    args = signature[open_at + 1:close_at].strip()
    if not args:
        return name, []
    return name, [normalize_param_type(a) for a in args.split(",")]


class ConnectionCompiler:
    """Turns document signal/slot connections into Go ``Connect*`` calls."""

    def __init__(self, root_name: str, root_var: str,
                 registry: Optional[EnumNamespaceRegistry] = None, indent: str = "\t") -> None:
        self.root_name = root_name
        self.root_var = root_var
        self.registry = registry or EnumNamespaceRegistry()
        self.indent = indent

    def _sender(self, name: str) -> str:
        var = resolve_variable_name(name)
        return var if var == self.root_var else f"this.{var}"

    def _receiver(self, name: str) -> str:
        var = resolve_variable_name(name)
        return "this" if var == self.root_var else f"this.{var}"

    def compile_connection(self, conn: Connection) -> str:
        signal, signal_params = parse_signature(conn.signal)
        slot, slot_params = parse_signature(conn.slot)

        if len(slot_params) > len(signal_params):
            raise ConnectionMismatch(
                f"{conn.sender}.{conn.signal} and {conn.receiver}.{conn.slot} argument mismatched",
                conn.sender, conn.signal, conn.receiver, conn.slot)
        for i, (slot_type, signal_type) in enumerate(zip(slot_params, signal_params)):
            if slot_type != signal_type:
                raise ConnectionMismatch(
                    f"{conn.sender}.{conn.signal} and {conn.receiver}.{conn.slot} "
                    f"argument {i} type mismatched ({signal_type} vs {slot_type})",
                    conn.sender, conn.signal, conn.receiver, conn.slot)

        sender = self._sender(conn.sender)
        receiver = self._receiver(conn.receiver)
        connect = f"{sender}.Connect{to_camel_case(signal)}"
        handler = f"{receiver}.{to_camel_case(slot)}"
        if len(signal_params) == len(slot_params):
            return f"{connect}({handler})"

        # Adapter closure dropping the trailing signal arguments.
        declared = ", ".join(f"arg{i} {self.registry.go_param_type(t)}" for i, t in enumerate(signal_params))
        forwarded = ", ".join(f"arg{i}" for i in range(len(slot_params)))
        return f"{connect}(func({declared}) {{\n{self.indent}{handler}({forwarded})\n}})"

    def emit_connections(self, connections: List[Connection]) -> List[str]:
        lines: List[str] = []
        for conn in connections:
            try:
                lines.append(self.compile_connection(conn))
            except ConnectionMismatch as e:
                logger.error("%s", e)
        return lines

    def needs_subclass(self, connections: List[Connection]) -> bool:
        return any(conn.receiver == self.root_name for conn in connections)

    def root_slots(self, connections: List[Connection]) -> List[Tuple[str, List[str]]]:
        """Distinct (slot name, Go parameter types) targeted at the root widget, in document order."""
        seen = set()
        slots: List[Tuple[str, List[str]]] = []
        for conn in connections:
            if conn.receiver != self.root_name:
                continue
            name, params = parse_signature(conn.slot)
            if name in seen:
                continue
            seen.add(name)
            slots.append((name, [self.registry.go_param_type(p) for p in params]))
        return slots


__all__ = ["ConnectionCompiler", "parse_signature", "normalize_param_type"]
