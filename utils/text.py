from __future__ import annotations

import json
from typing import Iterable, List


def go_quote(s: str) -> str:
    """Render *s* as a double-quoted Go string literal."""
    return json.dumps(s, ensure_ascii=False)


def go_bool(v: bool) -> str:
    return "true" if v else "false"


def go_float(v: float) -> str:
    # Same rendering as Go's %f verb: fixed point, six decimals.
    return f"{v:f}"


def upper_first(s: str) -> str:
    if not s:
        return s
    return s[:1].upper() + s[1:]


def indent_lines(lines: Iterable[str], indent: str) -> List[str]:
    """Prefix every physical line; multi-line statements are split first."""
    result: List[str] = []
    for line in lines:
        for part in line.split("\n"):
            result.append(f"{indent}{part}" if part else "")
    return result


def parse_int_list(raw: str) -> List[int]:
    """Split a comma-separated factor list; unparsable entries become 0."""
    if not raw:
        return []
    values: List[int] = []
    for part in raw.split(","):
        try:
            values.append(int(part.strip()))
        except ValueError:
            values.append(0)
    return values


__all__ = ["go_quote", "go_bool", "go_float", "upper_first", "indent_lines", "parse_int_list"]
