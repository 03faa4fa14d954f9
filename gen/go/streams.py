from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class CodeStreams:
    """Ordered statement lists filled during one walk and assembled afterwards."""
    declarations: List[str] = field(default_factory=list)
    setup: List[str] = field(default_factory=list)
    translate: List[str] = field(default_factory=list)
    add_actions: List[str] = field(default_factory=list)
    buddies: List[str] = field(default_factory=list)
    current_index: List[str] = field(default_factory=list)

    def declare(self, line: str) -> None:
        self.declarations.append(line)

    def emit(self, line: str) -> None:
        self.setup.append(line)

    def emit_translate(self, line: str) -> None:
        self.translate.append(line)

    def emit_add_action(self, line: str) -> None:
        self.add_actions.append(line)

    def emit_buddy(self, line: str) -> None:
        self.buddies.append(line)

    def emit_current_index(self, line: str) -> None:
        self.current_index.append(line)


__all__ = ["CodeStreams"]
