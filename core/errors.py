from __future__ import annotations


class UicError(Exception):
    """Base class for all translation errors."""


class MalformedDocumentError(UicError):
    """The document violates a structural invariant the translator cannot route around."""

    def __init__(self, message: str, tag: str | None = None, name: str | None = None) -> None:
        super().__init__(message)
        self.tag = tag
        self.name = name


class LogicError(UicError):
    """The emission walk misused its own bookkeeping (e.g. tree-item pool pairing)."""


class UnknownEnumNamespace(UicError):
    def __init__(self, token: str) -> None:
        super().__init__(f"unknown enum {token}")
        self.token = token


class ConnectionMismatch(UicError):
    def __init__(self, message: str, sender: str, signal: str, receiver: str, slot: str) -> None:
        super().__init__(message)
        self.sender = sender
        self.signal = signal
        self.receiver = receiver
        self.slot = slot


__all__ = [
    "UicError",
    "MalformedDocumentError",
    "LogicError",
    "UnknownEnumNamespace",
    "ConnectionMismatch",
]
