"""
Error types raised by the ITIS query layer.

Everything derives from ``ItisError`` so the dispatcher can render any failure
as an error payload.  ``to_dict()`` gives the structured form used there.
"""

from __future__ import annotations

from typing import Any


class ItisError(Exception):
    """Base class for all errors raised by itis_explorer."""

    def to_dict(self) -> dict[str, Any]:
        return {"type": type(self).__name__, "message": str(self)}


# =============================================================================
# Remote index
# =============================================================================


class TransportError(ItisError):
    """The network call could not complete (DNS, connection, timeout)."""


class RemoteStatusError(ItisError):
    """The index answered with a non-success HTTP status."""

    def __init__(self, status_code: int, url: str = "") -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"ITIS request failed with HTTP status {status_code}")

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "status_code": self.status_code}


class DecodeError(ItisError):
    """The response body is not the expected JSON envelope."""


# =============================================================================
# Lookups and exploration
# =============================================================================


class NotFoundError(ItisError):
    """No record matched where at least one was expected."""

    def __init__(self, query: str, what: str = "scientific name") -> None:
        self.query = query
        super().__init__(f"No ITIS record found for {what}: {query}")

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "query": self.query}


class MalformedHierarchyError(ItisError, ValueError):
    """A hierarchy string does not follow the ``Label:Name$...`` grammar."""


class IncompleteDataError(ItisError):
    """The resolved record lacks the data needed to build an exploration query."""

    def __init__(self, level: str, target: dict[str, Any], reason: str = "") -> None:
        self.level = level
        self.target = target
        msg = f"Cannot explore level '{level}' for {target.get('scientific_name', 'record')}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "level": self.level, "target": self.target}


# =============================================================================
# Dispatch
# =============================================================================


class UnknownOperationError(ItisError):
    """The requested operation is not in the catalog."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Unknown operation: {operation}")


class InvalidArgumentsError(ItisError, ValueError):
    """Operation arguments are missing or have the wrong type."""

    def __init__(self, operation: str, errors: list[dict[str, Any]]) -> None:
        self.operation = operation
        self.errors = errors
        fields = ", ".join(".".join(str(p) for p in e.get("loc", ())) or "?" for e in errors)
        super().__init__(f"Invalid arguments for {operation}: {fields}")

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "errors": self.errors}


class UnknownPromptError(ItisError):
    """The requested prompt is not in the catalog."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown prompt: {name}")
