"""Typed failures raised by the catalog.

Front-ends translate these into their own transport: HTTP status codes in
uicatalog.api.app, tool errors in uicatalog.mcp_server.
"""

from __future__ import annotations

from pathlib import Path


class CatalogError(Exception):
    """Base class for every catalog failure."""


class NotFoundError(CatalogError):
    def __init__(self, label: str, record_id: str) -> None:
        self.label = label
        self.record_id = record_id
        super().__init__(f"{label} not found: {record_id}")


class ValidationError(CatalogError):
    def __init__(self, label: str, problems: list[str]) -> None:
        self.label = label
        self.problems = problems
        super().__init__(f"Invalid {label.lower()}: {'; '.join(problems)}")


class UnknownEntityKindError(CatalogError):
    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"Unknown entity type: {kind}")


class StoreIOError(CatalogError):
    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Catalog file {path}: {reason}")
