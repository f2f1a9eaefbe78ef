# SPDX-License-Identifier: MIT
# src/scenario_catalog/errors.py
"""
Error types raised by the catalog engine.

Build-time problems (ValidationError) are collected and returned alongside the
snapshot; query-time problems (InvalidFilterError) fail the individual call.
"""
from __future__ import annotations
from typing import Any, Iterable, Optional, Tuple


class CatalogError(Exception):
    """Base class for everything the catalog engine raises."""


class ValidationError(CatalogError, ValueError):
    """A raw catalog record violates an invariant and cannot be indexed."""

    def __init__(
        self,
        message: str,
        *,
        record_kind: str = "record",
        record_id: Optional[str] = None,
        field: Optional[str] = None,
    ):
        self.message = message
        self.record_kind = record_kind
        self.record_id = record_id
        self.field = field
        super().__init__(str(self))

    def __str__(self) -> str:
        where = f"{self.record_kind} '{self.record_id}'" if self.record_id else self.record_kind
        if self.field:
            where = f"{where} [{self.field}]"
        return f"{where}: {self.message}"


class InvalidFilterError(CatalogError, ValueError):
    """Caller passed a facet value outside the closed set for that facet."""

    def __init__(self, facet: str, value: Any, allowed: Iterable[str] = ()):
        self.facet = facet
        self.value = value
        self.allowed: Tuple[str, ...] = tuple(allowed)
        msg = f"Invalid {facet} filter {value!r}"
        if self.allowed:
            msg += f"; expected one of: {', '.join(self.allowed)}"
        super().__init__(msg)


class CatalogLoadError(CatalogError):
    """Catalog file could be read but its structure is not a catalog."""
