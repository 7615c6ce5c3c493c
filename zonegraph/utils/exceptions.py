# -*- coding: utf-8 -*-
"""
Exception hierarchy for the zone graph pipeline.

Every error carries the context needed to attribute it (column, row, entity,
zone pair). Lower layers raise, the orchestrator wraps with its stage, and
only the entry point decides to stop the process.

    ZoneGraphError
    +-- InputFormatError
    |   +-- SourceFileError
    |   +-- RowParseError
    |       +-- MissingColumnError
    |       +-- InvalidFieldError
    +-- GraphStoreError
    +-- IngestionError
    +-- QueryExecutionError
"""
from typing import Any, Optional


class ZoneGraphError(Exception):
    """Base class for all zone graph errors."""

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def get_message(self) -> str:
        return self.message

    def get_details(self) -> Any:
        return self.details


# ============================================================================
# INPUT FORMAT
# ============================================================================

class InputFormatError(ZoneGraphError):
    """Source file or row content could not be turned into zones."""


class SourceFileError(InputFormatError):
    """The CSV source is missing, unreadable or has no header."""

    def __init__(self, path: Any, reason: str) -> None:
        super().__init__(f"Cannot read zone source {path}: {reason}")
        self.path = path
        self.reason = reason


class RowParseError(InputFormatError):
    """A single CSV row could not be parsed into a Zone."""

    def __init__(self, message: str, row_number: Optional[int] = None) -> None:
        if row_number is not None:
            message = f"row {row_number}: {message}"
        super().__init__(message)
        self.row_number = row_number


class MissingColumnError(RowParseError):
    """An expected column is absent from the header."""

    def __init__(self, column: str, row_number: Optional[int] = None) -> None:
        super().__init__(f"missing expected column '{column}'", row_number)
        self.column = column


class InvalidFieldError(RowParseError):
    """A cell could not be converted to the type of its field."""

    def __init__(self, field: str, value: str, row_number: Optional[int] = None,
                 reason: str = "is not a valid integer") -> None:
        super().__init__(f"error parsing {field}: {value!r} {reason}", row_number)
        self.field = field
        self.value = value


# ============================================================================
# STORE / PIPELINE
# ============================================================================

class GraphStoreError(ZoneGraphError):
    """A graph store transaction failed (connectivity, constraint, bad query)."""

    def __init__(self, operation: str, entity: str, detail: str) -> None:
        super().__init__(
            f"{operation} failed for {entity}: {detail}",
            {"operation": operation, "entity": entity, "detail": detail},
        )
        self.operation = operation
        self.entity = entity


class IngestionError(ZoneGraphError):
    """An ingestion stage aborted; the store keeps writes committed so far."""

    def __init__(self, stage: str, subject: str, detail: str) -> None:
        super().__init__(
            f"{stage} failed for {subject}: {detail}",
            {"stage": stage, "subject": subject},
        )
        self.stage = stage
        self.subject = subject


class QueryExecutionError(ZoneGraphError):
    """The traversal itself failed (distinct from an empty result)."""

    def __init__(self, zone: str, detail: str) -> None:
        super().__init__(f"query for zone '{zone}' failed: {detail}", {"zone": zone})
        self.zone = zone
