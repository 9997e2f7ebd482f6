"""
Exception hierarchy for nested-division.

Every failure is fatal to a run: a partially indexed nested set would
corrupt range-containment queries downstream, so nothing here is meant
to be caught and recovered from inside the pipeline.
"""

from __future__ import annotations


class DivisionError(Exception):
    """Base exception for all nested-division errors."""

    pass


class ConfigError(DivisionError, ValueError):
    """A setting (sink backend, table name) is invalid."""

    pass


class DatasetLoadError(DivisionError):
    """A dataset file is missing or does not hold a list of records."""

    pass


class MalformedInputError(DivisionError):
    """The dataset is internally inconsistent."""

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.code = code


class MalformedCodeError(MalformedInputError):
    """A code is shorter than its level requires or is not numeric."""

    pass


class OrphanRecordError(MalformedInputError):
    """A record's resolved parent was not built at the level above."""

    pass


class DuplicateCodeError(MalformedInputError):
    """The same code appears twice at one level."""

    pass


class SinkError(DivisionError):
    """The emission destination rejected a write."""

    pass


class IndexInvariantError(DivisionError):
    """Nested-set ranges are inconsistent or the counter overflowed."""

    pass
