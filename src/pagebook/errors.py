from __future__ import annotations


class PagebookError(Exception):
    """Base class for errors reported to the caller as status text."""


class ValidationError(PagebookError):
    """Input rejected before any state change (empty name, unknown id)."""


class ImportDocumentError(ValidationError):
    """An import document could not be parsed or lacks a notebooks list."""


class StorageReadError(PagebookError):
    pass


class StorageWriteError(PagebookError):
    """The slot could not be written; the durable copy is now stale."""
