"""Paperdoll container exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each pipeline step raises a specific error type for debuggability.
"""

from __future__ import annotations


class PaperdollError(Exception):
    """Base exception for all paperdoll container failures."""


class ConfigError(PaperdollError):
    """Raised for invalid packaging configuration."""


class StagingError(PaperdollError):
    """Raised when a staging directory cannot be created or removed."""


class ArchiveError(PaperdollError):
    """Raised for malformed, truncated, or unreadable containers."""


class ArchiveWriteError(PaperdollError):
    """Raised when the container archive cannot be written."""


class MissingManifestError(PaperdollError):
    """Raised when a container has no manifest file."""


class ManifestParseError(PaperdollError):
    """Raised for malformed manifest text or schema mismatch."""


class ManifestSerializeError(PaperdollError):
    """Raised when a manifest cannot be serialized."""


class FactoryError(PaperdollError):
    """Raised when a document cannot be built from a manifest."""


class DestinationError(PaperdollError):
    """Raised when the output sink cannot be opened."""


class EntryImageError(PaperdollError):
    """Base for image failures tied to one manifest entry.

    Attributes:
        kind: Entry collection kind, ``doll`` or ``fragment``.
        entry_id: Entry identifier within its collection.
        path: Entry path inside the container.
    """

    def __init__(self, message: str, *, kind: str, entry_id: int, path: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.entry_id = entry_id
        self.path = path


class ImageDecodeError(EntryImageError):
    """Raised when an entry image file cannot be decoded."""


class ImageEncodeError(EntryImageError):
    """Raised when an entry pixel buffer cannot be encoded."""
