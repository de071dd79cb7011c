"""Public SDK surface for paperdoll ``.ppd`` containers.

This module provides the load/read/save/write entry points and
re-exports the manifest models and error types callers need.

Example:
    factory = ppd.load("character.ppd")
    ppd.save(factory.to_manifest(), "copy.ppd")
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from container.pack import write_container
from container.unpack import read_container
from core.config import PackagingConfig
from core.constants import EXTENSION_NAME, FILE_NAME_MANIFEST
from core.errors import (
    ArchiveError,
    ArchiveWriteError,
    ConfigError,
    DestinationError,
    FactoryError,
    ImageDecodeError,
    ImageEncodeError,
    ManifestParseError,
    ManifestSerializeError,
    MissingManifestError,
    PaperdollError,
    StagingError,
)
from core.factory import PaperdollFactory
from core.types import Doll, Fragment, ImageData, Manifest

__all__ = [
    "EXTENSION_NAME",
    "FILE_NAME_MANIFEST",
    "ArchiveError",
    "ArchiveWriteError",
    "ConfigError",
    "DestinationError",
    "Doll",
    "FactoryError",
    "Fragment",
    "ImageData",
    "ImageDecodeError",
    "ImageEncodeError",
    "Manifest",
    "ManifestParseError",
    "ManifestSerializeError",
    "MissingManifestError",
    "PackagingConfig",
    "PaperdollError",
    "PaperdollFactory",
    "StagingError",
    "load",
    "read",
    "save",
    "write",
]


def load(path: str | Path, config: PackagingConfig | None = None) -> PaperdollFactory:
    """Load a paper doll document from a ``.ppd`` file.

    Raises:
        ArchiveError: If the file cannot be opened or extracted.
    """
    container_path = Path(path)
    try:
        stream = container_path.open("rb")
    except OSError as error:
        raise ArchiveError(f"Failed to open container {container_path}: {error}.") from error
    with stream:
        return read(stream, config)


def read(stream: BinaryIO, config: PackagingConfig | None = None) -> PaperdollFactory:
    """Read a paper doll document from a stream holding ``.ppd`` bytes."""
    return read_container(stream, config or PackagingConfig())


def save(manifest: Manifest, path: str | Path, config: PackagingConfig | None = None) -> None:
    """Save a manifest and its inline images as a ``.ppd`` file.

    Entry paths of ``manifest`` are rewritten in place to the file names
    stored in the container; copy the manifest first to keep the originals.
    """
    write_container(manifest, Path(path), config or PackagingConfig())


def write(manifest: Manifest, sink: BinaryIO, config: PackagingConfig | None = None) -> None:
    """Write a manifest and its inline images as ``.ppd`` bytes into a stream."""
    write_container(manifest, sink, config or PackagingConfig())
