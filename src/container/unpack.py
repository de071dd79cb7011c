"""Unpack pipeline: container byte stream to paper doll document.

The archive is extracted into a staging area, the manifest parsed, and
every entry with a backing file gets its pixels decoded back inline.
The staging area is removed before the document is built.
"""

from __future__ import annotations

from functools import partial
from typing import BinaryIO

from container.archive_io import extract_archive
from container.image_codec import decode_rgba
from container.ordered_pool import run_in_order
from container.staging import StagingArea, staging_area
from core.config import PackagingConfig
from core.constants import FILE_NAME_MANIFEST
from core.errors import ArchiveError, ImageDecodeError, MissingManifestError
from core.factory import PaperdollFactory
from core.logging_config import get_logger
from core.manifest_codec import manifest_from_yaml
from core.types import EntryRef, ImageData, Manifest

_LOGGER = get_logger(__name__)


def read_container(stream: BinaryIO, config: PackagingConfig) -> PaperdollFactory:
    """Read a document from a container byte stream.

    Args:
        stream: Readable binary stream positioned at the container start.
        config: Packaging configuration.

    Returns:
        Document with every backed entry's image loaded.

    Raises:
        ArchiveError: If the archive cannot be extracted.
        MissingManifestError: If the container has no manifest.
        ManifestParseError: If the manifest is invalid.
        ImageDecodeError: If an entry image cannot be decoded.
        FactoryError: If the document cannot be built.
        StagingError: If the staging directory cannot be created or removed.
    """
    with staging_area(config) as area:
        extract_archive(stream, area.root)
        manifest = _read_manifest(area)
        loaded_count = _load_entry_images(manifest, area, config.max_workers)
    _LOGGER.info(
        "container_unpacked",
        doll_count=len(manifest.dolls),
        fragment_count=len(manifest.fragments),
        image_count=loaded_count,
    )
    return PaperdollFactory.from_manifest(manifest)


def _read_manifest(area: StagingArea) -> Manifest:
    manifest_path = area.join(FILE_NAME_MANIFEST)
    if not manifest_path.is_file():
        raise MissingManifestError(
            f"Container has no {FILE_NAME_MANIFEST}. The file is not a valid .ppd container."
        )
    try:
        text = manifest_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        raise ArchiveError(f"Failed to read {FILE_NAME_MANIFEST}: {error}.") from error
    return manifest_from_yaml(text)


def _load_entry_images(manifest: Manifest, area: StagingArea, max_workers: int) -> int:
    """Decode images for entries with a path and store them inline.

    Returns:
        Number of images decoded.
    """
    backed_entries = [entry for entry in manifest.entries() if entry.path]
    tasks = [partial(_decode_entry, area, EntryRef.of(entry)) for entry in backed_entries]
    images = run_in_order(tasks, max_workers)
    for entry, image in zip(backed_entries, images):
        entry.image = image
    return len(images)


def _decode_entry(area: StagingArea, ref: EntryRef) -> ImageData:
    file_path = area.join(ref.path).resolve()
    if not file_path.is_relative_to(area.root):
        raise ImageDecodeError(
            f"Failed to decode image for {ref.describe()}: path points outside the container.",
            kind=ref.kind,
            entry_id=ref.entry_id,
            path=ref.path,
        )
    return decode_rgba(file_path, ref)
