"""Pack pipeline: manifest with inline pixels to container archive.

Each entry holding pixel data is encoded to ``{kind}_{id}.{ext}`` inside a
staging area, the entry path is rewritten to that name, the manifest is
written next to the images, and the staging contents are archived.
"""

from __future__ import annotations

from contextlib import nullcontext
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import BinaryIO, ContextManager, Union

from container.archive_io import pack_directory
from container.image_codec import encode_rgba
from container.naming import entry_filename
from container.ordered_pool import run_in_order
from container.staging import StagingArea, staging_area
from core.config import PackagingConfig
from core.constants import FILE_NAME_MANIFEST
from core.errors import DestinationError, ManifestSerializeError
from core.logging_config import get_logger
from core.manifest_codec import manifest_to_yaml
from core.types import Entry, EntryRef, Manifest

_LOGGER = get_logger(__name__)

Destination = Union[str, Path, BinaryIO]


@dataclass(frozen=True)
class _PlannedImage:
    """One entry image scheduled for encoding."""

    entry: Entry
    filename: str
    extension: str


def write_container(manifest: Manifest, destination: Destination, config: PackagingConfig) -> None:
    """Pack a manifest and its inline images into a container.

    Entry ``path`` fields of ``manifest`` are rewritten in place to the
    names used inside the container. Entries without pixel data are
    skipped and keep their current path.

    Args:
        manifest: Manifest to pack; mutated as described above.
        destination: Output file path, or a writable binary stream left open.
        config: Packaging configuration.

    Raises:
        ImageEncodeError: If an entry image cannot be encoded.
        ManifestSerializeError: If the manifest cannot be written.
        DestinationError: If the destination cannot be opened.
        ArchiveWriteError: If the archive cannot be written.
        StagingError: If the staging directory cannot be created or removed.
    """
    with staging_area(config) as area:
        planned = _plan_images(manifest)
        _encode_images(planned, area, config.max_workers)
        for item in planned:
            item.entry.path = item.filename
        _write_manifest(manifest, area)
        with _open_destination(destination) as sink:
            member_names = pack_directory(area.root, sink)
    _LOGGER.info(
        "container_packed",
        destination=_describe_destination(destination),
        image_count=len(planned),
        member_count=len(member_names),
    )


def _plan_images(manifest: Manifest) -> list[_PlannedImage]:
    planned: list[_PlannedImage] = []
    for entry in manifest.entries():
        if entry.image.is_empty():
            continue
        filename, extension = entry_filename(entry.kind, entry.id, entry.path)
        planned.append(_PlannedImage(entry=entry, filename=filename, extension=extension))
    return planned


def _encode_images(planned: list[_PlannedImage], area: StagingArea, max_workers: int) -> None:
    tasks = [
        partial(
            encode_rgba,
            item.entry.image,
            area.join(item.filename),
            item.extension,
            EntryRef.of(item.entry),
        )
        for item in planned
    ]
    run_in_order(tasks, max_workers)


def _write_manifest(manifest: Manifest, area: StagingArea) -> None:
    manifest_text = manifest_to_yaml(manifest)
    try:
        area.join(FILE_NAME_MANIFEST).write_text(manifest_text, encoding="utf-8")
    except OSError as error:
        raise ManifestSerializeError(
            f"Failed to write {FILE_NAME_MANIFEST} to staging: {error}."
        ) from error


def _open_destination(destination: Destination) -> ContextManager[BinaryIO]:
    if not isinstance(destination, (str, Path)):
        return nullcontext(destination)
    output_path = Path(destination)
    try:
        return output_path.open("wb")
    except OSError as error:
        raise DestinationError(
            f"Failed to open destination {output_path}: {error}. "
            "Check that the parent directory exists and is writable."
        ) from error


def _describe_destination(destination: Destination) -> str:
    if isinstance(destination, (str, Path)):
        return str(destination)
    return type(destination).__name__
