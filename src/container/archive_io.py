"""Tar archive extraction and creation for ``.ppd`` containers."""

from __future__ import annotations

import tarfile
from pathlib import Path
from typing import BinaryIO

from core.errors import ArchiveError, ArchiveWriteError


def extract_archive(stream: BinaryIO, destination: Path) -> None:
    """Extract every archive entry into a directory.

    Entries keep their stored relative paths. The ``data`` filter rejects
    absolute paths, links, and names that would escape ``destination``.

    Args:
        stream: Readable byte stream positioned at the archive start.
        destination: Existing directory to extract into.

    Raises:
        ArchiveError: If the archive is malformed or extraction fails.
    """
    try:
        with tarfile.open(fileobj=stream, mode="r|*") as archive:
            archive.extractall(destination, filter="data")
    except (tarfile.TarError, OSError, EOFError) as error:
        raise ArchiveError(
            f"Failed to extract container: {error}. Check that the file is a valid .ppd archive."
        ) from error


def pack_directory(source_dir: Path, sink: BinaryIO) -> list[str]:
    """Archive every file under a directory into a writable sink.

    Files are added in sorted order under their relative POSIX names.

    Args:
        source_dir: Directory whose contents are archived.
        sink: Writable binary stream; left open for the caller.

    Returns:
        Archive member names in write order.

    Raises:
        ArchiveWriteError: If writing or finalizing the archive fails.
    """
    member_names: list[str] = []
    try:
        with tarfile.open(fileobj=sink, mode="w|") as archive:
            for file_path in sorted(path for path in source_dir.rglob("*") if path.is_file()):
                member_name = file_path.relative_to(source_dir).as_posix()
                archive.add(file_path, arcname=member_name, recursive=False)
                member_names.append(member_name)
        sink.flush()
    except (tarfile.TarError, OSError, ValueError) as error:
        raise ArchiveWriteError(
            f"Failed to write container archive: {error}. Check the destination and retry."
        ) from error
    return member_names
