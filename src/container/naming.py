"""Output format and file naming policy for packed images."""

from __future__ import annotations

from pathlib import PurePosixPath

from core.constants import DEFAULT_IMAGE_EXTENSION, EXTENSION_FALLBACKS, WRITABLE_IMAGE_FORMATS


def resolve_extension(path: str) -> str:
    """Choose the output extension for an entry's existing path.

    Args:
        path: Current entry path, possibly empty.

    Returns:
        A lower-case extension the encoder can write.
    """
    if not path:
        return DEFAULT_IMAGE_EXTENSION
    candidate = PurePosixPath(path.replace("\\", "/")).suffix.lstrip(".").lower()
    if not candidate:
        return DEFAULT_IMAGE_EXTENSION
    if candidate in EXTENSION_FALLBACKS:
        return EXTENSION_FALLBACKS[candidate]
    if candidate not in WRITABLE_IMAGE_FORMATS:
        return DEFAULT_IMAGE_EXTENSION
    return candidate


def entry_filename(kind: str, entry_id: int, path: str) -> tuple[str, str]:
    """Build the container file name for one entry.

    The original basename is never reused, so two entries that pointed at
    the same file name still get distinct files.

    Args:
        kind: ``doll`` or ``fragment``.
        entry_id: Entry identifier.
        path: Current entry path, possibly empty.

    Returns:
        Pair of file name and extension.
    """
    extension = resolve_extension(path)
    return f"{kind}_{entry_id}.{extension}", extension
