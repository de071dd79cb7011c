"""RGBA8 image decoding and encoding backed by Pillow."""

from __future__ import annotations

from pathlib import Path

from PIL import Image

from core.constants import WRITABLE_IMAGE_FORMATS
from core.errors import ImageDecodeError, ImageEncodeError
from core.types import EntryRef, ImageData


def decode_rgba(file_path: Path, ref: EntryRef) -> ImageData:
    """Decode an image file into an RGBA8 buffer.

    The format is detected from file content, not from the extension.

    Args:
        file_path: Image file to read.
        ref: Entry the file belongs to, for error context.

    Returns:
        Decoded image data.

    Raises:
        ImageDecodeError: If the file is missing, unsupported, or corrupt.
    """
    try:
        with Image.open(file_path) as source:
            rgba = source.convert("RGBA")
    except (OSError, ValueError, Image.DecompressionBombError) as error:
        raise ImageDecodeError(
            f"Failed to decode image for {ref.describe()}: {error}.",
            kind=ref.kind,
            entry_id=ref.entry_id,
            path=ref.path,
        ) from error
    return ImageData(width=rgba.width, height=rgba.height, pixels=rgba.tobytes())


def encode_rgba(image: ImageData, file_path: Path, extension: str, ref: EntryRef) -> None:
    """Encode an RGBA8 buffer to an image file.

    Args:
        image: Pixel data to write.
        file_path: Destination file.
        extension: Output extension chosen by the naming policy.
        ref: Entry being written, for error context.

    Raises:
        ImageEncodeError: If the buffer is malformed or writing fails.
    """
    image_format = WRITABLE_IMAGE_FORMATS.get(extension)
    if image_format is None:
        raise _encode_error(ref, f"unsupported output extension '{extension}'")
    if len(image.pixels) != image.expected_length():
        raise _encode_error(
            ref,
            f"expected {image.expected_length()} RGBA bytes for "
            f"{image.width}x{image.height}, got {len(image.pixels)}",
        )
    try:
        encoded = Image.frombytes("RGBA", (image.width, image.height), bytes(image.pixels))
        encoded.save(file_path, format=image_format)
    except (OSError, ValueError) as error:
        raise _encode_error(ref, str(error)) from error


def _encode_error(ref: EntryRef, reason: str) -> ImageEncodeError:
    return ImageEncodeError(
        f"Failed to encode image for {ref.describe()}: {reason}.",
        kind=ref.kind,
        entry_id=ref.entry_id,
        path=ref.path,
    )
