"""Shared typed models.

This module defines the manifest models consumed by the manifest codec,
the document factory, and the pack/unpack pipelines.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Union

from core.constants import DOLL_KIND, FRAGMENT_KIND, RGBA_CHANNELS


@dataclass
class ImageData:
    """Inline RGBA8 pixel buffer, row-major with no padding.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        pixels: Raw RGBA bytes; empty when no image is loaded.
    """

    width: int = 0
    height: int = 0
    pixels: bytes = b""

    def is_empty(self) -> bool:
        """Return True when no pixel data is present."""
        return len(self.pixels) == 0

    def expected_length(self) -> int:
        """Return the byte length implied by width and height."""
        return self.width * self.height * RGBA_CHANNELS


@dataclass
class Doll:
    """Base layer of a paper doll.

    Attributes:
        id: Stable identifier, unique among dolls.
        path: Image file name inside the container; empty when unassigned.
        image: Inline pixel data; never written to the manifest text.
        extra: Remaining manifest fields, kept verbatim.
    """

    id: int
    path: str = ""
    image: ImageData = field(default_factory=ImageData)
    extra: dict[str, Any] = field(default_factory=dict)

    kind = DOLL_KIND


@dataclass
class Fragment:
    """Decoration layer placed onto doll slots.

    Attributes:
        id: Stable identifier, unique among fragments.
        path: Image file name inside the container; empty when unassigned.
        image: Inline pixel data; never written to the manifest text.
        extra: Remaining manifest fields, kept verbatim.
    """

    id: int
    path: str = ""
    image: ImageData = field(default_factory=ImageData)
    extra: dict[str, Any] = field(default_factory=dict)

    kind = FRAGMENT_KIND


Entry = Union[Doll, Fragment]


@dataclass
class Manifest:
    """Serializable snapshot of a paper doll document.

    Attributes:
        dolls: Ordered doll entries.
        fragments: Ordered fragment entries.
        extra: Remaining top-level manifest fields such as meta or slots.
    """

    dolls: list[Doll] = field(default_factory=list)
    fragments: list[Fragment] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    def entries(self) -> Iterator[Entry]:
        """Yield dolls then fragments in declared order."""
        yield from self.dolls
        yield from self.fragments


@dataclass(frozen=True)
class EntryRef:
    """Error and log context identifying one manifest entry.

    Attributes:
        kind: ``doll`` or ``fragment``.
        entry_id: Entry identifier.
        path: Entry path inside the container.
    """

    kind: str
    entry_id: int
    path: str

    @classmethod
    def of(cls, entry: Entry, path: str | None = None) -> "EntryRef":
        """Build a reference for an entry, optionally overriding its path."""
        return cls(kind=entry.kind, entry_id=entry.id, path=entry.path if path is None else path)

    def describe(self) -> str:
        """Return a short human-readable label."""
        return f"{self.kind} {self.entry_id} ('{self.path}')"
