"""Paper doll document built from a manifest.

The factory is the in-memory document returned by ``ppd.load``. It checks
identifier uniqueness and pixel buffer shape before accepting a manifest.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Sequence

from core.errors import FactoryError
from core.types import Doll, Entry, Fragment, Manifest


@dataclass
class PaperdollFactory:
    """Validated paper doll document.

    Attributes:
        dolls: Ordered doll layers.
        fragments: Ordered fragment layers.
        extra: Top-level manifest fields carried through unchanged.
    """

    dolls: list[Doll] = field(default_factory=list)
    fragments: list[Fragment] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_manifest(cls, manifest: Manifest) -> "PaperdollFactory":
        """Build a document from a fully populated manifest.

        Args:
            manifest: Manifest with images already loaded.

        Returns:
            Document owning the manifest entries.

        Raises:
            FactoryError: If ids collide or an image buffer is malformed.
        """
        _validate_entries(manifest.dolls, "doll")
        _validate_entries(manifest.fragments, "fragment")
        return cls(
            dolls=list(manifest.dolls),
            fragments=list(manifest.fragments),
            extra=dict(manifest.extra),
        )

    def to_manifest(self) -> Manifest:
        """Return an independent manifest snapshot of this document."""
        return Manifest(
            dolls=copy.deepcopy(self.dolls),
            fragments=copy.deepcopy(self.fragments),
            extra=copy.deepcopy(self.extra),
        )

    def get_doll(self, doll_id: int) -> Doll:
        """Return the doll with the given id."""
        return _find_entry(self.dolls, doll_id, "doll")

    def get_fragment(self, fragment_id: int) -> Fragment:
        """Return the fragment with the given id."""
        return _find_entry(self.fragments, fragment_id, "fragment")


def _validate_entries(entries: Sequence[Entry], kind: str) -> None:
    seen_ids: set[int] = set()
    for entry in entries:
        if entry.id in seen_ids:
            raise FactoryError(
                f"Duplicate {kind} id {entry.id}. Each {kind} id must be unique."
            )
        seen_ids.add(entry.id)
        image = entry.image
        if image.width < 0 or image.height < 0:
            raise FactoryError(f"Invalid image size on {kind} {entry.id}: negative dimension.")
        if not image.is_empty() and len(image.pixels) != image.expected_length():
            raise FactoryError(
                f"Invalid image on {kind} {entry.id}: expected {image.expected_length()} "
                f"RGBA bytes for {image.width}x{image.height}, got {len(image.pixels)}."
            )


def _find_entry(entries: Sequence[Any], entry_id: int, kind: str) -> Any:
    for entry in entries:
        if entry.id == entry_id:
            return entry
    raise FactoryError(f"Unknown {kind} id {entry_id}.")
