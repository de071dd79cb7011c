"""YAML manifest marshalling.

This module converts between Manifest models and the ``manifest.yml``
text stored at the root of every container. Unknown fields are kept
in ``extra`` mappings so a round trip never drops data.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence, TypeVar, cast

import yaml

from core.errors import ManifestParseError, ManifestSerializeError
from core.types import Doll, Fragment, Manifest

_EntryT = TypeVar("_EntryT", Doll, Fragment)

_COLLECTION_KEYS = ("dolls", "fragments")


def manifest_to_yaml(manifest: Manifest) -> str:
    """Serialize a manifest to YAML text.

    Args:
        manifest: Manifest to serialize.

    Returns:
        YAML document text.

    Raises:
        ManifestSerializeError: If a field cannot be represented.
    """
    payload: dict[str, Any] = dict(manifest.extra)
    payload["dolls"] = [_entry_payload(doll) for doll in manifest.dolls]
    payload["fragments"] = [_entry_payload(fragment) for fragment in manifest.fragments]
    try:
        return cast(
            str,
            yaml.safe_dump(payload, sort_keys=False, default_flow_style=False, allow_unicode=True),
        )
    except yaml.YAMLError as error:
        raise ManifestSerializeError(
            f"Failed to serialize manifest: {error}. "
            "Keep extra fields to plain mappings, lists, strings, and numbers."
        ) from error


def manifest_from_yaml(text: str) -> Manifest:
    """Parse YAML text into a manifest.

    Args:
        text: Manifest document text.

    Returns:
        Parsed manifest with empty image buffers.

    Raises:
        ManifestParseError: If text is malformed or does not match the schema.
    """
    try:
        payload = cast(object, yaml.safe_load(text))
    except yaml.YAMLError as error:
        raise ManifestParseError(
            f"Failed to parse manifest YAML: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        raise ManifestParseError("Manifest is empty. Define 'dolls' and 'fragments'.")
    root_mapping = _expect_mapping(payload, "manifest root")
    dolls = _parse_collection(root_mapping, "dolls", Doll)
    fragments = _parse_collection(root_mapping, "fragments", Fragment)
    extra = {key: value for key, value in root_mapping.items() if key not in _COLLECTION_KEYS}
    return Manifest(dolls=dolls, fragments=fragments, extra=extra)


def _entry_payload(entry: Doll | Fragment) -> dict[str, Any]:
    payload: dict[str, Any] = {"id": entry.id}
    for key, value in entry.extra.items():
        if key not in ("id", "path"):
            payload[key] = value
    payload["path"] = entry.path
    return payload


def _expect_mapping(value: object, context: str) -> Mapping[str, object]:
    if isinstance(value, Mapping):
        normalized_mapping = {}
        for key, payload in value.items():
            if not isinstance(key, str):
                raise ManifestParseError(
                    f"Invalid {context}: expected string keys, got {type(key).__name__}."
                )
            normalized_mapping[key] = payload
        return normalized_mapping
    raise ManifestParseError(
        f"Invalid {context}: expected object mapping, got {type(value).__name__}."
    )


def _expect_sequence(value: object, context: str) -> Sequence[object]:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return value
    raise ManifestParseError(f"Invalid {context}: expected list, got {type(value).__name__}.")


def _parse_collection(
    root_mapping: Mapping[str, object],
    key: str,
    entry_type: Callable[..., _EntryT],
) -> list[_EntryT]:
    raw_entries = root_mapping.get(key)
    if raw_entries is None:
        return []
    rows = _expect_sequence(raw_entries, f"manifest field '{key}'")
    return [_parse_entry(row, f"{key}[{index}]", entry_type) for index, row in enumerate(rows)]


def _parse_entry(value: object, context: str, entry_type: Callable[..., _EntryT]) -> _EntryT:
    entry_mapping = _expect_mapping(value, f"manifest entry {context}")
    raw_id = entry_mapping.get("id")
    if isinstance(raw_id, bool) or not isinstance(raw_id, int) or raw_id < 0:
        raise ManifestParseError(
            f"Invalid manifest entry {context}: field 'id' must be a non-negative integer."
        )
    raw_path = entry_mapping.get("path", "")
    if raw_path is None:
        raw_path = ""
    if not isinstance(raw_path, str):
        raise ManifestParseError(
            f"Invalid manifest entry {context}: field 'path' must be a string."
        )
    extra = {k: v for k, v in entry_mapping.items() if k not in ("id", "path")}
    return entry_type(id=raw_id, path=raw_path, extra=extra)
