"""Unit tests for the pack pipeline."""

from __future__ import annotations

import io
import tarfile
from dataclasses import replace

import pytest
import yaml

from container.pack import write_container
from core.errors import ArchiveWriteError, DestinationError, ImageEncodeError
from core.types import Doll, Fragment, ImageData, Manifest
from tests.manifest_builders import sample_manifest, solid_image


def _members(payload: bytes) -> dict[str, bytes]:
    with tarfile.open(fileobj=io.BytesIO(payload)) as archive:
        return {
            member.name: archive.extractfile(member).read()  # type: ignore[union-attr]
            for member in archive.getmembers()
        }


def test_write_container_names_files_by_kind_and_id(staging_config) -> None:
    """Every entry with pixels should produce one synthesized file."""
    sink = io.BytesIO()

    write_container(sample_manifest(), sink, staging_config)

    assert sorted(_members(sink.getvalue())) == [
        "doll_1.png",
        "doll_2.png",
        "fragment_1.png",
        "fragment_7.tiff",
        "manifest.yml",
    ]


def test_write_container_rewrites_paths_in_place(staging_config) -> None:
    """Caller manifest paths should reflect the stored file names."""
    manifest = sample_manifest()

    write_container(manifest, io.BytesIO(), staging_config)

    assert [d.path for d in manifest.dolls] == ["doll_1.png", "doll_2.png"]
    assert [f.path for f in manifest.fragments] == ["fragment_1.png", "fragment_7.tiff", ""]


def test_write_container_manifest_matches_rewritten_paths(staging_config) -> None:
    """Stored manifest text should carry the rewritten paths."""
    sink = io.BytesIO()

    write_container(sample_manifest(), sink, staging_config)

    payload = yaml.safe_load(_members(sink.getvalue())["manifest.yml"].decode("utf-8"))
    assert [d["path"] for d in payload["dolls"]] == ["doll_1.png", "doll_2.png"]
    assert payload["fragments"][2] == {"id": 9, "path": ""}


def test_write_container_skips_empty_image_but_keeps_path(staging_config) -> None:
    """Entries without pixels should keep their path and write no file."""
    manifest = Manifest(fragments=[Fragment(id=3, path="stale.png")])
    sink = io.BytesIO()

    write_container(manifest, sink, staging_config)

    assert manifest.fragments[0].path == "stale.png"
    assert list(_members(sink.getvalue())) == ["manifest.yml"]


def test_write_container_creates_file_destination(tmp_path, staging_config) -> None:
    """A path destination should be created as a tar file."""
    output_path = tmp_path / "out.ppd"
    manifest = Manifest(dolls=[Doll(id=1, image=solid_image(2, 2, (255, 0, 0, 255)))])

    write_container(manifest, output_path, staging_config)

    assert sorted(_members(output_path.read_bytes())) == ["doll_1.png", "manifest.yml"]


def test_write_container_raises_for_unopenable_destination(
    tmp_path,
    staging_root,
    staging_config,
) -> None:
    """Missing parent directories should raise destination errors."""
    with pytest.raises(DestinationError):
        write_container(
            sample_manifest(),
            tmp_path / "missing" / "out.ppd",
            staging_config,
        )

    assert list(staging_root.iterdir()) == []


def test_write_container_raises_for_closed_sink(staging_root, staging_config) -> None:
    """Archive failures should raise write errors and still clean up."""
    sink = io.BytesIO()
    sink.close()

    with pytest.raises(ArchiveWriteError):
        write_container(sample_manifest(), sink, staging_config)

    assert list(staging_root.iterdir()) == []


def test_write_container_encode_failure_leaves_paths_untouched(
    staging_root,
    staging_config,
) -> None:
    """A failed encode should not rewrite any caller path."""
    manifest = Manifest(
        dolls=[
            Doll(id=1, path="keep.png", image=solid_image(1, 1, (1, 2, 3, 4))),
            Doll(id=2, path="broken.png", image=ImageData(width=3, height=3, pixels=b"\x00")),
        ]
    )

    with pytest.raises(ImageEncodeError) as caught:
        write_container(manifest, io.BytesIO(), staging_config)

    assert (caught.value.kind, caught.value.entry_id) == ("doll", 2)
    assert [d.path for d in manifest.dolls] == ["keep.png", "broken.png"]
    assert list(staging_root.iterdir()) == []


def test_write_container_parallel_reports_lowest_index_failure(staging_config) -> None:
    """With a worker pool the first failing entry in order should be reported."""
    broken = ImageData(width=2, height=2, pixels=b"\x00")
    manifest = Manifest(
        dolls=[Doll(id=index, image=solid_image(8, 8, (index, 0, 0, 255))) for index in range(6)],
        fragments=[Fragment(id=4, image=broken), Fragment(id=5, image=broken)],
    )

    with pytest.raises(ImageEncodeError) as caught:
        write_container(
            manifest,
            io.BytesIO(),
            replace(staging_config, max_workers=4),
        )

    assert (caught.value.kind, caught.value.entry_id) == ("fragment", 4)
