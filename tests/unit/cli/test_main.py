"""Unit tests for CLI command handling."""

from __future__ import annotations

import ppd
from cli.main import main
from core.types import Doll, Fragment, Manifest
from tests.manifest_builders import solid_image


def _write_sample(path) -> None:
    manifest = Manifest(
        dolls=[Doll(id=1, image=solid_image(2, 3, (0, 0, 0, 255)))],
        fragments=[Fragment(id=4, path="hat.webp", image=solid_image(1, 1, (9, 9, 9, 9)))],
    )
    ppd.save(manifest, path)


def test_cli_inspect_lists_entries(tmp_path, capsys) -> None:
    """Inspect should print one row per entry."""
    container_path = tmp_path / "sample.ppd"
    _write_sample(container_path)

    exit_code = main(["--staging-root", str(tmp_path), "inspect", str(container_path)])
    output_lines = capsys.readouterr().out.splitlines()

    assert exit_code == 0
    assert "doll\t1\tdoll_1.png\t2x3" in output_lines
    assert "fragment\t4\tfragment_4.png\t1x1" in output_lines


def test_cli_repack_writes_loadable_container(tmp_path, capsys) -> None:
    """Repack should produce a container with the same layers."""
    source_path = tmp_path / "source.ppd"
    destination_path = tmp_path / "repacked.ppd"
    _write_sample(source_path)

    exit_code = main(["--workers", "2", "repack", str(source_path), str(destination_path)])

    assert exit_code == 0 and str(destination_path) in capsys.readouterr().out
    assert ppd.load(destination_path).get_fragment(4).image.width == 1


def test_cli_reports_domain_errors(tmp_path, capsys) -> None:
    """Domain failures should print an error line and exit one."""
    exit_code = main(["inspect", str(tmp_path / "missing.ppd")])

    assert exit_code == 1 and "error=" in capsys.readouterr().out


def test_cli_rejects_invalid_worker_count(tmp_path, capsys) -> None:
    """Invalid config flags should be reported as errors."""
    exit_code = main(["--workers", "zero", "inspect", str(tmp_path / "x.ppd")])

    assert exit_code == 1 and "max_workers" in capsys.readouterr().out
