"""Paperdoll container CLI entry points.
This module exposes inspect and repack commands for ``.ppd`` files.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from typing import Any, Sequence

from core.config import PackagingConfig
from core.errors import PaperdollError
from core.factory import PaperdollFactory
from core.types import EntryRef
from ppd import load, save


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="ppd", description="Paperdoll container CLI")
    parser.add_argument("--staging-root", help="Parent directory for staging directories")
    parser.add_argument("--workers", help="Worker count for image encoding and decoding")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_inspect_command(subparsers)
    _add_repack_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the paperdoll container CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args)
        if args.command == "inspect":
            return _run_inspect_command(config, args)
        if args.command == "repack":
            return _run_repack_command(config, args)
    except PaperdollError as error:
        print(f"error={error}")
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(args: argparse.Namespace) -> PackagingConfig:
    return PackagingConfig.from_mapping(
        {"staging_root": args.staging_root, "max_workers": args.workers}
    )


def _add_inspect_command(subparsers: Any) -> None:
    parser = subparsers.add_parser("inspect", help="List the layers stored in a container")
    parser.add_argument("container", help="Path to a .ppd file")


def _add_repack_command(subparsers: Any) -> None:
    parser = subparsers.add_parser(
        "repack",
        help="Load a container and save it again with normalized file names",
    )
    parser.add_argument("source", help="Input .ppd file")
    parser.add_argument("destination", help="Output .ppd file")


def _run_inspect_command(config: PackagingConfig, args: argparse.Namespace) -> int:
    """Handle inspect command.

    Args:
        config: Packaging config.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    factory = load(args.container, config)
    for line in _render_entries(factory):
        print(line)
    return 0


def _run_repack_command(config: PackagingConfig, args: argparse.Namespace) -> int:
    """Handle repack command.

    Args:
        config: Packaging config.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    factory = load(args.source, config)
    save(factory.to_manifest(), args.destination, config)
    print(args.destination)
    return 0


def _render_entries(factory: PaperdollFactory) -> list[str]:
    rows = []
    for entry in [*factory.dolls, *factory.fragments]:
        ref = EntryRef.of(entry)
        rows.append(
            f"{ref.kind}\t{ref.entry_id}\t{ref.path or '-'}\t"
            f"{entry.image.width}x{entry.image.height}"
        )
    return rows
