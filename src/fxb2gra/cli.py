#!/usr/bin/env python3
"""
fxb2gra - convert VST2 presets to graph files and back.

Presets (.fxp programs, .fxb banks) are wrapped into .gra graph files that
load the matching plugin; graph files are unwrapped back into presets.

Usage:
    fxb2gra preset.fxp bank.fxb          # -> preset.gra, bank.gra
    fxb2gra song.gra                     # -> song.fxp or song.fxb
    fxb2gra -r presets/                  # every .fxp/.fxb below presets/
    fxb2gra -f graphs/                   # every .gra in graphs/
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from fxb2gra.directory import PLUGINS_ENV, PluginDirectory
from fxb2gra.encoder import ContainerEncoder
from fxb2gra.service import ConversionService, SourceKind
from fxb2gra.settings import SETTINGS_FILENAME, FolderSettings
from fxb2gra.templates import TemplateSet


class BatchConverter:
    """Converts files and folders, reporting progress as it goes.

    A failure on one file is reported and counted; the batch carries on.

    Args:
        service: Conversion service shared by every file.
        to_preset: Forces the direction for folders (True: .gra -> preset,
            False: preset -> .gra). None uses each folder's settings.
        recursive: Process subfolders of every folder.
    """

    def __init__(
        self,
        service: ConversionService,
        to_preset: bool | None = None,
        recursive: bool = False,
    ):
        self.service = service
        self.to_preset = to_preset
        self.recursive = recursive
        self.converted = 0
        self.failures = 0

    def process_path(self, path: Path) -> None:
        if path.is_dir():
            self.process_folder(path)
        elif path.name.lower() == SETTINGS_FILENAME:
            self.process_folder(path.parent)
        elif not path.exists():
            print(f"Error: {path}: file not found", file=sys.stderr)
            self.failures += 1
        elif SourceKind.from_path(path) is None:
            print(f"Skipping {path.name}: not a .fxp, .fxb or .gra file")
        else:
            self.process_file(path)

    def process_folder(self, folder: Path, inherited_recursive: bool = False) -> None:
        try:
            settings = FolderSettings.load(folder, inherited_recursive)
        except (ValueError, OSError) as e:
            print(f"Error: {e}", file=sys.stderr)
            self.failures += 1
            return

        to_preset = settings.to_preset if self.to_preset is None else self.to_preset
        recursive = settings.recursive or self.recursive

        wanted = {SourceKind.GRAPH} if to_preset else {SourceKind.PROGRAM, SourceKind.BANK}
        entries = sorted(folder.iterdir())

        for entry in entries:
            if entry.is_file() and SourceKind.from_path(entry) in wanted:
                self.process_file(entry)

        if recursive:
            for entry in entries:
                if entry.is_dir():
                    self.process_folder(entry, inherited_recursive=True)

    def process_file(self, path: Path) -> None:
        try:
            self.convert_file(path)
        except (ValueError, OSError) as e:
            print(f"Error: {path}: {e}", file=sys.stderr)
            self.failures += 1
        else:
            self.converted += 1

    def convert_file(self, path: Path) -> Path:
        """Convert one file and write the result next to it.

        Returns:
            Path of the written file.
        """
        kind = SourceKind.from_path(path)
        if kind is None:
            raise ValueError(f"Unsupported file type: '{path.suffix}'")

        if kind is SourceKind.GRAPH:
            print(f"Opening graph {path.name}")
        else:
            print(f"Opening preset file {path.name}")

        result = self.service.convert(path.read_bytes(), kind, base_name=path.stem)

        if result.offset is not None:
            print(f"Found preset at offset {result.offset}")
            print(f"Size: {len(result.data)} bytes")

        out_path = path.with_suffix(result.extension)
        if kind is SourceKind.GRAPH:
            print(f"Writing preset file {out_path.name}")
        else:
            print(f"Writing graph file {out_path.name}")
        out_path.write_bytes(result.data)
        return out_path


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fxb2gra",
        description="Convert VST2 presets (.fxp/.fxb) to graph files (.gra) and back",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Files are converted by extension. Folders are converted according to their
{SETTINGS_FILENAME} file:
  {{"mode": "g", "recursive": false}}   presets -> graphs (default)
  {{"mode": "f", "recursive": true}}    graphs -> presets, with subfolders

Examples:
  fxb2gra preset.fxp
  fxb2gra song.gra
  fxb2gra -r presets/
  fxb2gra -f graphs/
  fxb2gra --plugins my-plugins.json presets/
""",
    )
    parser.add_argument("paths", nargs="*", metavar="PATH", help="Files or folders to convert")
    parser.add_argument(
        "-r",
        "--recursive",
        action="store_true",
        help="Also process subfolders of every folder",
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "-f",
        "--to-preset",
        dest="to_preset",
        action="store_const",
        const=True,
        default=None,
        help="Convert .gra files in folders to presets",
    )
    mode.add_argument(
        "-b",
        "--to-graph",
        dest="to_preset",
        action="store_const",
        const=False,
        help="Convert .fxp/.fxb files in folders to graphs",
    )

    parser.add_argument(
        "--plugins",
        metavar="FILE",
        default=None,
        help=f"Plugin table overriding the built-in one (default: ${PLUGINS_ENV})",
    )
    parser.add_argument(
        "--templates",
        metavar="DIR",
        default=None,
        help="Folder holding the gra-*.dat template segments",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.paths:
        parser.print_help()
        return 1

    plugins_path = args.plugins or os.environ.get(PLUGINS_ENV) or None

    try:
        templates = TemplateSet.from_directory(args.templates)
        directory = PluginDirectory.load(plugins_path)
    except (RuntimeError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if plugins_path is not None and Path(plugins_path).exists():
        if not directory.write_back(plugins_path):
            print(f"Warning: could not rewrite plugin table {plugins_path}", file=sys.stderr)

    service = ConversionService(ContainerEncoder(templates, directory))
    batch = BatchConverter(service, to_preset=args.to_preset, recursive=args.recursive)

    for raw in args.paths:
        batch.process_path(Path(raw))

    if batch.failures:
        print(
            f"\n{batch.converted} converted, {batch.failures} failed",
            file=sys.stderr,
        )
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
