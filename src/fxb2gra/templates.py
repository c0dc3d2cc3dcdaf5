"""Fixed template segments spliced into every graph container.

A graph container is built from four opaque segments that come from a
reference graph saved by the host:

    gra-header1.dat   everything before the graph name
    gra-header2.dat   between the graph name and the plugin tag
    gra-footer1.dat   between the preset data and the node name
    gra-footer2.dat   everything after the node name

The segments are read once, kept as immutable bytes, and handed to the
encoder. The checksum slot at offset 27 must fall inside the first
segment, so ``gra-header1.dat`` is required to be at least 31 bytes.
"""

from __future__ import annotations

import os
from pathlib import Path

from fxb2gra.checksum import CHECKSUM_START

HEADER1 = "header1"
HEADER2 = "header2"
FOOTER1 = "footer1"
FOOTER2 = "footer2"

SEGMENT_NAMES = (HEADER1, HEADER2, FOOTER1, FOOTER2)

TEMPLATES_ENV = "FXB2GRA_TEMPLATES"
DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "data" / "templates"


class TemplateError(RuntimeError):
    """Raised when the template segments are missing or unusable."""


def segment_filename(name: str) -> str:
    return f"gra-{name}.dat"


class TemplateSet:
    """Read-only table of template segments keyed by name.

    Attributes:
        header1, header2, footer1, footer2: Segment bytes.
    """

    def __init__(self, segments: dict[str, bytes]):
        missing = [name for name in SEGMENT_NAMES if name not in segments]
        if missing:
            raise TemplateError(f"Missing template segment(s): {', '.join(missing)}")

        self._segments = {name: bytes(segments[name]) for name in SEGMENT_NAMES}

        if len(self._segments[HEADER1]) < CHECKSUM_START:
            raise TemplateError(
                f"Template segment '{HEADER1}' too small "
                f"({len(self._segments[HEADER1])} bytes, need at least "
                f"{CHECKSUM_START} to hold the checksum)"
            )

    def __getitem__(self, name: str) -> bytes:
        return self._segments[name]

    @property
    def header1(self) -> bytes:
        return self._segments[HEADER1]

    @property
    def header2(self) -> bytes:
        return self._segments[HEADER2]

    @property
    def footer1(self) -> bytes:
        return self._segments[FOOTER1]

    @property
    def footer2(self) -> bytes:
        return self._segments[FOOTER2]

    @classmethod
    def from_directory(cls, directory: str | Path | None = None) -> TemplateSet:
        """Load the four segments from a directory.

        Args:
            directory: Folder holding the ``gra-*.dat`` files. Defaults to
                ``$FXB2GRA_TEMPLATES`` or the templates bundled with the
                package.

        Raises:
            TemplateError: If the folder or any segment file is missing.
        """
        if directory is None:
            directory = os.environ.get(TEMPLATES_ENV) or DEFAULT_TEMPLATE_DIR
        directory = Path(directory)

        if not directory.is_dir():
            raise TemplateError(f"Template directory not found: {directory}")

        segments = {}
        for name in SEGMENT_NAMES:
            path = directory / segment_filename(name)
            try:
                segments[name] = path.read_bytes()
            except OSError as e:
                raise TemplateError(f"Failed to read template segment: {path}: {e}") from e

        return cls(segments)
