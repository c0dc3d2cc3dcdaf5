"""Direction dispatch between preset files and graph containers."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from fxb2gra.decoder import ContainerDecoder
from fxb2gra.encoder import ContainerEncoder
from fxb2gra.preset import PresetKind

PROGRAM_EXTENSION = ".fxp"
BANK_EXTENSION = ".fxb"
GRAPH_EXTENSION = ".gra"


class SourceKind(Enum):
    PROGRAM = "program"
    BANK = "bank"
    GRAPH = "graph"

    @classmethod
    def from_path(cls, path: str | Path) -> SourceKind | None:
        """Guess the input kind from a file extension (case-insensitive)."""
        return _KIND_BY_EXTENSION.get(Path(path).suffix.lower())


_KIND_BY_EXTENSION = {
    PROGRAM_EXTENSION: SourceKind.PROGRAM,
    BANK_EXTENSION: SourceKind.BANK,
    GRAPH_EXTENSION: SourceKind.GRAPH,
}

_EXTENSION_BY_PRESET_KIND = {
    PresetKind.PROGRAM: PROGRAM_EXTENSION,
    PresetKind.BANK: BANK_EXTENSION,
}


class ConversionResult:
    """Output of one conversion.

    Attributes:
        data: Bytes to write.
        extension: Extension for the output file, including the dot.
        offset: Where the preset was found, for graph input; otherwise None.
    """

    def __init__(self, data: bytes, extension: str, offset: int | None = None):
        self.data = data
        self.extension = extension
        self.offset = offset


class ConversionService:
    def __init__(self, encoder: ContainerEncoder, decoder: ContainerDecoder | None = None):
        self.encoder = encoder
        self.decoder = decoder if decoder is not None else ContainerDecoder()

    def convert(self, data: bytes, source_kind: SourceKind, base_name: str = "") -> ConversionResult:
        """Convert one file's contents.

        Args:
            data: Input file contents.
            source_kind: Kind of the input, usually from SourceKind.from_path().
            base_name: Input file name without extension; names the graph
                when encoding.
        """
        if source_kind is SourceKind.GRAPH:
            decoded = self.decoder.decode(data)
            return ConversionResult(
                data=decoded.blob,
                extension=_EXTENSION_BY_PRESET_KIND[decoded.kind],
                offset=decoded.offset,
            )

        if source_kind in (SourceKind.PROGRAM, SourceKind.BANK):
            return ConversionResult(
                data=self.encoder.encode(data, base_name),
                extension=GRAPH_EXTENSION,
            )

        raise ValueError(f"Unsupported source kind: {source_kind!r}")
