"""Recover VST2 preset blobs from .gra graph containers.

The container is not parsed. The decoder scans for the first 'CcnK'
chunk magic and reads the int64_LE size stored in the 8 bytes directly
before it:

    ... 07 00 | size (int64_LE) | 'CcnK' ... (size bytes) | ...

The checksum is not verified, and the version field patched by the
encoder is returned as-is.
"""

from __future__ import annotations

import struct

from fxb2gra import preset
from fxb2gra.preset import PresetKind
from fxb2gra.scanner import SIGNATURE_SIZE, find_first

_SIZE_FIELD = 8

# Matches must begin before the last 5 bytes of the file.
_TAIL_MARGIN = 5


class ContainerError(ValueError):
    """Raised when an embedded preset is found but cannot be extracted."""


class DecodedPreset:
    """Preset recovered from a graph container.

    Attributes:
        blob: The preset bytes.
        kind: PresetKind.PROGRAM for 'FPCh' presets, PresetKind.BANK otherwise.
        offset: Offset of the preset inside the container.
    """

    def __init__(self, blob: bytes, kind: PresetKind, offset: int):
        self.blob = blob
        self.kind = kind
        self.offset = offset


class ContainerDecoder:
    def decode(self, container: bytes) -> DecodedPreset:
        """Extract the first embedded preset.

        Raises:
            SignatureNotFound: If the container holds no preset.
            ContainerError: If the size field is missing or out of range.
            PresetTooShort: If the recovered blob has no kind tag.
        """
        end = find_first(
            container,
            preset.CHUNK_MAGIC,
            stop=len(container) - _TAIL_MARGIN,
        )
        start = end - SIGNATURE_SIZE

        if start < _SIZE_FIELD:
            raise ContainerError(
                f"Preset at offset {start} has no room for a size field"
            )

        (size,) = struct.unpack_from("<q", container, start - _SIZE_FIELD)
        if size < 0 or start + size > len(container):
            raise ContainerError(
                f"Invalid preset size at offset {start - _SIZE_FIELD}: {size} "
                f"(container size: {len(container)})"
            )

        blob = bytes(container[start : start + size])
        return DecodedPreset(blob=blob, kind=preset.classify(blob), offset=start)
