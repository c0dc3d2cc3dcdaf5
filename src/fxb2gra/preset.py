"""Field access for VST2 .fxp/.fxb preset blobs.

A preset blob is only read as far as the graph container needs it.
Layout (big-endian, as written by VST2 hosts):
    0..3    char[4]    Chunk magic 'CcnK'
    4..7    int32_BE   Byte size of the rest (ignored)
    8..11   char[4]    Kind tag: 'FxCk', 'FPCh', 'FxBk' or 'FBCh'
    12..15  int32_BE   Format version
    16..19  char[4]    Plugin unique ID
    20..    bytes      Payload (opaque)

Only 'FPCh' (opaque-chunk program) is treated as a program; every other
kind tag, known or not, is treated as a bank.
"""

from __future__ import annotations

import struct
from enum import Enum

CHUNK_MAGIC = b"CcnK"

KIND_PROGRAM_PARAMS = b"FxCk"
KIND_PROGRAM_CHUNK = b"FPCh"
KIND_BANK_PARAMS = b"FxBk"
KIND_BANK_CHUNK = b"FBCh"

_KIND_OFFSET = 8
_VERSION_OFFSET = 12
_PLUGIN_ID_OFFSET = 16
MIN_PRESET_SIZE = 20

# The graph host only loads version 1 blobs.
HOST_FORMAT_VERSION = 1


class PresetKind(Enum):
    PROGRAM = "program"
    BANK = "bank"


class PresetTooShort(ValueError):
    """Raised when a blob is too short to carry the fields read here."""


def _require_header(blob: bytes) -> None:
    if len(blob) < MIN_PRESET_SIZE:
        raise PresetTooShort(
            f"Preset too small ({len(blob)} bytes, need at least {MIN_PRESET_SIZE})"
        )


def kind_tag(blob: bytes) -> bytes:
    """Return the raw 4-byte kind tag."""
    if len(blob) < _KIND_OFFSET + 4:
        raise PresetTooShort(
            f"Preset too small to carry a kind tag ({len(blob)} bytes)"
        )
    return bytes(blob[_KIND_OFFSET : _KIND_OFFSET + 4])


def classify(blob: bytes) -> PresetKind:
    """Classify a blob as a single program or a bank."""
    if kind_tag(blob) == KIND_PROGRAM_CHUNK:
        return PresetKind.PROGRAM
    return PresetKind.BANK


def plugin_id(blob: bytes) -> str:
    """Return the plugin unique ID as a 4-character token.

    Bytes are mapped one-to-one onto characters (latin-1), so IDs that
    are not printable ASCII still produce a 4-character key.
    """
    _require_header(blob)
    return bytes(blob[_PLUGIN_ID_OFFSET : _PLUGIN_ID_OFFSET + 4]).decode("latin-1")


def with_host_version(blob: bytes) -> bytearray:
    """Return a copy of ``blob`` with the version field set to 1.

    The caller's buffer is left untouched.
    """
    _require_header(blob)
    patched = bytearray(blob)
    struct.pack_into(">I", patched, _VERSION_OFFSET, HOST_FORMAT_VERSION)
    return patched
