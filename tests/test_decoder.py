"""Tests for fxb2gra.decoder module."""

import struct

import pytest

from conftest import build_preset
from fxb2gra.decoder import ContainerDecoder, ContainerError
from fxb2gra.preset import PresetKind
from fxb2gra.scanner import SignatureNotFound


def _wrap(blob, prefix=b"\x00" * 16, suffix=b"\x00" * 16, size=None):
    """Embed a blob the way graph containers do: marker, size, blob."""
    if size is None:
        size = len(blob)
    return prefix + b"\x07\x00" + struct.pack("<q", size) + blob + suffix


class TestDecode:
    def test_recovers_blob(self):
        blob = build_preset(payload=b"\x11\x22\x33\x44\x55")
        decoded = ContainerDecoder().decode(_wrap(blob))
        assert decoded.blob == blob
        assert decoded.offset == 16 + 2 + 8

    def test_program(self):
        decoded = ContainerDecoder().decode(_wrap(build_preset(kind=b"FPCh")))
        assert decoded.kind is PresetKind.PROGRAM

    @pytest.mark.parametrize("kind", [b"FxCk", b"FxBk", b"FBCh", b"XXXX"])
    def test_bank(self, kind):
        decoded = ContainerDecoder().decode(_wrap(build_preset(kind=kind)))
        assert decoded.kind is PresetKind.BANK

    def test_first_preset_wins(self):
        first = build_preset(plugin_id=b"one1")
        second = build_preset(plugin_id=b"two2")
        container = _wrap(first) + _wrap(second)
        assert ContainerDecoder().decode(container).blob == first

    def test_blob_containing_magic(self):
        blob = build_preset(payload=b"CcnK" * 4)
        assert ContainerDecoder().decode(_wrap(blob)).blob == blob

    def test_blob_at_end_of_file(self):
        blob = build_preset()
        assert ContainerDecoder().decode(_wrap(blob, suffix=b"")).blob == blob

    def test_version_field_returned_as_is(self):
        blob = build_preset(version=b"\x00\x00\x00\x01")
        assert ContainerDecoder().decode(_wrap(blob)).blob[12:16] == b"\x00\x00\x00\x01"

    def test_checksum_not_verified(self):
        container = bytearray(_wrap(build_preset(), prefix=b"\x00" * 40))
        container[27:31] = b"\xde\xad\xbe\xef"
        assert ContainerDecoder().decode(bytes(container)).blob == build_preset()


class TestDecodeErrors:
    def test_no_preset(self):
        with pytest.raises(SignatureNotFound):
            ContainerDecoder().decode(b"\x00" * 200)

    def test_empty_input(self):
        with pytest.raises(SignatureNotFound):
            ContainerDecoder().decode(b"")

    def test_magic_inside_tail_margin(self):
        # A match must begin before the last 5 bytes of the file
        with pytest.raises(SignatureNotFound):
            ContainerDecoder().decode(b"\x00" * 20 + b"CcnK\x00")

    def test_no_room_for_size(self):
        with pytest.raises(ContainerError, match="no room for a size field"):
            ContainerDecoder().decode(b"\x00\x00CcnK" + b"\x00" * 40)

    def test_size_past_end(self):
        container = _wrap(build_preset(), size=10_000)
        with pytest.raises(ContainerError, match="Invalid preset size"):
            ContainerDecoder().decode(container)

    def test_negative_size(self):
        container = _wrap(build_preset(), size=-1)
        with pytest.raises(ContainerError, match="Invalid preset size"):
            ContainerDecoder().decode(container)

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            ContainerDecoder().decode(_wrap(build_preset(), size=-5))
