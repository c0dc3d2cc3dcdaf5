"""Shared fixtures: minimal template segments, plugin tables and presets."""

import struct

import pytest

from fxb2gra.directory import PluginDirectory
from fxb2gra.encoder import ContainerEncoder
from fxb2gra.service import ConversionService
from fxb2gra.templates import TemplateSet

# 40-byte header: checksum slot at 27..30 starts out as 0xEE filler.
HEADER1 = b"GRPH" + bytes(range(1, 24)) + b"\xee" * 4 + b"H1END" + b"\x00" * 4
HEADER2 = b"\x10\x20HDR2\x00"
FOOTER1 = b"\x30FTR1\x00\x00"
FOOTER2 = b"FTR2" + b"\xff" * 6


def build_preset(
    kind=b"FPCh",
    version=b"\x00\x00\x00\x00",
    plugin_id=b"abcd",
    payload=b"\x00\x00\x00\x00",
):
    """Build a preset blob with the fields the codec reads."""
    body = kind + version + plugin_id + payload
    return b"CcnK" + struct.pack(">i", len(body)) + body


@pytest.fixture
def segments():
    return {
        "header1": HEADER1,
        "header2": HEADER2,
        "footer1": FOOTER1,
        "footer2": FOOTER2,
    }


@pytest.fixture
def templates(segments):
    return TemplateSet(segments)


@pytest.fixture
def template_dir(tmp_path, segments):
    folder = tmp_path / "templates"
    folder.mkdir()
    for name, data in segments.items():
        (folder / f"gra-{name}.dat").write_bytes(data)
    return folder


@pytest.fixture
def directory():
    return PluginDirectory({"abcd": "SynthX"})


@pytest.fixture
def encoder(templates, directory):
    return ContainerEncoder(templates, directory)


@pytest.fixture
def service(encoder):
    return ConversionService(encoder)
