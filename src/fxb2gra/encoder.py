"""Build .gra graph containers around VST2 preset blobs.

Container layout:
    header1                     template segment (holds checksum at 27..30)
    "<name> (<plugin>)" \\0      graph name
    header2                     template segment
    '<PLUGIN file="<dll>"/>' \\0 plugin tag
    07 00                       data node marker
    int64_LE                    preset size
    preset                      blob with version patched to 1
    footer1                     template segment
    "<name> (<plugin>)" \\0      node name
    footer2                     template segment

The checksum at offset 27 is the uint32_LE sum of every byte from offset
31 to the end of the file.
"""

from __future__ import annotations

import struct

from fxb2gra import preset
from fxb2gra.checksum import write_checksum
from fxb2gra.directory import PluginDirectory
from fxb2gra.templates import TemplateSet

DATA_NODE_MARKER = b"\x07\x00"


def display_name(base_name: str, plugin_name: str) -> str:
    return f"{base_name} ({plugin_name})"


def plugin_tag(plugin_filename: str) -> str:
    return f'<PLUGIN file="{plugin_filename}"/>'


def _cstr(text: str) -> bytes:
    return text.encode("utf-8") + b"\x00"


class ContainerEncoder:
    """Wraps preset blobs into graph containers.

    Args:
        templates: The four template segments.
        directory: Plugin table used to name the graph and its plugin node.
    """

    def __init__(self, templates: TemplateSet, directory: PluginDirectory):
        self.templates = templates
        self.directory = directory

    def encode(self, blob: bytes, base_name: str) -> bytes:
        """Build a graph container for one preset or bank.

        Args:
            blob: Raw .fxp/.fxb file contents. Not modified.
            base_name: Preset file name without extension.

        Returns:
            The complete container bytes.

        Raises:
            PresetTooShort: If the blob has fewer than 20 bytes.
        """
        patched = preset.with_host_version(blob)

        vst_id = preset.plugin_id(patched)
        name = display_name(base_name, self.directory.resolve_name(vst_id))
        filename = self.directory.resolve_filename(vst_id)

        out = bytearray()
        out += self.templates.header1
        out += _cstr(name)
        out += self.templates.header2
        out += _cstr(plugin_tag(filename))
        out += DATA_NODE_MARKER
        out += struct.pack("<q", len(patched))
        out += patched
        out += self.templates.footer1
        out += _cstr(name)
        out += self.templates.footer2

        write_checksum(out)
        return bytes(out)
