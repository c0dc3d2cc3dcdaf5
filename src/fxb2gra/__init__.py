"""
fxb2gra - convert VST2 presets to graph files and back.

Wraps .fxp/.fxb preset blobs into .gra graph containers (with display
names, a plugin tag and a checksum) and extracts them again.

Example usage:
    >>> from pathlib import Path
    >>> import fxb2gra
    >>>
    >>> # Load the template segments and the plugin table once
    >>> templates = fxb2gra.TemplateSet.from_directory("/path/to/templates")
    >>> directory = fxb2gra.PluginDirectory.load("plugins.json")
    >>> service = fxb2gra.ConversionService(fxb2gra.ContainerEncoder(templates, directory))
    >>>
    >>> # Preset -> graph
    >>> src = Path("Lead.fxp")
    >>> result = service.convert(src.read_bytes(), fxb2gra.SourceKind.from_path(src), src.stem)
    >>> src.with_suffix(result.extension).write_bytes(result.data)
    >>>
    >>> # Graph -> preset
    >>> result = service.convert(Path("Lead.gra").read_bytes(), fxb2gra.SourceKind.GRAPH)
    >>> print(result.extension)  # ".fxp" or ".fxb"
"""

from fxb2gra.checksum import additive_checksum, read_checksum, write_checksum
from fxb2gra.decoder import ContainerDecoder, ContainerError, DecodedPreset
from fxb2gra.directory import PluginDirectory
from fxb2gra.encoder import ContainerEncoder
from fxb2gra.preset import PresetKind, PresetTooShort
from fxb2gra.scanner import SignatureNotFound, find_first
from fxb2gra.service import ConversionResult, ConversionService, SourceKind
from fxb2gra.templates import TemplateError, TemplateSet

__all__ = [
    # Conversion
    "ConversionService",
    "ConversionResult",
    "SourceKind",
    # Codec
    "ContainerEncoder",
    "ContainerDecoder",
    "DecodedPreset",
    "PresetKind",
    # Resources
    "PluginDirectory",
    "TemplateSet",
    # Byte-level helpers
    "find_first",
    "additive_checksum",
    "read_checksum",
    "write_checksum",
    # Errors
    "SignatureNotFound",
    "ContainerError",
    "PresetTooShort",
    "TemplateError",
]
__version__ = "0.1.0"
