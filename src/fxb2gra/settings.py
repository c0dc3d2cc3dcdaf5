"""Per-folder conversion settings.

A folder may carry an ``fxb2gra.json`` file:
    {
        "mode": "f",         // "f": .gra -> .fxp/.fxb, "g": .fxp/.fxb -> .gra
        "recursive": true    // also process subfolders
    }

Missing keys and values of the wrong type fall back to the defaults.
"""

from __future__ import annotations

import json
from pathlib import Path

SETTINGS_FILENAME = "fxb2gra.json"

MODE_TO_PRESET = "f"
MODE_TO_GRAPH = "g"


class FolderSettings:
    """Effective settings for one folder.

    Attributes:
        to_preset: True to convert graphs to presets, False for the reverse.
        recursive: Whether subfolders are processed too.
    """

    def __init__(self, to_preset: bool = False, recursive: bool = False):
        self.to_preset = to_preset
        self.recursive = recursive

    def __repr__(self) -> str:
        return f"FolderSettings(to_preset={self.to_preset!r}, recursive={self.recursive!r})"

    @classmethod
    def load(cls, folder: str | Path, inherited_recursive: bool = False) -> FolderSettings:
        """Read ``fxb2gra.json`` from ``folder``, if present.

        Args:
            folder: Folder to read settings for.
            inherited_recursive: Recursion flag passed down from the parent
                folder; used when the file does not set one.

        Raises:
            ValueError: If the settings file is not valid JSON.
        """
        settings = cls(to_preset=False, recursive=inherited_recursive)

        path = Path(folder) / SETTINGS_FILENAME
        if not path.is_file():
            return settings

        with open(path, encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid settings file: {path}: {e}") from e

        if not isinstance(data, dict):
            return settings

        mode = data.get("mode")
        if mode == MODE_TO_PRESET:
            settings.to_preset = True
        elif mode == MODE_TO_GRAPH:
            settings.to_preset = False

        recursive = data.get("recursive")
        if isinstance(recursive, bool):
            settings.recursive = recursive

        return settings
