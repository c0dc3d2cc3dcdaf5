"""Plugin identity lookup for VST2 unique IDs.

Maps the 4-character unique ID stored in a preset blob to the plugin's
display name. The module filename the graph host loads is the display
name plus ``PLUGIN_SUFFIX``.

Table format (JSON object):
    {
        "Dexd": "Dexed",        // ID -> display name
        "cjs3": "Surge"
    }

Values that are not strings are kept but resolve to "" on lookup.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

PLUGIN_SUFFIX = ".dll"

PLUGINS_ENV = "FXB2GRA_PLUGINS"
BUILTIN_TABLE = Path(__file__).parent / "data" / "plugins.json"

# Placeholder key left behind by older versions of the override table.
_LEGACY_KEY = "."


def _read_table(path: Path) -> dict:
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Plugin table must contain a JSON object: {path}")

    return data


def load_builtin_table(path: str | Path = BUILTIN_TABLE) -> dict:
    """Read the plugin table shipped with the package.

    Raises:
        RuntimeError: If the table is missing or malformed, which means the
            installation is broken.
    """
    path = Path(path)
    try:
        return _read_table(path)
    except (OSError, ValueError) as e:
        raise RuntimeError(f"Failed to load built-in plugin table: {path}: {e}") from e


def load_override_table(path: str | Path | None) -> dict:
    """Read a user plugin table. A missing file is an empty table.

    Raises:
        ValueError: If the file exists but is not a JSON object.
    """
    if path is None:
        return {}
    path = Path(path)
    if not path.exists():
        return {}

    try:
        return _read_table(path)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid plugin table: {path}: {e}") from e


class PluginDirectory:
    """Immutable ID -> display name table.

    Build it with :meth:`load` once per process; lookups never raise and
    the instance can be shared freely afterwards.
    """

    def __init__(self, entries: Mapping[str, object] | None = None):
        self._entries = MappingProxyType(dict(entries or {}))

    @property
    def entries(self) -> Mapping[str, object]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, plugin_id: object) -> bool:
        return plugin_id in self._entries

    def resolve_name(self, plugin_id: str) -> str:
        """Display name for ``plugin_id``, or "" if unknown."""
        value = self._entries.get(plugin_id)
        if not isinstance(value, str):
            return ""
        return value

    def resolve_filename(self, plugin_id: str) -> str:
        """Module filename for ``plugin_id``, or "" if unknown."""
        value = self._entries.get(plugin_id)
        if not isinstance(value, str):
            return ""
        return value + PLUGIN_SUFFIX

    @classmethod
    def merge(
        cls,
        base: Mapping[str, object],
        override: Mapping[str, object],
    ) -> PluginDirectory:
        """Combine two tables; ``override`` wins on duplicate keys."""
        merged = dict(base)
        merged.update(override)
        merged.pop(_LEGACY_KEY, None)
        return cls(merged)

    @classmethod
    def load(
        cls,
        override_path: str | Path | None = None,
        builtin: Mapping[str, object] | str | Path | None = None,
    ) -> PluginDirectory:
        """Build the directory from the built-in and override tables.

        Args:
            override_path: Optional user table. Defaults to
                ``$FXB2GRA_PLUGINS``; absence is not an error.
            builtin: Built-in table as a mapping or a path. Defaults to the
                table bundled with the package.
        """
        if override_path is None:
            override_path = os.environ.get(PLUGINS_ENV) or None

        if builtin is None:
            base = load_builtin_table()
        elif isinstance(builtin, Mapping):
            base = dict(builtin)
        else:
            base = load_builtin_table(builtin)

        return cls.merge(base, load_override_table(override_path))

    def write_back(self, path: str | Path) -> bool:
        """Rewrite ``path`` with the merged table in canonical form.

        Returns:
            True if the file was written, False if writing failed.
        """
        text = json.dumps(dict(self._entries), indent=4, sort_keys=True, ensure_ascii=False)
        try:
            Path(path).write_text(text + "\n", encoding="utf-8")
        except OSError:
            return False
        return True
