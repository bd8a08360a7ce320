"""
Include table: include name -> raw source text.
"""
import os
from collections.abc import Mapping


class IncludeTable(Mapping):
    """Read-only mapping of include names to their source text.

    The table is filled once, before any processing, and never changes after.
    """

    def __init__(self, entries=None):
        self._entries = dict(entries or {})

    @classmethod
    def from_paths(cls, paths):
        """Load files keyed by their base name."""
        entries = {}
        for path in paths:
            with open(path, 'r', encoding='utf-8') as f:
                entries[os.path.basename(path)] = f.read()
        return cls(entries)

    def merged(self, entries):
        """Return a new table with extra entries added (later entries win)."""
        combined = dict(self._entries)
        combined.update(entries)
        return IncludeTable(combined)

    def __getitem__(self, name):
        return self._entries[name]

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return f"IncludeTable({sorted(self._entries)})"
