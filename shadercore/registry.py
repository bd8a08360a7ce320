"""
File id registry shared by every source in a build session.
"""
from typing import Dict, List, Tuple


class FileIdRegistry:
    """
    Assigns stable integer ids to include names.

    Ids start at 1 (0 is the id every top-level source is processed with) and
    are handed out in first-encounter order across the whole session. A name
    keeps its id for the lifetime of the registry.
    """

    def __init__(self):
        self._ids: Dict[str, int] = {}

    def resolve(self, name: str) -> int:
        """Return the id for name, assigning the next one if it is new."""
        file_id = self._ids.get(name)
        if file_id is None:
            file_id = len(self._ids) + 1
            self._ids[name] = file_id
        return file_id

    def items(self) -> List[Tuple[int, str]]:
        """(id, name) pairs in id order."""
        return sorted((file_id, name) for name, file_id in self._ids.items())

    def to_lookup(self) -> Dict[int, str]:
        return dict(self.items())

    def __contains__(self, name):
        return name in self._ids

    def __len__(self):
        return len(self._ids)

    def __repr__(self):
        return f"FileIdRegistry({self.to_lookup()})"
