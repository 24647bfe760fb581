# code_connect/graph/identity.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Stable node identifiers.

Maps (kind, canonical key) pairs to generated ids so that each logical
folder, file or function gets exactly one id per build.
"""

from typing import Optional


class IdentityRegistry:
    """Assigns one id per (kind, key) pair.

    Ids are "<kind>-<n>" with a single counter shared by every kind, so ids
    are unique across kinds and deterministic for a given insertion order.
    The kind is part of the lookup key: a function key can never collide
    with a file key even when the raw strings match.

    There is no removal; a registry lives for one build and is then reset
    or discarded.
    """

    def __init__(self):
        """Initialize empty registry."""
        self._ids: dict[tuple[str, tuple], str] = {}
        self._counter = 0

    @staticmethod
    def _normalize(kind: str, key) -> tuple[str, tuple]:
        if not isinstance(key, tuple):
            key = (key,)
        return (kind, key)

    def get_or_assign(self, kind: str, key) -> str:
        """Return the id for (kind, key), generating one on first sight.

        Args:
            kind: Node kind ("folder", "file", "function")
            key: Canonical key within that kind. A plain string or a tuple,
                 e.g. (file_path, function_name, line).

        Returns:
            The id registered for this pair.
        """
        lookup_key = self._normalize(kind, key)
        existing = self._ids.get(lookup_key)
        if existing is not None:
            return existing

        node_id = f"{kind}-{self._counter}"
        self._counter += 1
        self._ids[lookup_key] = node_id
        return node_id

    def lookup(self, kind: str, key) -> Optional[str]:
        """Return the id for (kind, key) without assigning one."""
        return self._ids.get(self._normalize(kind, key))

    def __contains__(self, item: tuple[str, object]) -> bool:
        kind, key = item
        return self._normalize(kind, key) in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def reset(self) -> None:
        """Forget every mapping and restart the counter at zero."""
        self._ids.clear()
        self._counter = 0
