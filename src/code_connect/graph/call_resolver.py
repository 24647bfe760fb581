# code_connect/graph/call_resolver.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Same-file call resolution.

A call site is attributed to the function whose line interval contains it,
and its name is matched against the functions defined in the same file.
Cross-file calls are out of reach here: they need type and import
information the File Record does not carry.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from code_connect.records import FunctionInfo


@dataclass(frozen=True)
class FunctionScope:
    """A function's inclusive line interval and its node id."""

    node_id: str
    name: str
    line: int
    end_line: int

    @property
    def span(self) -> int:
        return self.end_line - self.line

    def contains(self, line: int) -> bool:
        return self.line <= line <= self.end_line


class FunctionScopes:
    """Function intervals of one file.

    Both lookups are independent of the order the functions were listed in:

    - enclosing(): innermost interval wins (smallest span, then the later
      start line, then the lower node id).
    - definition(): with several same-named functions, the earliest in the
      file wins (lowest start line, then lowest end line).
    """

    def __init__(self, scopes: Iterable[FunctionScope]):
        """Initialize from (already id-assigned) scopes.

        Args:
            scopes: One scope per function node in the file.
        """
        self.scopes: list[FunctionScope] = list(scopes)
        self._by_name: dict[str, FunctionScope] = {}
        for scope in sorted(self.scopes, key=lambda s: (s.line, s.end_line)):
            self._by_name.setdefault(scope.name, scope)

    @classmethod
    def from_functions(
        cls, functions: Iterable[tuple[FunctionInfo, str]]
    ) -> "FunctionScopes":
        """Build scopes from (FunctionInfo, node_id) pairs."""
        return cls(
            FunctionScope(
                node_id=node_id,
                name=func.name,
                line=func.line,
                end_line=func.end_line,
            )
            for func, node_id in functions
        )

    def enclosing(self, line: int) -> Optional[FunctionScope]:
        """Innermost function containing line, or None at module level."""
        candidates = [scope for scope in self.scopes if scope.contains(line)]
        if not candidates:
            return None
        return min(candidates, key=lambda s: (s.span, -s.line, s.node_id))

    def definition(self, name: str) -> Optional[FunctionScope]:
        """Function defined in this file under name, or None."""
        return self._by_name.get(name)

    def resolve_call(
        self, name: str, line: int
    ) -> Optional[tuple[FunctionScope, FunctionScope]]:
        """Resolve one call site to (caller, callee) scopes.

        Args:
            name: Called name as recorded by the parser
            line: 0-based line of the call

        Returns:
            (caller, callee) when the call sits inside a function and names a
            function of the same file, otherwise None.
        """
        caller = self.enclosing(line)
        if caller is None:
            return None
        callee = self.definition(name)
        if callee is None:
            return None
        return (caller, callee)

    def __len__(self) -> int:
        return len(self.scopes)
