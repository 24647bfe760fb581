# tests/unit/code_connect/graph/test_call_resolver.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Tests for FunctionScopes - line interval call attribution."""

from code_connect.graph import FunctionScope, FunctionScopes
from code_connect.records import FunctionInfo


def _scopes(*specs):
    """Build scopes from (name, line, end_line) triples, ids in order."""
    return FunctionScopes(
        FunctionScope(node_id=f"function-{i}", name=name, line=line, end_line=end)
        for i, (name, line, end) in enumerate(specs)
    )


class TestEnclosing:
    """Tests for enclosing()."""

    def test_inclusive_bounds(self):
        scopes = _scopes(("foo", 2, 4))

        assert scopes.enclosing(2).name == "foo"
        assert scopes.enclosing(4).name == "foo"
        assert scopes.enclosing(5) is None
        assert scopes.enclosing(1) is None

    def test_innermost_wins(self):
        scopes = _scopes(("outer", 0, 20), ("inner", 5, 10), ("deepest", 6, 7))

        assert scopes.enclosing(6).name == "deepest"
        assert scopes.enclosing(9).name == "inner"
        assert scopes.enclosing(15).name == "outer"

    def test_result_independent_of_list_order(self):
        forward = _scopes(("outer", 0, 20), ("inner", 5, 10))
        backward = _scopes(("inner", 5, 10), ("outer", 0, 20))

        assert forward.enclosing(7).name == backward.enclosing(7).name == "inner"

    def test_single_line_functions(self):
        scopes = _scopes(("a", 3, 3), ("b", 4, 4))
        assert scopes.enclosing(3).name == "a"
        assert scopes.enclosing(4).name == "b"


class TestDefinition:
    """Tests for definition()."""

    def test_earliest_definition_wins(self):
        scopes = _scopes(("helper", 30, 31), ("helper", 10, 12))
        assert scopes.definition("helper").line == 10

    def test_unknown_name(self):
        assert _scopes(("a", 0, 1)).definition("b") is None


class TestResolveCall:
    """Tests for resolve_call() and from_functions()."""

    def test_resolves_caller_and_callee(self):
        scopes = FunctionScopes.from_functions(
            [
                (FunctionInfo(name="main", line=0, end_line=5), "function-1"),
                (FunctionInfo(name="helper", line=7, end_line=9), "function-2"),
            ]
        )

        caller, callee = scopes.resolve_call("helper", 3)
        assert caller.node_id == "function-1"
        assert callee.node_id == "function-2"

    def test_outside_any_function(self):
        scopes = _scopes(("main", 0, 5))
        assert scopes.resolve_call("main", 8) is None

    def test_unknown_callee(self):
        scopes = _scopes(("main", 0, 5))
        assert scopes.resolve_call("print", 2) is None

    def test_len(self):
        assert len(_scopes(("a", 0, 1), ("b", 2, 3))) == 2
