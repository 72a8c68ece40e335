"""Tests for the scope tree and variable type model."""

import pytest
from src.translator.errors import ResolutionError
from src.translator.scope import Scope, Variable, VariableType


class TestNarrowing:
    def test_starts_any(self):
        assert Variable("x").type == VariableType.ANY

    def test_narrow(self):
        v = Variable("x")
        v.narrow(VariableType.NUMBER)
        assert v.type == VariableType.NUMBER

    def test_any_carries_no_evidence(self):
        v = Variable("x", VariableType.ARRAY)
        v.narrow(VariableType.ANY)
        assert v.type == VariableType.ARRAY

    def test_later_evidence_wins(self):
        v = Variable("x", VariableType.NUMBER)
        v.narrow(VariableType.STRING)
        assert v.type == VariableType.STRING


class TestScope:
    def test_declare_and_lookup(self):
        root = Scope()
        v = root.declare("a", VariableType.NUMBER)
        assert root.lookup("a") is v
        assert v.scope is root

    def test_lookup_walks_to_root(self):
        root = Scope()
        v = root.declare("a")
        inner = root.child().child()
        assert inner.lookup("a") is v

    def test_nearest_declaration_shadows(self):
        root = Scope()
        root.declare("a", VariableType.NUMBER)
        inner = root.child()
        shadow = inner.declare("a", VariableType.STRING)
        assert inner.lookup("a") is shadow
        assert root.lookup("a").type == VariableType.NUMBER

    def test_child_not_visible_from_parent(self):
        root = Scope()
        root.child().declare("local")
        assert root.lookup("local") is None

    def test_redeclaration_overwrites(self):
        root = Scope()
        root.declare("a", VariableType.NUMBER)
        again = root.declare("a", VariableType.STRING)
        assert root.lookup("a") is again
        assert len(root.variables) == 1

    def test_dotted_paths_are_keys(self):
        root = Scope()
        root.declare("config", VariableType.MAP)
        root.declare("config.port", VariableType.NUMBER)
        assert root.lookup("config.port").type == VariableType.NUMBER

    def test_depth(self):
        root = Scope()
        assert root.depth == 0
        assert root.child().child().depth == 2

    def test_find_by_predicate(self):
        root = Scope()
        root.declare("a", VariableType.NUMBER)
        inner = root.child()
        inner.declare("b", VariableType.ARRAY)
        found = inner.find(lambda v: v.type == VariableType.NUMBER)
        assert found.name == "a"
        assert inner.find(lambda v: v.type == VariableType.MAP) is None

    def test_resolve_missing(self):
        with pytest.raises(ResolutionError, match="Cannot resolve 'nope'"):
            Scope().resolve("nope")

    def test_walk_parents_first(self):
        root = Scope()
        a = root.child()
        b = a.child()
        c = root.child()
        assert list(root.walk()) == [root, a, b, c]
