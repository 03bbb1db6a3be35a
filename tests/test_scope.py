"""Tests for environments and symbol tables."""

import pytest
from stacklet.errors import UnboundReferenceError
from stacklet.scope import Environment, SymbolTable


class TestEnvironment:
    """Test the evaluator's bindings."""

    def test_empty_lookup_fails(self):
        """Looking up in an empty environment is an unbound reference."""
        with pytest.raises(UnboundReferenceError) as exc_info:
            Environment().lookup("x")
        assert exc_info.value.symbol == "x"
        assert exc_info.value.phase == "evaluate"

    def test_extend_and_lookup(self):
        """Extended bindings can be found."""
        env = Environment().extend("x", 1).extend("y", 2)
        assert env.lookup("x") == 1
        assert env.lookup("y") == 2

    def test_innermost_wins(self):
        """Newer frames shadow older ones."""
        env = Environment().extend("x", 1).extend("x", 2)
        assert env.lookup("x") == 2
        assert list(env) == [("x", 2), ("x", 1)]

    def test_extend_does_not_mutate(self):
        """Extending leaves the original scope intact."""
        outer = Environment().extend("x", 1)
        inner = outer.extend("x", 2)
        sibling = outer.extend("y", 3)
        assert outer.lookup("x") == 1
        assert inner.lookup("x") == 2
        assert "y" not in outer
        assert "y" not in inner
        assert sibling.lookup("x") == 1
        assert len(outer) == 1

    def test_extend_keeps_type(self):
        """Extending returns the same kind of scope."""
        assert isinstance(Environment().extend("x", 1), Environment)
        assert isinstance(SymbolTable().extend("x", 0), SymbolTable)

    def test_repr(self):
        """Scopes show their bindings newest first."""
        env = Environment().extend("a", 1).extend("b", 2)
        assert repr(env) == "Environment(b=2, a=1)"


class TestSymbolTable:
    """Test the compiler's bindings."""

    def test_unbound_phase(self):
        """Unresolved symbols are reported as a compile error."""
        with pytest.raises(UnboundReferenceError) as exc_info:
            SymbolTable().extend("a", 0).lookup("b")
        assert exc_info.value.phase == "compile"
        assert str(exc_info.value) == "UnboundReference: b is not defined"

    def test_slots(self):
        """Symbol tables map names to slots."""
        symbols = SymbolTable().extend("a", 0).extend("b", 1)
        assert symbols.lookup("a") == 0
        assert symbols.lookup("b") == 1
