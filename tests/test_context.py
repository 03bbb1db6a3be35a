"""Tests for the two-pipeline context and the sample driver."""

import pytest
from stacklet import Context
from stacklet.__main__ import main
from stacklet.ast_nodes import Literal, Addition, Reference
from stacklet.errors import MemoryLimitError, PipelineMismatchError, UnboundReferenceError
from stacklet.samples import CONDITION, DEFINITION


class TestContext:
    """Test Context methods."""

    def test_evaluate(self):
        """evaluate walks the tree."""
        assert Context().evaluate(DEFINITION) == 9

    def test_execute(self):
        """execute compiles and runs the tree."""
        assert Context().execute(DEFINITION) == 9

    def test_eval(self):
        """eval returns the agreed result."""
        assert Context().eval(CONDITION) == 3

    def test_eval_unbound(self):
        """Unbound names surface from eval."""
        with pytest.raises(UnboundReferenceError):
            Context().eval(Reference("x"))

    def test_mismatch_detected(self, monkeypatch):
        """A disagreement between pipelines is reported."""
        ctx = Context()
        monkeypatch.setattr(ctx, "execute", lambda expr: 4)
        with pytest.raises(PipelineMismatchError) as exc_info:
            ctx.eval(Literal(3))
        assert exc_info.value.tree_result == 3
        assert exc_info.value.bytecode_result == 4

    def test_stack_limit_passed_to_vm(self):
        """Context limits apply to the machine."""
        expr = Addition(Literal(1), Addition(Literal(2), Addition(Literal(3), Literal(4))))
        with pytest.raises(MemoryLimitError):
            Context(max_stack=3).execute(expr)
        assert Context(max_stack=4).execute(expr) == 10


class TestReport:
    """Test the diagnostic report."""

    def test_report_sections(self):
        """The report lists tree, byte code and steps."""
        report = Context().report(CONDITION)
        assert report == (
            "The expression to be run:\n\n"
            "\tif(\n\t\t0,\n\t\t2,\n\t\t3\n\t)\n\n"
            "The result of interpretation of the tree:\n\n"
            "\t3\n\n"
            "The byte code:\n\n"
            "\t0\tload: 0\n\t1\tbranch: [4]\n\t2\tload: 3\n\t3\tjump: [5]\n\t4\tload: 2\n\n"
            "The interpretation steps:\n\n"
            "\tload: 0\n\tbranch: [4] = 0\n\tload: 3\n\tjump: [5]\n\n"
            "The result of interpretation of the byte code:\n\n"
            "\t3\n"
        )


class TestMain:
    """Test the command line driver."""

    def test_quiet(self, capsys):
        """Quiet mode prints one result per program."""
        assert main(["-q"]) == 0
        out = capsys.readouterr().out
        assert out == "condition: 3\ndefinition: 9\nshadowing: 2\n"

    def test_named_program(self, capsys):
        """Programs can be picked by name."""
        assert main(["definition"]) == 0
        out = capsys.readouterr().out
        assert "The result of interpretation of the byte code:\n\n\t9\n" in out

    def test_unknown_program(self):
        """Unknown names are a usage error."""
        with pytest.raises(SystemExit):
            main(["nope"])
