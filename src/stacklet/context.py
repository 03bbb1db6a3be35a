"""Execution context running both pipelines over one expression tree."""

import logging
from typing import List, Optional

from .ast_nodes import Node, format_tree
from .compiler import Compiler, CompiledProgram
from .errors import PipelineMismatchError
from .evaluator import Evaluator
from .opcodes import Instruction, list_instructions
from .vm import VM

logger = logging.getLogger(__name__)


class Context:
    """Evaluates expression trees by walking them and by compiling them.

    Each call gets fresh per-run state, so a context can be reused for any
    number of trees.
    """

    def __init__(
        self,
        time_limit: Optional[float] = None,
        max_stack: Optional[int] = None,
    ):
        """Create a new context.

        Args:
            time_limit: Maximum byte code execution time in seconds
            max_stack: Maximum operand stack height
        """
        self.time_limit = time_limit
        self.max_stack = max_stack

    def _vm(self, trace=None) -> VM:
        return VM(time_limit=self.time_limit, max_stack=self.max_stack, trace=trace)

    def evaluate(self, expr: Node) -> int:
        """Evaluate the tree directly."""
        return Evaluator().evaluate(expr)

    def compile(self, expr: Node) -> CompiledProgram:
        """Compile the tree to byte code."""
        return Compiler().compile(expr)

    def execute(self, expr: Node) -> int:
        """Compile the tree and run it on a fresh machine."""
        return self._vm().run(self.compile(expr))

    def eval(self, expr: Node) -> int:
        """Run both pipelines and return their common result.

        Raises:
            UnboundReferenceError: If the tree uses an unbound name
            IllFormedConditionError: If a condition's arms are unbalanced
            PipelineMismatchError: If the two pipelines disagree
        """
        tree_result = self.evaluate(expr)
        bytecode_result = self.execute(expr)
        logger.debug(f"Tree walker: {tree_result}, byte code: {bytecode_result}")
        if tree_result != bytecode_result:
            raise PipelineMismatchError(tree_result, bytecode_result)
        return tree_result

    def report(self, expr: Node) -> str:
        """Describe a full run of both pipelines as text."""
        tree_result = self.evaluate(expr)
        compiled = self.compile(expr)

        steps: List[str] = []

        def trace(ip: int, instruction: Instruction, line: str) -> None:
            steps.append(f"\t{line}")

        bytecode_result = self._vm(trace).run(compiled)

        listing = list_instructions(compiled.instructions)
        sections = [
            "The expression to be run:",
            format_tree(expr, 1),
            "The result of interpretation of the tree:",
            f"\t{tree_result}",
            "The byte code:",
            listing,
            "The interpretation steps:",
            "\n".join(steps),
            "The result of interpretation of the byte code:",
            f"\t{bytecode_result}",
        ]
        return "\n\n".join(sections) + "\n"
