"""Tree-walking evaluator - runs expression trees directly."""

from typing import Optional

from .ast_nodes import Node, Literal, Addition, Definition, Reference, Condition
from .errors import MemoryLimitError
from .scope import Environment


class Evaluator:
    """Evaluates expression trees against an Environment.

    Addition evaluates its left operand fully before its right, matching
    the order the compiler emits them in.
    """

    def evaluate(self, node: Node, env: Optional[Environment] = None) -> int:
        """Evaluate node and return its integer value."""
        if env is None:
            env = Environment()
        try:
            return self._evaluate(node, env)
        except RecursionError:
            raise MemoryLimitError("expression nested too deeply") from None

    def _evaluate(self, node: Node, env: Environment) -> int:
        if isinstance(node, Literal):
            return node.value

        elif isinstance(node, Addition):
            left = self._evaluate(node.left, env)
            right = self._evaluate(node.right, env)
            return left + right

        elif isinstance(node, Reference):
            return env.lookup(node.name)

        elif isinstance(node, Definition):
            # Value sees the outer scope only
            value = self._evaluate(node.value, env)
            return self._evaluate(node.body, env.extend(node.name, value))

        elif isinstance(node, Condition):
            if self._evaluate(node.test, env):
                return self._evaluate(node.yes, env)
            return self._evaluate(node.no, env)

        raise TypeError(f"Unknown node type: {type(node).__name__}")


def evaluate(node: Node, env: Optional[Environment] = None) -> int:
    """Evaluate node with a fresh Evaluator."""
    return Evaluator().evaluate(node, env)
