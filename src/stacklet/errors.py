"""Stacklet error types and exceptions."""

from typing import Optional


class StackletError(Exception):
    """Base class for all stacklet errors."""

    def __init__(self, message: str = "", name: str = "Error"):
        self.message = message
        self.name = name
        super().__init__(f"{name}: {message}" if message else name)


class UnboundReferenceError(StackletError):
    """A name has no binding in scope (evaluation or compilation)."""

    def __init__(self, name: str, phase: str = "evaluate"):
        self.symbol = name
        self.phase = phase
        super().__init__(f"{name} is not defined", "UnboundReference")


class IllFormedConditionError(StackletError):
    """The arms of a condition leave different stack depths."""

    def __init__(self, no_depth: int, yes_depth: int):
        self.no_depth = no_depth
        self.yes_depth = yes_depth
        super().__init__(
            f"condition arms leave different stack depths "
            f"(no: {no_depth}, yes: {yes_depth})",
            "IllFormedCondition",
        )


class InternalError(StackletError):
    """A compiler or machine defect, never caused by the program itself."""

    def __init__(self, message: str = "", name: str = "InternalError"):
        super().__init__(message, name)


class StackUnderflowError(InternalError):
    """The operand stack was empty (or too short) when it was accessed."""

    def __init__(self, message: str = "Stack underflow", ip: Optional[int] = None):
        self.ip = ip
        if ip is not None:
            message = f"{message} (at instruction {ip})"
        super().__init__(message, "StackUnderflow")


class PipelineMismatchError(InternalError):
    """The tree walker and the stack machine disagree on a result."""

    def __init__(self, tree_result: int, bytecode_result: int):
        self.tree_result = tree_result
        self.bytecode_result = bytecode_result
        super().__init__(
            f"tree walker returned {tree_result}, "
            f"byte code returned {bytecode_result}",
            "PipelineMismatch",
        )


class LimitError(StackletError):
    """Base class for resource limit violations."""


class MemoryLimitError(LimitError):
    """Raised when the operand stack grows past its limit."""

    def __init__(self, message: str = "Stack limit exceeded"):
        super().__init__(message, "LimitError")


class TimeLimitError(LimitError):
    """Raised when execution time limit is exceeded."""

    def __init__(self, message: str = "Execution timeout"):
        super().__init__(message, "LimitError")
