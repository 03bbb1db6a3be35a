"""
Stacklet - a tiny expression language run two ways

Expression trees are either walked directly or lowered to stack machine
byte code and interpreted; both routes must agree on every well-formed
program. Implemented entirely in Python with no external dependencies.
"""

__version__ = "0.1.0"

from .ast_nodes import Node, Literal, Addition, Definition, Reference, Condition
from .compiler import Compiler, CompiledProgram
from .context import Context
from .errors import (
    StackletError, UnboundReferenceError, IllFormedConditionError,
    InternalError, StackUnderflowError, PipelineMismatchError,
    LimitError, MemoryLimitError, TimeLimitError,
)
from .evaluator import Evaluator
from .opcodes import OpCode, Instruction, InstructionSequence, disassemble, list_instructions
from .scope import Environment, SymbolTable
from .vm import VM

__all__ = [
    "Node",
    "Literal",
    "Addition",
    "Definition",
    "Reference",
    "Condition",
    "Compiler",
    "CompiledProgram",
    "Context",
    "Evaluator",
    "VM",
    "OpCode",
    "Instruction",
    "InstructionSequence",
    "disassemble",
    "list_instructions",
    "Environment",
    "SymbolTable",
    "StackletError",
    "UnboundReferenceError",
    "IllFormedConditionError",
    "InternalError",
    "StackUnderflowError",
    "PipelineMismatchError",
    "LimitError",
    "MemoryLimitError",
    "TimeLimitError",
]
