"""Bytecode compiler - lowers expression trees to stack machine code."""

import logging
from dataclasses import dataclass
from typing import Optional

from .ast_nodes import Node, Literal, Addition, Definition, Reference, Condition
from .errors import IllFormedConditionError, MemoryLimitError
from .opcodes import (
    Instruction, InstructionSequence, OpCode,
    load_literal, add, copy, drop, branch, jump,
)
from .scope import SymbolTable

logger = logging.getLogger(__name__)


@dataclass
class CompiledProgram:
    """A compiled expression."""
    instructions: InstructionSequence
    depth: int  # Values left on the stack once the code has run


class Compiler:
    """Compiles expression trees to bytecode.

    The compiler tracks the depth of the operand stack as the code it
    emits will leave it. A binding introduced by a Definition lives in
    the slot its value lands in, and references copy from that absolute
    slot.
    """

    def __init__(self):
        self.instructions = InstructionSequence()

    def compile(self, node: Node, symbols: Optional[SymbolTable] = None,
                depth: int = 0) -> CompiledProgram:
        """Compile an expression to a fresh instruction sequence."""
        self.instructions = InstructionSequence()
        if symbols is None:
            symbols = SymbolTable()
        try:
            depth = self._compile_expression(node, symbols, depth)
        except RecursionError:
            raise MemoryLimitError("expression nested too deeply") from None
        logger.debug(
            f"Compiled {type(node).__name__} to {len(self.instructions)} "
            f"instructions, depth {depth}"
        )
        return CompiledProgram(instructions=self.instructions, depth=depth)

    def _emit(self, instruction: Instruction) -> int:
        """Emit an instruction, return its position."""
        pos = self.instructions.append(instruction)
        logger.debug(f"  {pos:4d}: {instruction}")
        return pos

    def _emit_jump(self, opcode: OpCode) -> int:
        """Emit a jump with no target yet, return position for patching."""
        return self._emit(branch() if opcode == OpCode.BRANCH else jump())

    def _patch_jump(self, pos: int, target: Optional[int] = None) -> None:
        """Patch a jump instruction to jump to target (or current position)."""
        self.instructions.patch(pos, target)
        logger.debug(f"  patched {pos} -> {self.instructions[pos].arg}")

    def _compile_expression(self, node: Node, symbols: SymbolTable, depth: int) -> int:
        """Compile node, return the stack depth after it runs."""
        if isinstance(node, Literal):
            self._emit(load_literal(node.value))
            return depth + 1

        elif isinstance(node, Addition):
            depth = self._compile_expression(node.left, symbols, depth)
            depth = self._compile_expression(node.right, symbols, depth)
            self._emit(add())
            return depth - 1

        elif isinstance(node, Reference):
            slot = symbols.lookup(node.name)
            self._emit(copy(slot))
            return depth + 1

        elif isinstance(node, Definition):
            depth = self._compile_expression(node.value, symbols, depth)
            # The value is now on top of the stack
            slot = depth - 1
            depth = self._compile_expression(
                node.body, symbols.extend(node.name, slot), depth
            )
            # Drop compacts the stack, leaving the body's value on top
            self._emit(drop(slot))
            return depth - 1

        elif isinstance(node, Condition):
            return self._compile_condition(node, symbols, depth)

        raise TypeError(f"Unknown node type: {type(node).__name__}")

    def _compile_condition(self, node: Condition, symbols: SymbolTable, depth: int) -> int:
        """Compile a condition.

        Layout: test, BRANCH yes, no, JUMP end, yes, end. A zero test
        falls through into the "no" arm.
        """
        depth = self._compile_expression(node.test, symbols, depth)
        branch_pos = self._emit_jump(OpCode.BRANCH)
        depth -= 1  # Branch consumes the test

        no_depth = self._compile_expression(node.no, symbols, depth)
        jump_pos = self._emit_jump(OpCode.JUMP)

        self._patch_jump(branch_pos)
        yes_depth = self._compile_expression(node.yes, symbols, depth)

        # Both arms must meet at the same depth
        if yes_depth != no_depth:
            raise IllFormedConditionError(no_depth, yes_depth)

        self._patch_jump(jump_pos)
        return yes_depth


def compile_expression(node: Node) -> CompiledProgram:
    """Compile node with a fresh Compiler."""
    return Compiler().compile(node)
