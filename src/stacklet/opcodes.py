"""Bytecode opcodes and instruction container for the stack machine."""

from dataclasses import dataclass
from enum import IntEnum, auto
from typing import Iterable, Iterator, List, Optional

from .errors import InternalError


class OpCode(IntEnum):
    """Bytecode operation codes."""

    LOAD_LITERAL = auto()  # Push a literal: arg = value
    ADD = auto()           # Pop two, push their sum
    COPY = auto()          # Push a copy of stack[arg]
    DROP = auto()          # Remove stack[arg], shifting the rest down
    BRANCH = auto()        # Pop test; non-zero jumps to arg
    JUMP = auto()          # Unconditional jump: arg = target


# Opcodes whose argument is an instruction index
JUMP_OPCODES = frozenset([OpCode.BRANCH, OpCode.JUMP])

_MNEMONICS = {
    OpCode.LOAD_LITERAL: "load",
    OpCode.ADD: "add",
    OpCode.COPY: "copy",
    OpCode.DROP: "drop",
    OpCode.BRANCH: "branch",
    OpCode.JUMP: "jump",
}


@dataclass
class Instruction:
    """A single instruction.

    Slots and targets are absolute indices. A BRANCH or JUMP emitted
    before its target is known carries arg=None until patched.
    """
    op: OpCode
    arg: Optional[int] = None

    @property
    def mnemonic(self) -> str:
        return _MNEMONICS[self.op]

    def __str__(self) -> str:
        if self.op == OpCode.LOAD_LITERAL:
            return f"load {self.arg}"
        if self.op == OpCode.ADD:
            return "add"
        return f"{self.mnemonic} [{self.arg}]"


def load_literal(value: int) -> Instruction:
    return Instruction(OpCode.LOAD_LITERAL, value)


def add() -> Instruction:
    return Instruction(OpCode.ADD)


def copy(slot: int) -> Instruction:
    return Instruction(OpCode.COPY, slot)


def drop(slot: int) -> Instruction:
    return Instruction(OpCode.DROP, slot)


def branch(target: Optional[int] = None) -> Instruction:
    return Instruction(OpCode.BRANCH, target)


def jump(target: Optional[int] = None) -> Instruction:
    return Instruction(OpCode.JUMP, target)


class InstructionSequence:
    """Growable list of instructions addressed by index.

    Appending never moves earlier entries, so an index returned by
    append() stays valid for patch().
    """

    def __init__(self, instructions: Optional[Iterable[Instruction]] = None):
        self._instructions: List[Instruction] = list(instructions or [])

    def append(self, instruction: Instruction) -> int:
        """Append an instruction, return its index."""
        pos = len(self._instructions)
        self._instructions.append(instruction)
        return pos

    def patch(self, pos: int, target: Optional[int] = None) -> None:
        """Patch the jump at pos to target (or the current end)."""
        if target is None:
            target = len(self._instructions)
        instruction = self._instructions[pos]
        if instruction.op not in JUMP_OPCODES:
            raise InternalError(
                f"cannot patch {instruction.mnemonic} at {pos}: not a jump"
            )
        instruction.arg = target

    def __len__(self) -> int:
        return len(self._instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self._instructions[index]

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self._instructions)

    def __eq__(self, other) -> bool:
        if isinstance(other, InstructionSequence):
            return self._instructions == other._instructions
        if isinstance(other, list):
            return self._instructions == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"InstructionSequence({self._instructions!r})"


def disassemble(instructions: Iterable[Instruction]) -> str:
    """Disassemble instructions for debugging."""
    return "\n".join(
        f"{i:4d}: {instruction}" for i, instruction in enumerate(instructions)
    )


def list_instructions(instructions: Iterable[Instruction]) -> str:
    """Tab separated listing: index, then mnemonic and argument."""
    lines = []
    for i, instruction in enumerate(instructions):
        if instruction.op == OpCode.LOAD_LITERAL:
            text = f"load: {instruction.arg}"
        elif instruction.op == OpCode.ADD:
            text = "add"
        else:
            text = f"{instruction.mnemonic}: [{instruction.arg}]"
        lines.append(f"\t{i}\t{text}")
    return "\n".join(lines)
