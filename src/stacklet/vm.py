"""Virtual machine for executing stacklet bytecode."""

import logging
import time
from typing import Callable, Iterable, List, Optional, Sequence, Union

from .compiler import CompiledProgram
from .errors import InternalError, MemoryLimitError, StackUnderflowError, TimeLimitError
from .opcodes import Instruction, OpCode

logger = logging.getLogger(__name__)

# Called as trace(ip, instruction, line) for every executed instruction
TraceHook = Callable[[int, Instruction, str], None]


class VM:
    """Stack machine.

    The operand stack is addressed absolutely from the base of the run:
    COPY and DROP slots, like BRANCH and JUMP targets, are plain indices.
    """

    def __init__(
        self,
        time_limit: Optional[float] = None,
        max_stack: Optional[int] = None,
        trace: Optional[TraceHook] = None,
    ):
        self.time_limit = time_limit
        self.max_stack = max_stack
        self.trace = trace

        self.stack: List[int] = []
        self.ip = 0
        self.code: Sequence[Instruction] = ()

        self.start_time: Optional[float] = None
        self.instruction_count = 0
        self._tracing = False

    def run(self, program: Union[CompiledProgram, Iterable[Instruction]]) -> int:
        """Run bytecode and return the value left on top of the stack."""
        if isinstance(program, CompiledProgram):
            program = program.instructions
        self.code = list(program)
        self.stack = []
        self.ip = 0
        self.instruction_count = 0
        self.start_time = time.time()
        self._tracing = self.trace is not None or logger.isEnabledFor(logging.DEBUG)
        return self._execute()

    def _check_limits(self) -> None:
        """Check the time limit and count the instruction."""
        self.instruction_count += 1

        # Check time limit every 1000 instructions
        if self.time_limit and self.instruction_count % 1000 == 0:
            if time.time() - self.start_time > self.time_limit:
                raise TimeLimitError("Execution timeout")

    def _execute(self) -> int:
        """Main execution loop."""
        while self.ip < len(self.code):
            self._check_limits()
            self._execute_instruction(self.code[self.ip])
            self.ip += 1

        if not self.stack:
            raise StackUnderflowError("Empty stack at termination")
        result = self.stack[-1]
        logger.debug(f"Executed {self.instruction_count} instructions, result {result}")
        return result

    def _execute_instruction(self, instruction: Instruction) -> None:
        """Execute a single instruction."""
        op = instruction.op
        arg = instruction.arg

        if op == OpCode.LOAD_LITERAL:
            if self._tracing:
                self._trace(instruction, f"load: {arg}")
            self._push(arg)

        elif op == OpCode.ADD:
            # x is the right operand, pushed last
            x = self._pop()
            y = self._pop()
            if self._tracing:
                self._trace(instruction, f"add: {x}, {y}")
            self._push(y + x)

        elif op == OpCode.COPY:
            value = self.stack[self._slot(arg)]
            if self._tracing:
                self._trace(instruction, f"copy: [{arg}] = {value}")
            self._push(value)

        elif op == OpCode.DROP:
            value = self.stack[self._slot(arg)]
            if self._tracing:
                self._trace(instruction, f"drop: [{arg}] = {value}")
            del self.stack[arg]

        elif op == OpCode.BRANCH:
            target = self._target(arg)
            test = self._pop()
            if self._tracing:
                self._trace(instruction, f"branch: [{target}] = {test}")
            if test:
                # The loop advances onto target
                self.ip = target - 1

        elif op == OpCode.JUMP:
            target = self._target(arg)
            if self._tracing:
                self._trace(instruction, f"jump: [{target}]")
            self.ip = target - 1

        else:
            raise InternalError(f"Unknown opcode: {op!r}")

    def _push(self, value: int) -> None:
        if self.max_stack is not None and len(self.stack) >= self.max_stack:
            raise MemoryLimitError(
                f"Stack limit exceeded ({len(self.stack) + 1} > {self.max_stack})"
            )
        self.stack.append(value)

    def _pop(self) -> int:
        if not self.stack:
            raise StackUnderflowError("Pop from empty stack", self.ip)
        return self.stack.pop()

    def _slot(self, slot: Optional[int]) -> int:
        if slot is None or not 0 <= slot < len(self.stack):
            raise StackUnderflowError(
                f"Slot {slot} outside stack of height {len(self.stack)}", self.ip
            )
        return slot

    def _target(self, target: Optional[int]) -> int:
        if target is None or not 0 <= target <= len(self.code):
            raise InternalError(f"Bad jump target {target} at instruction {self.ip}")
        return target

    def _trace(self, instruction: Instruction, line: str) -> None:
        logger.debug(f"{self.ip:4d}: {line}")
        if self.trace is not None:
            self.trace(self.ip, instruction, line)


def run(program: Union[CompiledProgram, Iterable[Instruction]]) -> int:
    """Run program on a fresh VM."""
    return VM().run(program)
