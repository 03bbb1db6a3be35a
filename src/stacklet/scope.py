"""Persistent name bindings for the evaluator and the compiler.

Both scopes are singly-linked lists of frames, newest first. Extending a
scope prepends a frame and returns a new scope; the original is left
untouched, so sibling calls can keep reusing it.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from .errors import UnboundReferenceError


@dataclass(frozen=True)
class Frame:
    """A single binding and the frames it shadows."""
    name: str
    value: int
    rest: Optional["Frame"] = None


class Bindings:
    """Immutable association list of name -> int."""

    # Reported on UnboundReferenceError
    phase = "evaluate"

    __slots__ = ("_head",)

    def __init__(self, head: Optional[Frame] = None):
        self._head = head

    def extend(self, name: str, value: int) -> "Bindings":
        """Return a new scope with name bound innermost."""
        return self.__class__(Frame(name, value, self._head))

    def lookup(self, name: str) -> int:
        """Find the innermost binding of name."""
        frame = self._head
        while frame is not None:
            if frame.name == name:
                return frame.value
            frame = frame.rest
        raise UnboundReferenceError(name, self.phase)

    def __contains__(self, name: str) -> bool:
        return any(n == name for n, _ in self)

    def __iter__(self) -> Iterator[Tuple[str, int]]:
        frame = self._head
        while frame is not None:
            yield frame.name, frame.value
            frame = frame.rest

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Bindings):
            return NotImplemented
        return list(self) == list(other)

    def __repr__(self) -> str:
        items = ", ".join(f"{n}={v}" for n, v in self)
        return f"{self.__class__.__name__}({items})"


class Environment(Bindings):
    """Evaluator scope: name -> value."""

    phase = "evaluate"
    __slots__ = ()


class SymbolTable(Bindings):
    """Compiler scope: name -> absolute stack slot."""

    phase = "compile"
    __slots__ = ()
