"""Expression tree node types."""

from dataclasses import dataclass, fields
from typing import List


@dataclass(frozen=True)
class Node:
    """Base class for all expression nodes."""

    def to_dict(self) -> dict:
        """Convert node to dictionary for testing/serialization."""
        result = {"type": self.__class__.__name__}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Node):
                result[f.name] = value.to_dict()
            else:
                result[f.name] = value
        return result


@dataclass(frozen=True)
class Literal(Node):
    """Integer literal: 42"""
    value: int


@dataclass(frozen=True)
class Addition(Node):
    """Sum of two expressions, left evaluated first."""
    left: Node
    right: Node


@dataclass(frozen=True)
class Definition(Node):
    """let name = value in body

    The binding is visible in body only, never in value.
    """
    name: str
    value: Node
    body: Node


@dataclass(frozen=True)
class Reference(Node):
    """Use of a name bound by an enclosing Definition."""
    name: str


@dataclass(frozen=True)
class Condition(Node):
    """if test is non-zero then yes else no"""
    test: Node
    yes: Node
    no: Node


def format_tree(node: Node, depth: int = 0) -> str:
    """Render a tree listing, one node per line, tab indented."""
    lines: List[str] = []
    _format_node(node, depth, lines)
    return "".join(lines)


def _format_call(name: str, depth: int, children: list, out: List[str]) -> None:
    out.append("\t" * depth + f"{name}(\n")
    for i, child in enumerate(children):
        if i:
            out.append(",\n")
        _format_node(child, depth + 1, out)
    out.append("\n" + "\t" * depth + ")")


def _format_node(node: Node, depth: int, out: List[str]) -> None:
    if isinstance(node, Literal):
        out.append("\t" * depth + str(node.value))
    elif isinstance(node, Reference):
        out.append("\t" * depth + node.name)
    elif isinstance(node, Addition):
        _format_call("add", depth, [node.left, node.right], out)
    elif isinstance(node, Definition):
        # The bound name is listed like a reference to it
        _format_call("define", depth, [Reference(node.name), node.value, node.body], out)
    elif isinstance(node, Condition):
        _format_call("if", depth, [node.test, node.yes, node.no], out)
    else:
        raise TypeError(f"Unknown node type: {type(node).__name__}")
