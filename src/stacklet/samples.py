"""Sample programs exercising every node kind."""

from .ast_nodes import Literal, Addition, Definition, Reference, Condition

# if 0 then 2 else 3
CONDITION = Condition(Literal(0), Literal(2), Literal(3))

# let five = 5 in 4 + five
DEFINITION = Definition("five", Literal(5), Addition(Literal(4), Reference("five")))

# let x = 1 in let x = 2 in x
SHADOWING = Definition("x", Literal(1), Definition("x", Literal(2), Reference("x")))

PROGRAMS = {
    "condition": CONDITION,
    "definition": DEFINITION,
    "shadowing": SHADOWING,
}
