"""
Core Module for the Boa Code Generator

Holds the CodeGenerator class, the variable environment, and the fixed
program template the instruction list is embedded into.

Code generation is a plain structural recursion over the AST. Besides
the expression, each call receives:
- env: Environment mapping bound names to stack offsets
- cursor: next free stack offset for temporaries at this depth

Slots are addressed as [rsp - offset], offsets start at one word and grow
by one word. No slot is ever reused within one program.
"""

from typing import Dict, List, Optional

from ast_nodes import Expr, Number, Variable, Binding, UnaryExpr, BinaryExpr
from boa_errors import UnboundIdentifierError
from codegen.expressions import ExpressionsGenerator
from codegen.bindings import BindingsGenerator


PROGRAM_TEMPLATE = """section .text
global {entry}
{entry}:
{body}
  ret
"""


class Environment:
    """Immutable mapping from variable name to stack offset.

    extend() returns a new Environment; the receiver is never modified,
    so sibling scopes cannot observe each other's bindings.
    """

    def __init__(self, slots: Optional[Dict[str, int]] = None):
        self._slots: Dict[str, int] = dict(slots) if slots else {}

    def extend(self, name: str, offset: int) -> 'Environment':
        slots = dict(self._slots)
        slots[name] = offset
        return Environment(slots)

    def lookup(self, name: str) -> int:
        try:
            return self._slots[name]
        except KeyError:
            raise UnboundIdentifierError(name) from None

    def __contains__(self, name: str) -> bool:
        return name in self._slots

    def __len__(self) -> int:
        return len(self._slots)

    def __repr__(self):
        return f"Environment({self._slots!r})"


class CodeGenerator:
    """Generates x86-64 assembly for a Boa expression.

    Target parameters are plain attributes:
        accumulator: register that holds every expression's value
        scratch: register used to reorder subtraction operands
        word_size: width of one stack slot in bytes
        entry_label: global symbol the runtime calls
    """

    def __init__(self, accumulator: str = "rax", scratch: str = "rbx",
                 word_size: int = 8, entry_label: str = "our_code_starts_here"):
        self.accumulator = accumulator
        self.scratch = scratch
        self.word_size = word_size
        self.entry_label = entry_label

        self._expressions = ExpressionsGenerator(self)
        self._bindings = BindingsGenerator(self)

    # ========================================================================
    # Entry Points
    # ========================================================================

    def generate(self, expr: Expr, env: Optional[Environment] = None,
                 cursor: Optional[int] = None) -> List[str]:
        """Generate the instruction list leaving expr's value in the accumulator.

        Defaults to an empty environment and the first stack slot.
        """
        if env is None:
            env = Environment()
        if cursor is None:
            cursor = self.word_size
        return self._generate_expression(expr, env, cursor)

    def emit_program(self, expr: Expr) -> str:
        """Generate code for a whole program and wrap it in the template"""
        instrs = self.generate(expr)
        body = "\n".join(f"  {instr}" for instr in instrs)
        return PROGRAM_TEMPLATE.format(entry=self.entry_label, body=body)

    # ========================================================================
    # Dispatcher
    # ========================================================================

    def _generate_expression(self, expr: Expr, env: Environment, cursor: int) -> List[str]:
        if isinstance(expr, Number):
            return [self.load_immediate(expr.value)]
        elif isinstance(expr, Variable):
            return [self.load_slot(env.lookup(expr.name))]
        elif isinstance(expr, Binding):
            return self._bindings.generate_let(expr, env, cursor)
        elif isinstance(expr, UnaryExpr):
            return self._expressions.generate_unary(expr, env, cursor)
        elif isinstance(expr, BinaryExpr):
            return self._expressions.generate_binary(expr, env, cursor)
        else:
            raise RuntimeError(f"Unknown expression node: {type(expr).__name__}")

    # ========================================================================
    # Instruction Helpers
    # ========================================================================

    def slot(self, offset: int) -> str:
        return f"[rsp - {offset}]"

    def load_immediate(self, value: int) -> str:
        return f"mov {self.accumulator}, {value}"

    def load_slot(self, offset: int) -> str:
        return f"mov {self.accumulator}, {self.slot(offset)}"

    def store_slot(self, offset: int) -> str:
        return f"mov {self.slot(offset)}, {self.accumulator}"
