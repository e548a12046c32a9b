"""
Boa AST Builder

Walks the generic S-expression tree produced by boa_reader and constructs
the AST, enforcing the concrete grammar and the reserved-word rules.
"""

from typing import Any, List as PyList, Tuple

from ast_nodes import (
    Expr, Number, Variable, Binding, UnaryExpr, BinaryExpr,
    UnaryOp, BinaryOp, RESERVED_WORDS, INT_MIN, INT_MAX, is_valid_identifier,
)
from boa_errors import GrammarError, ReservedWordError, LiteralRangeError
from boa_reader import is_symbol, symbol_name, format_sexp


UNARY_KEYWORDS = {op.value: op for op in UnaryOp}
BINARY_OPERATORS = {op.value: op for op in BinaryOp}


class ASTBuilder:
    """Converts a generic S-expression tree to a Boa AST"""

    def build(self, node: Any) -> Expr:
        """Build the AST for one expression"""
        # bool is an int subclass but never an integer literal
        if isinstance(node, bool):
            raise GrammarError(f"Invalid expression: {format_sexp(node)}")
        if isinstance(node, int):
            return self.visit_number(node)
        if is_symbol(node):
            return self.visit_identifier(node)
        if isinstance(node, list):
            return self.visit_list(node)
        raise GrammarError(f"Invalid expression: {format_sexp(node)}")

    # ========================================================================
    # Atoms
    # ========================================================================

    def visit_number(self, value: int) -> Number:
        if value < INT_MIN or value > INT_MAX:
            raise LiteralRangeError(value)
        return Number(value)

    def visit_identifier(self, node) -> Variable:
        return Variable(self._identifier_name(node, "Invalid expression"))

    def _identifier_name(self, node, context: str) -> str:
        """Validate an atom in identifier position and return its name"""
        if not is_symbol(node):
            raise GrammarError(f"{context}: {format_sexp(node)}")
        name = symbol_name(node)
        if name in RESERVED_WORDS:
            raise ReservedWordError(name)
        if not is_valid_identifier(name):
            raise GrammarError(f"{context}: {name}")
        return name

    # ========================================================================
    # Lists
    # ========================================================================

    def visit_list(self, items: PyList[Any]) -> Expr:
        """Dispatch on the keyword or operator heading a list"""
        if not items or not is_symbol(items[0]):
            raise GrammarError(f"Invalid expression: {format_sexp(items)}")

        head = symbol_name(items[0])

        if head == "let" and len(items) == 3 and isinstance(items[1], list):
            return self.visit_let(items[1], items[2])

        if head in UNARY_KEYWORDS and len(items) == 2:
            return UnaryExpr(UNARY_KEYWORDS[head], self.build(items[1]))

        if head in BINARY_OPERATORS and len(items) == 3:
            return BinaryExpr(
                BINARY_OPERATORS[head],
                self.build(items[1]),
                self.build(items[2]),
            )

        raise GrammarError(f"Invalid expression: {format_sexp(items)}")

    def visit_let(self, bindings: PyList[Any], body: Any) -> Binding:
        """Visit (let ((<identifier> <expr>)+) <expr>)

        Pairs are built in textual order; the code generator evaluates
        them in that same order. Duplicate names are not rejected here.
        """
        if not bindings:
            raise GrammarError("Invalid binding list: let requires at least one binding")

        pairs: PyList[Tuple[str, Expr]] = []
        for binding in bindings:
            pairs.append(self.visit_binding(binding))

        return Binding(tuple(pairs), self.build(body))

    def visit_binding(self, binding: Any) -> Tuple[str, Expr]:
        if not isinstance(binding, list) or len(binding) != 2:
            raise GrammarError(f"Invalid binding: {format_sexp(binding)}")
        name = self._identifier_name(binding[0], "Invalid binding")
        return name, self.build(binding[1])
