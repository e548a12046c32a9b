"""
Boa AST Node Definitions

Abstract syntax for the Boa expression language:

    <expr> :=
      | <number>
      | <identifier>
      | (let ((<identifier> <expr>)+) <expr>)
      | (add1 <expr>)
      | (sub1 <expr>)
      | (negate <expr>)
      | (+ <expr> <expr>)
      | (- <expr> <expr>)
      | (* <expr> <expr>)

    <identifier> := [a-zA-Z][a-zA-Z0-9]*  (but not reserved words)

Nodes are immutable once built.
"""

import re
from dataclasses import dataclass
from typing import Tuple
from enum import Enum


# ============================================================================
# Language Constants
# ============================================================================

RESERVED_WORDS = frozenset({"let", "add1", "sub1", "negate"})

IDENTIFIER_PATTERN = re.compile(r"[a-zA-Z][a-zA-Z0-9]*")

INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1


# ============================================================================
# Enums
# ============================================================================

class UnaryOp(Enum):
    INCREMENT = "add1"
    DECREMENT = "sub1"
    NEGATE = "negate"


class BinaryOp(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"


# ============================================================================
# Expression Nodes
# ============================================================================

@dataclass(frozen=True)
class Expr:
    """Base class for expressions"""
    pass


@dataclass(frozen=True)
class Number(Expr):
    value: int

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class Variable(Expr):
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Binding(Expr):
    """let expression: pairs are installed left to right, then body runs"""
    bindings: Tuple[Tuple[str, Expr], ...]
    body: Expr

    def __str__(self):
        pairs = " ".join(f"({name} {value})" for name, value in self.bindings)
        return f"(let ({pairs}) {self.body})"


@dataclass(frozen=True)
class UnaryExpr(Expr):
    op: UnaryOp
    operand: Expr

    def __str__(self):
        return f"({self.op.value} {self.operand})"


@dataclass(frozen=True)
class BinaryExpr(Expr):
    op: BinaryOp
    left: Expr
    right: Expr

    def __str__(self):
        return f"({self.op.value} {self.left} {self.right})"


def is_valid_identifier(name: str) -> bool:
    """True if name is lexically an identifier and not a keyword"""
    return IDENTIFIER_PATTERN.fullmatch(name) is not None and name not in RESERVED_WORDS
