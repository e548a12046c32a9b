"""
Expressions Module for the Boa Code Generator

Operator expressions:
- Unary: add1, sub1, negate (applied to the accumulator in place)
- Binary: +, -, * (left operand spilled to the slot at the cursor)
"""
from typing import TYPE_CHECKING, List

from ast_nodes import UnaryOp, BinaryOp

if TYPE_CHECKING:
    from codegen.core import CodeGenerator, Environment
    from ast_nodes import UnaryExpr, BinaryExpr


class ExpressionsGenerator:
    """Generates code for Boa operator expressions."""

    def __init__(self, codegen: 'CodeGenerator'):
        """Initialize with reference to parent CodeGenerator instance."""
        self.codegen = codegen

    @property
    def acc(self) -> str:
        return self.codegen.accumulator

    @property
    def scratch(self) -> str:
        return self.codegen.scratch

    # ========================================================================
    # Unary Operators
    # ========================================================================

    def generate_unary(self, expr: 'UnaryExpr', env: 'Environment', cursor: int) -> List[str]:
        """Evaluate the operand, then adjust the accumulator."""
        instrs = self.codegen._generate_expression(expr.operand, env, cursor)

        if expr.op == UnaryOp.INCREMENT:
            instrs.append(f"add {self.acc}, 1")
        elif expr.op == UnaryOp.DECREMENT:
            instrs.append(f"sub {self.acc}, 1")
        elif expr.op == UnaryOp.NEGATE:
            instrs.append(f"imul {self.acc}, -1")
        else:
            raise RuntimeError(f"Unknown unary operator: {expr.op}")

        return instrs

    # ========================================================================
    # Binary Operators
    # ========================================================================

    def generate_binary(self, expr: 'BinaryExpr', env: 'Environment', cursor: int) -> List[str]:
        """Evaluate left, spill it to [rsp - cursor], evaluate right one slot
        further down, then combine.

        The accumulator holds the right operand when the operator runs, so
        subtraction goes through the scratch register to keep left - right.
        """
        word = self.codegen.word_size
        saved = self.codegen.slot(cursor)

        instrs = self.codegen._generate_expression(expr.left, env, cursor)
        instrs.append(self.codegen.store_slot(cursor))
        instrs.extend(self.codegen._generate_expression(expr.right, env, cursor + word))

        if expr.op == BinaryOp.ADD:
            instrs.append(f"add {self.acc}, {saved}")
        elif expr.op == BinaryOp.MUL:
            instrs.append(f"imul {self.acc}, {saved}")
        elif expr.op == BinaryOp.SUB:
            instrs.append(f"mov {self.scratch}, {saved}")
            instrs.append(f"sub {self.scratch}, {self.acc}")
            instrs.append(f"mov {self.acc}, {self.scratch}")
        else:
            raise RuntimeError(f"Unknown binary operator: {expr.op}")

        return instrs
