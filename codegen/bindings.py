"""
Bindings Module for the Boa Code Generator

Generates code for let expressions. Each bound name gets its own stack
slot, starting at the cursor and growing by one word per pair; the body
is generated with the first slot past the last binding as its cursor.
"""
from typing import TYPE_CHECKING, List, Set

from boa_errors import DuplicateBindingError

if TYPE_CHECKING:
    from codegen.core import CodeGenerator, Environment
    from ast_nodes import Binding


class BindingsGenerator:
    """Generates code for Boa let expressions."""

    def __init__(self, codegen: 'CodeGenerator'):
        self.codegen = codegen

    def generate_let(self, expr: 'Binding', env: 'Environment', cursor: int) -> List[str]:
        """Generate (let ((x e1) (y e2) ...) body).

        Each right-hand side sees the pairs before it but not its own name.
        """
        self.check_duplicates(expr)

        instrs: List[str] = []
        scope = env
        offset = cursor

        for name, value in expr.bindings:
            instrs.extend(self.codegen._generate_expression(value, scope, offset))
            instrs.append(self.codegen.store_slot(offset))
            scope = scope.extend(name, offset)
            offset += self.codegen.word_size

        instrs.extend(self.codegen._generate_expression(expr.body, scope, offset))
        return instrs

    def check_duplicates(self, expr: 'Binding'):
        seen: Set[str] = set()
        for name, _ in expr.bindings:
            if name in seen:
                raise DuplicateBindingError(name)
            seen.add(name)
