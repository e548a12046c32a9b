"""
Boa x86-64 Code Generator Package

This package generates NASM-syntax x86-64 assembly text from a Boa AST.

Structure:
    codegen/
    ├── __init__.py      # Public exports (this file)
    ├── core.py          # CodeGenerator, Environment, program template
    ├── expressions.py   # Unary and binary operators
    └── bindings.py      # let expressions and stack-slot assignment
"""

from codegen.core import CodeGenerator, Environment, PROGRAM_TEMPLATE

__all__ = ['CodeGenerator', 'Environment', 'PROGRAM_TEMPLATE']
