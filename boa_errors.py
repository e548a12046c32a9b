"""
Boa Compiler Errors

Every failure the compiler can detect is fatal. Errors are raised as
exceptions from the reader, the AST builder and the code generator, and
only the driver (boac.py) turns them into an exit status.
"""


class CompileError(Exception):
    """Base class for all compilation errors"""
    kind = "compile"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SyntaxReadError(CompileError):
    """Source text is not exactly one well-formed S-expression"""
    kind = "syntax"


# ============================================================================
# AST Builder Errors
# ============================================================================

class GrammarError(CompileError):
    """S-expression does not match any production of the grammar"""
    kind = "grammar"


class ReservedWordError(CompileError):
    """A keyword was used where an identifier is expected"""
    kind = "reserved-word"

    def __init__(self, name: str):
        super().__init__(f"Invalid use of keyword as identifier: {name}")
        self.name = name


class LiteralRangeError(CompileError):
    """Integer literal does not fit in a signed 32-bit integer"""
    kind = "literal-range"

    def __init__(self, value: int):
        super().__init__(f"Integer literal out of range: {value}")
        self.value = value


# ============================================================================
# Code Generator Errors
# ============================================================================

class UnboundIdentifierError(CompileError):
    kind = "unbound-identifier"

    def __init__(self, name: str):
        super().__init__(f"Unbound variable identifier {name}")
        self.name = name


class DuplicateBindingError(CompileError):
    kind = "duplicate-binding"

    def __init__(self, name: str):
        super().__init__(f"Duplicate binding: {name}")
        self.name = name
