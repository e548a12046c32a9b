"""
Boa S-expression Reader

Turns source text into the generic tree the AST builder consumes:
    int            integer atom
    float          non-integer numeric atom (rejected by the builder)
    Symbol         bare word: identifiers, keywords and operators
    str            quoted string atom (rejected by the builder)
    list           parenthesized list

Parsing itself is delegated to sexpdata.
"""

from typing import Any

import sexpdata
from sexpdata import Symbol

from boa_errors import SyntaxReadError


# Every bare word must reach the builder as a Symbol, so sexpdata's
# nil / t / false aliases are switched off.
_PARSER_OPTIONS = {"nil": None, "true": None, "false": None}


def read_sexp(text: str) -> Any:
    """Parse text holding exactly one S-expression."""
    # sexpdata signals malformed text with assorted exception types
    # (ExpectClosingBracket, AttributeError, IndexError, ...).
    try:
        forms = sexpdata.parse(text, **_PARSER_OPTIONS)
    except Exception as e:
        raise SyntaxReadError(f"Parse error: {e}") from e

    if len(forms) == 0:
        raise SyntaxReadError("Parse error: no expression found")
    if len(forms) > 1:
        raise SyntaxReadError(
            f"Parse error: expected a single expression, found {len(forms)}"
        )
    return forms[0]


def read_file(path: str) -> Any:
    """Read a UTF-8 source file and parse its single S-expression."""
    with open(path, "r", encoding="utf-8") as f:
        try:
            text = f.read()
        except UnicodeDecodeError as e:
            raise SyntaxReadError(f"Parse error: {path} is not valid UTF-8 ({e})") from e
    return read_sexp(text)


def is_symbol(node: Any) -> bool:
    return isinstance(node, Symbol)


def symbol_name(node: Symbol) -> str:
    return str(node)


def format_sexp(node: Any) -> str:
    """Render a generic node back to text for error messages"""
    return sexpdata.dumps(node)
