#!/usr/bin/env python3
"""
Boa Compiler

Usage:
    python boac.py <input.snek> <output.s>

Reads one Boa expression and writes an x86-64 (NASM) assembly unit that
defines our_code_starts_here, leaving the expression's value in rax.

Examples:
    python boac.py add.snek add.s
    nasm -f elf64 add.s -o add.o
"""

import sys
import os
import argparse
import tempfile

from ast_builder import ASTBuilder
from ast_nodes import Expr
from boa_errors import CompileError
from boa_reader import read_sexp, read_file
from codegen import CodeGenerator


# Builder and generator recurse once per nesting level.
RECURSION_LIMIT = 10000


def build_ast(sexp) -> Expr:
    return ASTBuilder().build(sexp)


def generate_assembly(program: Expr) -> str:
    return CodeGenerator().emit_program(program)


def compile_source(source: str) -> str:
    """Compile Boa source text to a complete assembly program."""
    return generate_assembly(build_ast(read_sexp(source)))


def write_output(output_path: str, text: str):
    """Write text to output_path all-or-nothing.

    The program goes to a temporary file beside the destination which is
    then renamed over it, so a failed run never leaves a truncated file.
    """
    directory = os.path.dirname(os.path.abspath(output_path))
    fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".boac-", suffix=".s")
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(text)
        os.replace(tmp_path, output_path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


def compile_boa(source_path: str, output_path: str):
    """
    Compile a Boa source file.

    Args:
        source_path: Path to the .snek source file
        output_path: Path of the assembly file to write
    """
    print(f"Parsing {source_path}...")
    sexp = read_file(source_path)

    print("Building AST...")
    program = build_ast(sexp)

    print("Generating assembly...")
    asm_program = generate_assembly(program)

    write_output(output_path, asm_program)
    print(f"Successfully compiled to {output_path}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="boac",
        description="Boa Compiler",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s add.snek add.s      Compile add.snek to NASM assembly in add.s
        """
    )

    parser.add_argument("input", help="Source file (.snek)")
    parser.add_argument("output", help="Assembly output file (.s)")

    args = parser.parse_args(argv)

    sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))

    try:
        compile_boa(args.input, args.output)
    except CompileError as e:
        print(f"Compilation failed: {e}", file=sys.stderr)
        sys.exit(1)
    except RecursionError:
        print("Compilation failed: expression is nested too deeply", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"I/O error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Internal compiler error: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        sys.exit(2)


if __name__ == "__main__":
    main()
