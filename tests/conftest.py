"""
Pytest configuration and fixtures for Boa compiler tests.

Provides reusable fixtures for:
- Compiling Boa programs through the boac.py driver
- Evaluating generated assembly with the x86 subset evaluator
- Assembling and running programs natively (when nasm and cc exist)
- Checking compilation errors
"""

import pytest
import platform
import shutil
import subprocess
import tempfile
import os
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from boac import compile_source
from x86_eval import run_program


class CompilerResult:
    """Result of running boac.py on a Boa program."""

    def __init__(self, compile_success: bool, compile_output: str,
                 returncode: int, asm: str = None):
        self.compile_success = compile_success
        self.compile_output = compile_output
        self.returncode = returncode
        self.asm = asm


@pytest.fixture
def compiler_root():
    """Path to compiler root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def compile_boa(compiler_root):
    """
    Fixture that returns a function compiling Boa source with boac.py.

    Usage:
        result = compile_boa("(+ 1 2)")
        assert result.compile_success
        assert "add rax, [rsp - 8]" in result.asm
    """
    def _compile(source: str) -> CompilerResult:
        with tempfile.TemporaryDirectory() as tmpdir:
            source_path = os.path.join(tmpdir, "test.snek")
            asm_path = os.path.join(tmpdir, "test.s")

            with open(source_path, 'w') as f:
                f.write(source)

            boac = os.path.join(compiler_root, "boac.py")
            result = subprocess.run(
                [sys.executable, boac, source_path, asm_path],
                capture_output=True,
                text=True,
                cwd=compiler_root
            )

            asm = None
            if os.path.exists(asm_path):
                with open(asm_path) as f:
                    asm = f.read()

            return CompilerResult(
                compile_success=result.returncode == 0,
                compile_output=result.stdout + result.stderr,
                returncode=result.returncode,
                asm=asm
            )

    return _compile


@pytest.fixture
def run_asm():
    """
    Fixture that compiles source in-process and evaluates the result.

    Usage:
        assert run_asm("(- 10 3)") == 7
    """
    def _run(source: str) -> int:
        return run_program(compile_source(source))

    return _run


@pytest.fixture
def expect_asm(compile_boa):
    """
    Fixture that compiles code and asserts the emitted instructions.

    Usage:
        expect_asm("(add1 5)", ["mov rax, 5", "add rax, 1"])
    """
    def _expect(source: str, instructions):
        result = compile_boa(source)
        assert result.compile_success, f"Compilation failed:\n{result.compile_output}"
        expected = (
            "section .text\n"
            "global our_code_starts_here\n"
            "our_code_starts_here:\n"
            + "".join(f"  {instr}\n" for instr in instructions)
            + "  ret\n"
        )
        assert result.asm == expected, \
            f"Assembly mismatch:\nExpected:\n{expected}\nGot:\n{result.asm}"

    return _expect


@pytest.fixture
def expect_compile_error(compile_boa):
    """
    Fixture that verifies compilation fails with expected error.

    Usage:
        expect_compile_error("(let ((x 1) (x 2)) x)", "Duplicate binding")
    """
    def _expect(source: str, error_substring: str = None):
        result = compile_boa(source)
        assert not result.compile_success, \
            f"Expected compilation to fail but it succeeded.\nOutput: {result.compile_output}"
        assert result.asm is None, "Failed compilation must not leave an output file"
        if error_substring:
            assert error_substring.lower() in result.compile_output.lower(), \
                f"Expected error containing '{error_substring}' but got:\n{result.compile_output}"

    return _expect


def _native_toolchain_available() -> bool:
    return (
        sys.platform.startswith("linux")
        and platform.machine() in ("x86_64", "AMD64")
        and shutil.which("nasm") is not None
        and shutil.which("cc") is not None
    )


@pytest.fixture
def native_run(compiler_root):
    """
    Fixture that assembles, links and runs a Boa program natively.

    Skips unless nasm and cc are available on x86-64 Linux.

    Usage:
        assert native_run("(+ 1 2)") == 3
    """
    if not _native_toolchain_available():
        pytest.skip("nasm/cc toolchain for x86-64 Linux not available")

    start_c = os.path.join(compiler_root, "tests", "runtime", "start.c")

    def _run(source: str) -> int:
        with tempfile.TemporaryDirectory() as tmpdir:
            asm_path = os.path.join(tmpdir, "prog.s")
            obj_path = os.path.join(tmpdir, "prog.o")
            exe_path = os.path.join(tmpdir, "prog")

            with open(asm_path, 'w') as f:
                f.write(compile_source(source))

            subprocess.run(["nasm", "-f", "elf64", asm_path, "-o", obj_path],
                           check=True, capture_output=True)
            subprocess.run(["cc", start_c, obj_path, "-o", exe_path],
                           check=True, capture_output=True)
            result = subprocess.run([exe_path], capture_output=True, text=True, check=True)
            return int(result.stdout.strip())

    return _run
