from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .bf_interpreter import TokenInterpreter, format_tape
from .compiler import BrainfuckCompiler
from .config import CompilerOptions
from .errors import CompileError, StepLimitExceeded
from .optimizer import optimize


def _read_source(path: str) -> str:
    source_path = Path(path)
    if not source_path.exists():
        raise FileNotFoundError(f"Source file not found: {path}")
    return source_path.read_text(encoding="utf-8")


def _write_output(path: str, data: str) -> None:
    output_path = Path(path)
    output_path.write_text(data, encoding="utf-8")


def _verify(compiler: BrainfuckCompiler, source: str, max_steps: Optional[int]) -> Optional[str]:
    """Interpret the raw and the optimized token tree and compare final tapes."""
    tokens = compiler.parse(source)
    optimized = optimize(tokens, nested_leading_elision=compiler.options.nested_leading_elision)
    raw_run = TokenInterpreter(tape_length=compiler.options.tape_length, print_output=False)
    optimized_run = TokenInterpreter(tape_length=compiler.options.tape_length, print_output=False)
    raw_run.run(tokens, max_steps=max_steps)
    optimized_run.run(optimized, max_steps=max_steps)
    if raw_run.tape != optimized_run.tape:
        return (
            "Optimized program diverges from source:\n"
            f"  raw:       {format_tape(raw_run.tape)}\n"
            f"  optimized: {format_tape(optimized_run.tape)}"
        )
    return None


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Brainfuck to C compiler")
    parser.add_argument("-i", "--input", required=True, help="Path to the Brainfuck source file")
    parser.add_argument("-o", "--output", required=True, help="Destination file for the emitted C")
    parser.add_argument(
        "--no-optimize",
        action="store_true",
        help="Skip the peephole optimizer",
    )
    parser.add_argument(
        "--legacy-elision",
        action="store_true",
        help="Also drop loops at the start of every loop body, as the original tool did",
    )
    parser.add_argument(
        "--no-wrap",
        action="store_true",
        help="Do not wrap the pointer around the tape in the generated C",
    )
    parser.add_argument(
        "--run",
        action="store_true",
        help="Interpret the program after compiling and print its output",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Check that the optimized program leaves the same tape as the source",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="Step budget for --run and --verify",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Report compilation progress")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    try:
        source_text = _read_source(args.input)
    except FileNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    options = CompilerOptions(
        optimize=not args.no_optimize,
        nested_leading_elision=args.legacy_elision,
        wrap_pointer=not args.no_wrap,
    )
    compiler = BrainfuckCompiler(options)
    try:
        result = compiler.compile_result(source_text)
    except CompileError as exc:
        print(f"Compilation error: {exc}", file=sys.stderr)
        return 1

    try:
        if args.verify:
            mismatch = _verify(compiler, source_text, args.max_steps)
            if mismatch is not None:
                print(mismatch, file=sys.stderr)
                return 1
    except (CompileError, StepLimitExceeded) as exc:
        print(f"Verification error: {exc}", file=sys.stderr)
        return 1

    _write_output(args.output, result.code)

    try:
        if args.run:
            interpreter = TokenInterpreter(tape_length=options.tape_length)
            sys.stdout.write(interpreter.run(result.optimized, max_steps=args.max_steps))
    except (CompileError, StepLimitExceeded) as exc:
        print(f"Execution error: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
