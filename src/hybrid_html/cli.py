#!/usr/bin/env python3
"""Command-line entry point for the hybrid HTML compiler."""

from __future__ import annotations

import argparse
import os
import sys
import traceback

from . import __version__
from .compiler import compile_hybrid_html

PROG = "hybrid"
DEBUG_ENV_VARS = ("HYBRID_DEBUG", "DEBUG")

USAGE = f"""
Hybrid HTML Compiler

Usage:
  {PROG} compile <input> <output>     Compile a hybrid HTML file
  {PROG} --help                       Show this help message
  {PROG} --version                    Show version

Examples:
  {PROG} compile index.hybrid.html dist.html
  {PROG} compile src/app.hybrid.html build/app.html

Options:
  <input>              Path to the input .hybrid.html file
  <output>             Path to the output compiled .html file
  --manifest PATH      Also write a JSON build manifest to PATH
  --fail-on-missing    Exit 3 if any reference was missing or circular
  --                   End of options; use before an input path starting with "-"
"""


def debug_enabled() -> bool:
    for name in DEBUG_ENV_VARS:
        if os.environ.get(name):
            return True
    return False


class UsageError(Exception):
    pass


class _CompileArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def build_compile_parser() -> argparse.ArgumentParser:
    p = _CompileArgumentParser(
        prog=f"{PROG} compile",
        description="Inline components, scripts and images of a hybrid HTML file.",
        add_help=False,
    )
    p.add_argument("input", nargs="?", help="Path to the input .hybrid.html file")
    p.add_argument("output", nargs="?", help="Path to the output compiled .html file")
    # Trailing positionals after <output> are accepted and ignored.
    p.add_argument("extra", nargs="*", help=argparse.SUPPRESS)
    p.add_argument("--manifest", default=None, help="Write a JSON build manifest to this path.")
    p.add_argument(
        "--fail-on-missing",
        action="store_true",
        help="Exit nonzero if any reference was missing or circular (output is still written).",
    )
    return p


def _run_compile(rest: list[str]) -> int:
    try:
        args = build_compile_parser().parse_args(rest)
    except UsageError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        print(f"\nUsage: {PROG} compile <input> <output> [--manifest PATH] [--fail-on-missing]")
        return 1

    if not args.input or not args.output:
        print("ERROR: Both input and output files are required.", file=sys.stderr)
        print(f"\nUsage: {PROG} compile <input> <output>")
        print(f"Example: {PROG} compile index.hybrid.html dist.html")
        return 1

    try:
        result = compile_hybrid_html(args.input, args.output, manifest_path=args.manifest)
    except Exception as exc:  # noqa: BLE001
        print(f"ERROR: Compilation failed: {exc}", file=sys.stderr)
        if debug_enabled():
            traceback.print_exc()
        return 1

    print(f"Compiled to: {result.output_path}")
    print(f"Project root used: {result.project_root}")
    if args.manifest:
        print(f"Manifest: {args.manifest}")

    problems = result.missing + result.circular
    if args.fail_on_missing and problems:
        print(f"ERROR: {len(problems)} reference(s) could not be inlined", file=sys.stderr)
        return 3
    return 0


def main(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)

    if not args or "--help" in args or "-h" in args:
        print(USAGE)
        return 0

    if "--version" in args or "-v" in args:
        print(f"hybrid-html-compiler v{__version__}")
        return 0

    command, rest = args[0], args[1:]
    if command == "compile":
        return _run_compile(rest)

    print(f"ERROR: Unknown command: {command}", file=sys.stderr)
    print(f'Run "{PROG} --help" for usage information.')
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
