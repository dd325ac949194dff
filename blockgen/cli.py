"""Command-line entry point: Blockly workspace JSON in, source code out."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from .blocks import load_workspace
from .errors import GenerationError, WorkspaceError
from .generator import Generator, Target
from .haxe import HAXE
from .injection import Injection

TARGETS: dict[str, Target] = {
    "haxe": HAXE,
}

USAGE: str = """\
blockgen [OPTIONS] [INPUT] [-o OUTPUT]

Reads a Blockly workspace serialized as JSON from INPUT (or stdin) and
writes generated source code.

Options:
  --target TARGET          Output language: haxe
  --statement-prefix TEXT  Emit TEXT before every statement (%1 = block id)
  --statement-suffix TEXT  Emit TEXT after every statement (%1 = block id)
  --loop-trap TEXT         Emit TEXT at the top of every loop iteration
  --one-based              Index lists and text from 1 (overrides workspace)
  --zero-based             Index lists and text from 0 (overrides workspace)
  -o, --output FILE        Write output to FILE instead of stdout
  --verbose                Log generation progress to stderr
  --help                   Show this help message
"""


class Options:
    """Parsed command-line options."""

    def __init__(self) -> None:
        self.target: str = "haxe"
        self.statement_prefix: str | None = None
        self.statement_suffix: str | None = None
        self.loop_trap: str | None = None
        self.one_based: bool | None = None
        self.verbose: bool = False
        self.input_file: str | None = None
        self.output_file: str | None = None

    def injection(self) -> Injection:
        return Injection(
            statement_prefix=_snippet(self.statement_prefix),
            statement_suffix=_snippet(self.statement_suffix),
            loop_trap=_snippet(self.loop_trap),
        )


def _snippet(text: str | None) -> str | None:
    """Snippets are whole statements, so they end with a newline."""
    if not text:
        return None
    if not text.endswith("\n"):
        text += "\n"
    return text


class CliError(Exception):
    """The workspace could not be read or the generated code not written."""


def load_source(input_file: str | None) -> str:
    """Workspace text from input_file, or from stdin when it is None.

    A leading UTF-8 byte order mark is dropped.
    """
    if input_file is None:
        raw = sys.stdin.buffer.read()
    else:
        try:
            raw = Path(input_file).read_bytes()
        except OSError as e:
            raise CliError("cannot read workspace '" + input_file + "': " + _reason(e)) from e
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise CliError("workspace is not valid utf-8 (byte " + str(e.start) + ")") from e


def save_output(code: str, output_file: str | None) -> None:
    """Write generated code to output_file, or to stdout when it is None."""
    if output_file is None:
        sys.stdout.write(code)
        return
    try:
        Path(output_file).write_text(code, encoding="utf-8")
    except OSError as e:
        raise CliError("cannot write generated code to '" + output_file + "': " + _reason(e)) from e


def _reason(e: OSError) -> str:
    return (e.strerror or "I/O error").lower()


def _take_value(args: list[str], i: int) -> str:
    if i + 1 >= len(args):
        print("error: " + args[i] + " requires an argument", file=sys.stderr)
        sys.exit(2)
    return args[i + 1]


def parse_args(args: list[str]) -> Options:
    """Parse command-line arguments. Exits with status 2 on usage errors."""
    opts = Options()
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            sys.exit(0)
        elif arg == "--target":
            opts.target = _take_value(args, i)
            i += 2
        elif arg == "--statement-prefix":
            opts.statement_prefix = _take_value(args, i)
            i += 2
        elif arg == "--statement-suffix":
            opts.statement_suffix = _take_value(args, i)
            i += 2
        elif arg == "--loop-trap":
            opts.loop_trap = _take_value(args, i)
            i += 2
        elif arg == "-o" or arg == "--output":
            opts.output_file = _take_value(args, i)
            i += 2
        elif arg == "--one-based":
            opts.one_based = True
            i += 1
        elif arg == "--zero-based":
            opts.one_based = False
            i += 1
        elif arg == "--verbose":
            opts.verbose = True
            i += 1
        elif arg.startswith("-"):
            print("error: unknown flag '" + arg + "'", file=sys.stderr)
            sys.exit(2)
        else:
            if opts.input_file is not None:
                print("error: unexpected argument '" + arg + "'", file=sys.stderr)
                sys.exit(2)
            opts.input_file = arg
            i += 1
    if opts.target not in TARGETS:
        print("error: unknown target '" + opts.target + "'", file=sys.stderr)
        sys.exit(2)
    return opts


def run(source: str, opts: Options) -> tuple[int, str]:
    """Generate code for one workspace document. Returns (exit_code, output)."""
    try:
        data = json.loads(source)
    except ValueError as e:
        print("error: invalid JSON: " + str(e), file=sys.stderr)
        return (1, "")
    try:
        workspace = load_workspace(data)
    except WorkspaceError as e:
        print("error: " + str(e), file=sys.stderr)
        return (1, "")
    if opts.one_based is not None:
        workspace.one_based_index = opts.one_based
    generator = Generator(TARGETS[opts.target], opts.injection())
    try:
        output = generator.workspace_to_code(workspace)
    except GenerationError as e:
        print("error: " + e.msg, file=sys.stderr)
        return (1, "")
    return (0, output)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    opts = parse_args(sys.argv[1:] if argv is None else argv)
    if opts.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s", stream=sys.stderr)
    try:
        source = load_source(opts.input_file)
    except CliError as e:
        print("error: " + str(e), file=sys.stderr)
        return 1
    if len(source.strip()) == 0:
        print("error: no input provided", file=sys.stderr)
        return 2
    exit_code, output = run(source, opts)
    if exit_code != 0:
        return exit_code
    if output:
        try:
            save_output(output, opts.output_file)
        except CliError as e:
            print("error: " + str(e), file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
