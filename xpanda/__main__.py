"""CLI entry point for Xpanda.

Usage:
    xpanda [options] [-- POSITIONAL...]
    xpanda [options] --emit-ast [-- POSITIONAL...]
    xpanda [options] --ast AST_JSON_FILE [-- POSITIONAL...]

Copies the input to the output with every variable expanded:

  $VAR, ${VAR}        value of VAR, or '' if unset
  ${VAR-default}      value of VAR, or `default` if unset
  ${VAR:-default}     value of VAR, or `default` if unset or empty
  ${VAR+alternative}  `alternative` if VAR is set, otherwise ''
  ${VAR:+alternative} `alternative` if VAR is set and non-empty, otherwise ''
  ${VAR?error}        value of VAR, or fail with `error` if unset
  ${VAR:?error}       value of VAR, or fail with `error` if unset or empty
  ${#VAR}             length of the value of VAR
  ${#}                number of positional variables
  ${!VAR}             value of the variable named by the value of VAR
  ${VAR^} ${VAR^^}    upper case the first character / all characters
  ${VAR,} ${VAR,,}    lower case the first character / all characters
  ${VAR~} ${VAR~~}    toggle the case of the first character / all characters
  $1, ${2}, ...       positional variables, $0 is all of them joined by spaces
  $$                  a literal $

Variables come from, lowest precedence first: the environment, var files
(-f) and -v definitions. The environment is only used by default when no
other variables are given. Input is processed line by line; the first
failure is reported as `line:col message` on standard error and the
program exits with status 1.
"""

import argparse
import json
import sys
from contextlib import ExitStack
from pathlib import Path
from typing import Iterator, Optional, TextIO

from . import __version__
from .ast_json import ast_to_obj, ast_from_obj
from .errors import XpandaError, VarSyntaxError
from .expander import Xpanda
from .varfile import parse_named_arg, read_var_file


def parse_bool(value: str) -> bool:
    lowered = value.lower()
    if lowered in ('true', '1', 'yes'):
        return True
    if lowered in ('false', '0', 'no'):
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value: {value!r}")


def named_arg(value: str):
    try:
        return parse_named_arg(value)
    except VarSyntaxError as e:
        raise argparse.ArgumentTypeError(e.message)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='xpanda',
        description="Unix shell-like parameter expansion/variable substitution",
    )
    parser.add_argument('-u', '--no-unset', action='store_true',
                        help='fail on unset variables that have no default')
    parser.add_argument('-v', '--var', dest='named_vars', action='append', default=[],
                        type=named_arg, metavar='NAME=VALUE',
                        help='add a named variable (can be repeated)')
    parser.add_argument('-f', '--var-file', dest='var_files', action='append', default=[],
                        metavar='FILE', help='read NAME=VALUE lines from a file (can be repeated)')
    parser.add_argument('-e', '--env-vars', nargs='?', const=True, default=None,
                        type=parse_bool, metavar='BOOL',
                        help='also source variables from the environment')
    parser.add_argument('-i', '--input', metavar='FILE', help='read from FILE instead of standard input')
    parser.add_argument('-o', '--output', metavar='FILE',
                        help='append to FILE instead of writing to standard output (--emit-ast replaces it)')
    parser.add_argument('-d', '--debug', action='count', default=0,
                        help='increase debug verbosity (can be repeated)')
    parser.add_argument('--debug-file', metavar='FILE', help='write debug output to FILE')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', action='store_true', help='emit the AST of every input line as JSON')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='expand a previously emitted AST JSON file')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('positional_vars', nargs='*', metavar='POSITIONAL',
                        help='positional variables, referenced as $1, $2, ...')
    return parser


def fail(message: str) -> None:
    print(message, file=sys.stderr)
    sys.exit(1)


def report(error: XpandaError, line_offset: int = 0) -> None:
    fail(f"{error.line + line_offset}:{error.col} {error.message}")


def build_xpanda(args: argparse.Namespace, debug_fp: Optional[TextIO]) -> Xpanda:
    has_user_vars = bool(args.var_files or args.named_vars or args.positional_vars)
    use_env_vars = args.env_vars if args.env_vars is not None else not has_user_vars
    builder = Xpanda.builder().no_unset(args.no_unset).debug(args.debug, debug_fp)
    if use_env_vars:
        builder.with_env_vars()
    for path in args.var_files:
        try:
            builder.with_named_vars(read_var_file(path))
        except XpandaError as e:
            fail(f"Failed to read var file: {e.message}")
    builder.with_named_vars(dict(args.named_vars))
    builder.with_positional_vars(args.positional_vars)
    return builder.build()


def read_lines(infile: TextIO) -> Iterator[str]:
    try:
        yield from infile
    except (OSError, UnicodeDecodeError) as e:
        fail(f"Failed to read input: {e}")


def expand_lines(xpanda: Xpanda, infile: TextIO, outfile: TextIO) -> None:
    for number, line in enumerate(read_lines(infile), start=1):
        try:
            text = xpanda.expand(line)
        except XpandaError as e:
            report(e, number - 1)
        outfile.write(text)


def emit_ast(xpanda: Xpanda, infile: TextIO, outfile: TextIO) -> None:
    asts = []
    for number, line in enumerate(read_lines(infile), start=1):
        try:
            asts.append(ast_to_obj(xpanda.parse(line)))
        except XpandaError as e:
            report(e, number - 1)
    json.dump(asts, outfile, ensure_ascii=False, indent=2)
    outfile.write('\n')


def expand_ast_file(xpanda: Xpanda, ast_path: Path, outfile: TextIO) -> None:
    with open(ast_path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except (json.JSONDecodeError, RecursionError) as e:
            fail(f"Error: {ast_path} is not valid JSON: {e}")
    if not isinstance(data, list):
        fail(f"Error: {ast_path} does not hold a list of ASTs")
    for number, obj in enumerate(data, start=1):
        try:
            ast = ast_from_obj(obj)
        except (KeyError, TypeError, ValueError, RecursionError) as e:
            fail(f"Error: invalid AST #{number} in {ast_path}: {e}")
        try:
            text = xpanda.evaluate(ast)
        except XpandaError as e:
            report(e, number - 1)
        outfile.write(text)


def main(argv: Optional[list] = None) -> None:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    with ExitStack() as stack:
        debug_fp = None
        if args.debug_file:
            debug_fp = stack.enter_context(open(args.debug_file, 'w', encoding='utf-8'))
        xpanda = build_xpanda(args, debug_fp)

        outfile = sys.stdout
        if args.output:
            # --emit-ast writes one JSON document, so it replaces the file.
            mode = 'w' if args.emit_ast else 'a'
            outfile = stack.enter_context(open(args.output, mode, encoding='utf-8', newline=''))

        # Expand from AST JSON
        if args.ast:
            ast_path = Path(args.ast)
            if not ast_path.exists():
                fail(f"Error: file {ast_path} not found")
            expand_ast_file(xpanda, ast_path, outfile)
            return

        infile = sys.stdin
        if args.input:
            input_path = Path(args.input)
            if not input_path.exists():
                fail(f"Error: file {input_path} not found")
            infile = stack.enter_context(open(input_path, 'r', encoding='utf-8', newline=''))

        if args.emit_ast:
            emit_ast(xpanda, infile, outfile)
        else:
            expand_lines(xpanda, infile, outfile)


if __name__ == '__main__':
    main()
