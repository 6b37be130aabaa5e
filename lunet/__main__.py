"""CLI entry point for the Lunet interpreter.

Usage:
    python -m lunet [-v|-vv|-vvv] <program_file>
    python -m lunet [-v...] -c '<source>'
    python -m lunet --emit-ast <program_file>
    python -m lunet --print-ast <program_file>
    python -m lunet [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  -c SOURCE     Run the given source text instead of a file
  --emit-ast    Parse the given .lun file and emit an AST JSON file
  --print-ast   Parse the given .lun file and print its parenthesised form
  --ast         Execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. Errors are printed to standard error as
`CODE: message (line:column)` and the exit status is 1.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import NoReturn

from .ast_json import ast_from_obj, ast_to_obj
from .errors import LunetError, ParseError
from .interpreter import Interpreter
from .parser import parse_program
from .printer import program_to_string
from .std.host import Host


def read_source(path_arg: str) -> str:
    program_file = Path(path_arg)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    with open(program_file, 'r', encoding='utf-8') as f:
        return f.read()


def too_deep(path: Path) -> NoReturn:
    print(f"Error: program in {path} is nested too deeply", file=sys.stderr)
    sys.exit(1)


def parse_or_exit(source: str, host: Host):
    try:
        return parse_program(source, report=lambda err: host.log(err.fmt()))
    except ParseError:
        # Already logged as they were found
        sys.exit(1)
    except LunetError as e:
        host.log(e.fmt())
        sys.exit(1)


def execute(program, host: Host, debug_level: int) -> None:
    interpreter = Interpreter(host=host, debug_level=debug_level)
    try:
        interpreter.run(program)
    except LunetError as e:
        host.log(e.fmt())
        sys.exit(1)
    finally:
        interpreter.close()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='lunet', description="Lunet language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('-c', dest='code', metavar='SOURCE', help='run SOURCE instead of a program file')
    group.add_argument('--emit-ast', metavar='LUNET_FILE', help='emit AST JSON for the given .lun file')
    group.add_argument('--print-ast', metavar='LUNET_FILE', help='print the parsed form of the given .lun file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Lunet program file (.lun) to execute')
    args = parser.parse_args(argv)
    host = Host()

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        ast_program = parse_or_exit(read_source(args.emit_ast), host)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        try:
            text = json.dumps(ast_to_obj(ast_program), ensure_ascii=False, indent=2)
        except RecursionError:
            too_deep(program_file)
        with open(out_path, 'w', encoding='utf-8') as out:
            out.write(text)
        print(str(out_path))
        return

    if args.print_ast:
        ast_program = parse_or_exit(read_source(args.print_ast), host)
        try:
            print(program_to_string(ast_program))
        except RecursionError:
            too_deep(Path(args.print_ast))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        if not ast_path.exists():
            print(f"Error: file {ast_path} not found", file=sys.stderr)
            sys.exit(1)
        try:
            with open(ast_path, 'r', encoding='utf-8') as f:
                ast_program = ast_from_obj(json.load(f))
        except RecursionError:
            too_deep(ast_path)
        execute(ast_program, host, args.v)
        return

    # Default: execute source text or file
    if args.code is not None:
        source = args.code
    elif args.program:
        source = read_source(args.program)
    else:
        parser.error('missing program file; or use -c/--emit-ast/--print-ast/--ast')
    execute(parse_or_exit(source, host), host, args.v)


if __name__ == '__main__':
    main()
