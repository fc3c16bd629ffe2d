"""CLI entry point for the Runel interpreter.

Usage:
    python -m runel [-v|-vv|-vvv] [--grammar] <program_file>
    python -m runel [-v...] [--grammar] -e <source>
    python -m runel [--grammar] --emit-ast <program_file>
    python -m runel [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  -e            Evaluate the given program text instead of a file
  --emit-ast    Parse the given .runel file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file
  --grammar     Parse with the Lark grammar instead of the hand-written parser

The value of the last expression is printed in its tagged form, e.g.
`Number(6)` or `String("ab")`. Nothing is printed if the program never
evaluated an expression. Debug information is written to `debug.txt` in
the current directory when verbosity is greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from . import parser as grammar
from .ast import Program
from .ast_json import ast_to_obj, ast_from_obj
from .errors import RunelError
from .interpreter import parse_program, Interpreter
from .types import Value, debug_repr


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def report(result: Optional[Value]) -> None:
    if result is not None:
        print(debug_repr(result))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='runel', description="Runel language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--grammar', action='store_true', help='parse with the Lark grammar front end')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('-e', dest='source', metavar='SOURCE', help='evaluate program text given on the command line')
    group.add_argument('--emit-ast', metavar='RUNEL_FILE', help='emit AST JSON for the given .runel file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Runel program file (.runel) to execute')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = read_source(program_file)
        try:
            ast_program = grammar.parse_program(source) if args.grammar else parse_program(source)
        except RunelError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        obj = ast_to_obj(ast_program)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    interpreter = Interpreter(debug_level=args.v, use_grammar=args.grammar)
    try:
        # Execute from AST JSON
        if args.ast:
            ast_path = Path(args.ast)
            if not ast_path.exists():
                print(f"Error: file {ast_path} not found", file=sys.stderr)
                sys.exit(1)
            try:
                with open(ast_path, 'r', encoding='utf-8') as f:
                    ast_program = ast_from_obj(json.load(f))
                if not isinstance(ast_program, Program):
                    raise ValueError("top-level node is not a Program")
            except (KeyError, TypeError, ValueError) as e:
                # json.JSONDecodeError is a ValueError
                print(f"Error: invalid AST file {ast_path}: {e}", file=sys.stderr)
                sys.exit(1)
            report(interpreter.run(ast_program))
            return

        if args.source is not None:
            report(interpreter.run_source(args.source))
            return

        # Default: execute source file
        if not args.program:
            parser.error('missing program file; or use -e/--emit-ast/--ast')
        report(interpreter.run_source(read_source(Path(args.program))))
    except RunelError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        interpreter.close()


if __name__ == '__main__':
    main()
