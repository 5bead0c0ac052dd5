"""
Monkey REPL - reads a line, shows what the front end makes of it.

In "tokens" mode every token of the line is printed until EOF; in "ast"
mode the line is parsed and either the canonical rendering of the program
or the parser errors are printed.
"""

import sys
import argparse
import logging
from typing import List, Optional, TextIO

from . import __version__
from .config import ReplConfig, MODES, LOG_LEVELS, load_config, configure_logging
from .lexer import Lexer, TokenType
from .parser import Parser

logger = logging.getLogger(__name__)


def print_tokens(source: str, out: TextIO, filename: str = "<stdin>"):
    lexer = Lexer(source, filename)
    for token in lexer:
        if token.type == TokenType.EOF:
            break
        out.write(f"{token}\n")


def print_program(source: str, out: TextIO, filename: str = "<stdin>") -> bool:
    """Parse `source` and print the program, or its errors. True on success."""
    parser = Parser(Lexer(source, filename))
    program = parser.parse_program()

    errors = parser.errors()
    if errors:
        out.write("parser errors:\n")
        for message in errors:
            out.write(f"\t{message}\n")
        return False

    out.write(f"{program}\n")
    return True


def start(in_stream: TextIO, out_stream: TextIO, config: Optional[ReplConfig] = None):
    """Run the read-loop until `in_stream` is exhausted."""
    if config is None:
        config = ReplConfig()

    while True:
        out_stream.write(config.prompt)
        out_stream.flush()

        line = in_stream.readline()
        if not line:
            return

        line = line.rstrip("\n")
        if config.mode == "ast":
            print_program(line, out_stream)
        else:
            print_tokens(line, out_stream)


def build_arg_parser() -> argparse.ArgumentParser:
    arg_parser = argparse.ArgumentParser(
        prog="monkey",
        description="Tokenize or parse Monkey source interactively or from a file.",
    )
    arg_parser.add_argument("file", nargs="?", help="source file to process instead of starting the REPL")
    arg_parser.add_argument("--mode", choices=MODES, help="what to print for each input")
    arg_parser.add_argument("--prompt", help="REPL prompt")
    arg_parser.add_argument("--log-level", choices=LOG_LEVELS,
                            help="logging level for monkey.* loggers")
    arg_parser.add_argument("--config", help="path to a .monkeyrc.json file")
    arg_parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return arg_parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except ValueError as e:
        sys.stderr.write(f"monkey: {e}\n")
        return 2

    if args.mode:
        config.mode = args.mode
    if args.prompt is not None:
        config.prompt = args.prompt
    if args.log_level:
        config.log_level = args.log_level

    configure_logging(config.log_level)

    if args.file:
        try:
            with open(args.file, "r", encoding="utf-8") as f:
                source = f.read()
        except OSError as e:
            sys.stderr.write(f"monkey: cannot read {args.file}: {e}\n")
            return 1

        if config.mode == "ast":
            return 0 if print_program(source, sys.stdout, args.file) else 1
        print_tokens(source, sys.stdout, args.file)
        return 0

    logger.debug("starting REPL in %s mode", config.mode)
    try:
        start(sys.stdin, sys.stdout, config)
    except KeyboardInterrupt:
        sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
