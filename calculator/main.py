"""Command-line calculator: evaluates ';'-terminated statements from standard input or a file. Uses the error handling
context manager for exit codes. Called from the calc executable script.
"""

import argparse
import sys

from calculator.lang.error import CalcException, ErrorHandler
from calculator.lang.numerical import DEFAULT_PRECISION
from calculator.lang.session import Session
from calculator.lang.shell import Shell


def precision(arg):
    """argparse type for --precision."""
    try:
        value = int(arg)
        assert value >= 1
    except (AssertionError, ValueError):
        raise argparse.ArgumentTypeError(f"expected a positive integer, got '{arg}'")
    return value


def build_parser():
    parser = argparse.ArgumentParser(prog="calc", description="Interactive floating-point calculator.")
    parser.add_argument("file", help="file to read statements from (if empty, reads standard input)", nargs="?")
    parser.add_argument("--precision", type=precision, default=DEFAULT_PRECISION,
                        help=f"significant digits of printed results (default: {DEFAULT_PRECISION})")
    parser.add_argument("--no-prompt", action="store_true", help="do not print the '> ' prompt")
    parser.add_argument("--no-color", action="store_true", help="do not color error messages")
    return parser


def main(argv=None):
    """Runs the calculator. Called from calc executable script."""
    args = build_parser().parse_args(argv)

    with ErrorHandler(color=not args.no_color) as error_handler:
        if args.file is None:
            run(error_handler, sys.stdin, Session.SH_FILE, args)
            return

        try:
            file = open(args.file, "r")
        except OSError:
            raise CalcException("'{}' could not be opened", args.file)

        with file:
            run(error_handler, file, args.file, args)


def run(error_handler, file, path, args):
    """Evaluates file in a shell. Errors that escape the shell loop end the process."""
    sess = Session(error_handler, file, path)
    try:
        Shell(sess, prompt=not args.no_prompt, precision=args.precision).cmdloop()
    finally:
        error_handler.fatal = True


if __name__ == "__main__":
    main()
