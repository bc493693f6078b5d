"""Error handling for the calculator. Only CalcExceptions should be encountered during running: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Exit codes: 0 on normal termination, 1 for a known failure kind, 2 for an unrecognized one.
"""

import sys

from termcolor import colored


class CalcException(Exception):
    """Templates an error message so that it can be used to throw a calculator error. The offending snippets in exprs
    are substituted into msg, and are highlighted when the error is displayed.
    """
    kind = "error"

    def __init__(self, msg, exprs=None, internal=False):
        if exprs is None:
            exprs = []
        if isinstance(exprs, str):
            exprs = [exprs]

        self.template = msg
        self.exprs = [str(expr) for expr in exprs]
        self.msg = msg.format(*self.exprs)
        self.internal = internal

        super().__init__(self.msg)

    def highlighted(self, color=True):
        """Returns self.msg with expr snippets bolded."""
        if not color:
            return self.msg
        return self.template.format(*(colored(expr, attrs=["bold"]) for expr in self.exprs))


class LexError(CalcException):
    """Unrecognized character in the input stream."""
    kind = "lex"


class ParseError(CalcException):
    """A specific token was expected but another was found."""
    kind = "syntax"


class SymbolError(CalcException):
    """Undefined variable on read, or already declared variable on declaration."""
    kind = "name"


class MathError(CalcException):
    kind = "math"


class InternalError(CalcException):
    """Inconsistent internal state (a grammar bug, never bad input)."""
    kind = "internal"

    def __init__(self, msg, exprs=None):
        super().__init__(msg, exprs, internal=True)


class EndOfInput(Exception):
    """Raised by the token source when the input stream is exhausted."""


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom calculator errors."""
    ERROR = "red"
    KNOWN, UNKNOWN = 1, 2  # exit codes

    def __init__(self, fatal=True, color=True, stream=None):
        self.fatal = fatal
        self.color = color
        self.stream = stream
        self.traceback = {}

    @property
    def out(self):
        return self.stream if self.stream is not None else sys.stderr

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = None

    def register_line(self, path, line_num):
        """Registers line number in traceback given path. Should be called before throwing an error from path."""
        self.traceback[path] = line_num

    def _colored(self, text, color=None):
        if not self.color:
            return text
        return colored(text, color, attrs=["bold"])

    def format(self, error):
        """Returns the one-line diagnostic for error."""
        error_msg = ""
        for path, line_num in self.traceback.items():  # assumes dict is insertion-ordered
            if line_num is not None:
                error_msg += self._colored(f"{path}:{line_num}: ")

        if error.internal:
            error_msg += self._colored("[internal] ", ErrorHandler.ERROR)

        return error_msg + self._colored("error: ", ErrorHandler.ERROR) + error.highlighted(self.color)

    def throw(self, error, code=KNOWN):
        """Throws error using error and self.traceback. error must be a CalcException. Exits with code if self.fatal,
        otherwise resets the traceback and returns.
        """
        print(self.format(error), file=self.out)
        self.out.flush()

        if self.fatal:
            sys.exit(code)
        self.traceback = {path: None for path in self.traceback}  # if error occurred, reset traceback

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(CalcException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(CalcException("maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, CalcException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(CalcException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True),
                       ErrorHandler.UNKNOWN)
            do_exit = True

        return not do_exit
