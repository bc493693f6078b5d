"""Session control for the calculator. A Session owns the token stream and symbol table for one input stream and
evaluates it one statement at a time.
"""

import math
from dataclasses import dataclass
from typing import Optional

from calculator.lang.error import CalcException, EndOfInput, ParseError
from calculator.lang.grammar import Evaluator
from calculator.lang.lexical import CharStream, Kind, TokenStream
from calculator.lang.symbols import SymbolTable


@dataclass(frozen=True)
class Result:
    """Outcome of a single statement: either a value or the recoverable error that stopped it."""
    value: Optional[float] = None
    error: Optional[CalcException] = None

    @property
    def ok(self):
        return self.error is None

    @property
    def kind(self):
        """'ok', or the kind tag of the error ('lex', 'syntax', 'name', 'math')."""
        return "ok" if self.ok else self.error.kind


class Session:
    """Governs a calculator session, with its own variables."""
    SH_FILE = "<stdin>"  # name used for standard input in error messages
    CONSTANTS = {"pi": math.pi, "e": math.e}

    def __init__(self, error_handler, file, path=SH_FILE):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path  # used for error messages
        self.file = file

        self.tokens = TokenStream(CharStream(file))
        self.symbols = SymbolTable()
        self.evaluator = Evaluator(self.tokens, self.symbols)

        for name, value in Session.CONSTANTS.items():
            self.symbols.define_name(name, value)

    @property
    def interactive(self):
        """Whether or not input comes from a terminal."""
        isatty = getattr(self.file, "isatty", None)
        return bool(isatty and isatty())

    def step(self):
        """Reads and evaluates the next statement. Returns None when the session is over (quit keyword or end of input),
        otherwise a Result. Internal errors are not recoverable and are raised.
        """
        try:
            token = self.tokens.get()
            while token.kind is Kind.PRINT:  # empty statements
                token = self.tokens.get()

            if token.kind is Kind.QUIT:
                return None

            self.tokens.putback(token)
            return Result(value=self.evaluator.statement())

        except EndOfInput:
            return None

        except RecursionError:
            return self._failed(ParseError("expression nested too deeply"))

        except CalcException as error:
            if error.internal:
                raise
            return self._failed(error)

    def _failed(self, error):
        if not self.interactive:
            self.error_handler.register_line(self.path, self.tokens.line_num)
        return Result(error=error)

    def recover(self):
        """Discards the rest of a failed statement."""
        self.tokens.ignore(Kind.PRINT.value)

