"""Lexical analysis for the calculator. Characters are pulled from a single text stream and grouped into tokens on
demand; nothing is read ahead except what a token needs to find its own end.

All tokens can be loosely defined as follows:

```
<operator> ::= "(" | ")" | "+" | "-" | "*" | "/" | "%" | "="
<print>    ::= ";"                                ; ends a statement
<quit>     ::= "q" | "quit"
<let>      ::= "L"                                ; starts a declaration
<number>   ::= <digits> ["." <digits>] [("e" | "E") ["+" | "-"] <digits>]
             | "." <digits> [...]                 ; exponent only taken if followed by a digit
<name>     ::= <alpha> (<alnum> | "_")*
```

Whitespace separates tokens and is otherwise ignored.
"""

import string
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from calculator.lang.error import EndOfInput, InternalError, LexError


def is_digit(char):
    """ASCII digits only: str.isdigit also accepts superscripts, which float() rejects."""
    return char in string.digits


def is_name_char(char):
    return char.isalnum() or char == "_"


class Kind(Enum):
    NUMBER = "number"
    OPERATOR = "operator"
    NAME = "name"
    QUIT = "q"
    LET = "L"
    PRINT = ";"


@dataclass(frozen=True)
class Token:
    """A single lexical unit. value is a float for numbers, the symbol for operators, and the identifier for names."""
    kind: Kind
    value: Union[float, str, None] = None

    @property
    def symbol(self) -> Optional[str]:
        """Single-character spelling of operator and keyword tokens, None for numbers and names."""
        if self.kind is Kind.OPERATOR:
            return self.value
        if self.kind in (Kind.NUMBER, Kind.NAME):
            return None
        return self.kind.value


class CharStream:
    """Character reader over a text file object with unlimited pushback."""

    def __init__(self, file):
        self.file = file
        self.line_num = 1
        self._pushed = []

    def get(self) -> str:
        """Returns next character, or '' at end of input."""
        char = self._pushed.pop() if self._pushed else self.file.read(1)
        if char == "\n":
            self.line_num += 1
        return char

    def get_nonspace(self) -> str:
        char = self.get()
        while char and char.isspace():
            char = self.get()
        return char

    def putback(self, char):
        if not char:
            return  # nothing to return at end of input
        if char == "\n":
            self.line_num -= 1
        self._pushed.append(char)

    def take(self, predicate) -> str:
        """Reads characters while predicate holds. The first character that fails it is pushed back."""
        result = ""
        char = self.get()
        while char and predicate(char):
            result += char
            char = self.get()
        self.putback(char)
        return result


class TokenStream:
    """Token source with a single-token pushback buffer, giving the grammar one token of lookahead."""
    OPERATORS = "()+-*/%="

    def __init__(self, chars):
        self.chars = chars
        self.full = False
        self.buffer = None

    @property
    def line_num(self):
        return self.chars.line_num

    def get(self) -> Token:
        """Returns the pushed back token if there is one, otherwise reads a new token from the character stream."""
        if self.full:
            self.full = False
            return self.buffer

        char = self.chars.get_nonspace()
        if not char:
            raise EndOfInput()

        if char in TokenStream.OPERATORS:
            return Token(Kind.OPERATOR, char)
        elif char == Kind.PRINT.value:
            return Token(Kind.PRINT)
        elif char == Kind.QUIT.value:
            rest = self.chars.take(is_name_char)
            if rest != "uit":  # only "q" and "quit" are spelled out, "quux" is "q" then "uux"
                for c in reversed(rest):
                    self.chars.putback(c)
            return Token(Kind.QUIT)
        elif char == Kind.LET.value:
            return Token(Kind.LET)
        elif is_digit(char) or char == ".":
            self.chars.putback(char)
            return Token(Kind.NUMBER, self._number())
        elif char.isalpha():
            return Token(Kind.NAME, char + self.chars.take(is_name_char))

        raise LexError("bad token '{}'", char)

    def _number(self) -> float:
        """Reads a floating-point literal. Assumes the next character is a digit or '.'."""
        text = self.chars.take(is_digit)

        char = self.chars.get()
        if char == ".":
            text += char + self.chars.take(is_digit)
        else:
            self.chars.putback(char)

        if not any(is_digit(c) for c in text):
            raise LexError("bad number '{}'", text)

        marker = self.chars.get()
        if marker in ("e", "E"):
            sign = self.chars.get()
            if sign not in ("+", "-"):
                self.chars.putback(sign)
                sign = ""
            digits = self.chars.take(is_digit)

            if digits:
                text += marker + sign + digits
            else:  # not an exponent, leave it for the next token
                self.chars.putback(sign)
                self.chars.putback(marker)
        else:
            self.chars.putback(marker)

        return float(text)

    def putback(self, token):
        """Stores token so that the next get returns it. Only one token can be held at a time."""
        if self.full:
            raise InternalError("putback() into a full buffer")
        self.buffer = token
        self.full = True

    def ignore(self, delimiter):
        """Discards input up to and including the next delimiter. Used to resynchronize after an error."""
        if self.full and self.buffer.symbol == delimiter:
            self.full = False
            return
        self.full = False

        char = self.chars.get_nonspace()
        while char and char != delimiter:
            char = self.chars.get_nonspace()
