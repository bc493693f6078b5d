"""Recursive-descent evaluator for calculator statements. Values are computed while parsing: no syntax tree is built.

Formally, the grammar can be defined as

```
<statement>   ::= <declaration>
                | <expression>
<declaration> ::= "L" <name> "=" <expression>       ; name must not already be declared
<expression>  ::= <term> (("+" | "-") <term>)*
<term>        ::= <primary> (("*" | "/" | "%") <primary>)*
<primary>     ::= <number>
                | <name>                            ; value of a declared variable
                | "(" <expression> ")"
                | "-" <primary>
                | "+" <primary>
```

All binary operators associate to the left. `%` is the floating-point remainder, so its sign follows the dividend
(-7 % 2 = -1) rather than the divisor.

Declarations are spelled with the single letter `L` (`L x = 5;`): the word `let` is an ordinary name.
"""

import math

from calculator.lang.error import MathError, ParseError
from calculator.lang.lexical import Kind


class Evaluator:
    """Pulls tokens from a TokenStream and evaluates them against a SymbolTable. Each grammar level reads at most one
    token past its own end and returns it to the stream.
    """

    def __init__(self, tokens, symbols):
        self.tokens = tokens
        self.symbols = symbols

    def _expect(self, symbol, msg, *exprs):
        """Consumes the next token, which must be symbol. A mismatched token is pushed back before raising so that a
        statement delimiter is not lost.
        """
        token = self.tokens.get()
        if token.symbol != symbol:
            self.tokens.putback(token)
            raise ParseError(msg, exprs)
        return token

    def primary(self):
        token = self.tokens.get()

        if token.symbol == "(":
            value = self.expression()
            self._expect(")", "')' expected")
            return value

        elif token.symbol == "-":
            return -self.primary()

        elif token.symbol == "+":
            return self.primary()

        elif token.kind is Kind.NUMBER:
            return token.value

        elif token.kind is Kind.NAME:
            return self.symbols.get_value(token.value)

        self.tokens.putback(token)
        raise ParseError("primary expected")

    def term(self):
        left = self.primary()
        while True:
            token = self.tokens.get()

            if token.symbol == "*":
                left *= self.primary()

            elif token.symbol == "/":
                divisor = self.primary()
                if divisor == 0:
                    raise MathError("divide by zero")
                left /= divisor

            elif token.symbol == "%":
                divisor = self.primary()
                if divisor == 0:
                    raise MathError("divide by zero")
                left = remainder(left, divisor)

            else:
                self.tokens.putback(token)
                return left

    def expression(self):
        left = self.term()
        while True:
            token = self.tokens.get()

            if token.symbol == "+":
                left += self.term()
            elif token.symbol == "-":
                left -= self.term()
            else:
                self.tokens.putback(token)
                return left

    def declaration(self):
        """Declares a new variable. Assumes the 'L' keyword has already been consumed."""
        token = self.tokens.get()
        if token.kind is not Kind.NAME:
            self.tokens.putback(token)
            raise ParseError("name expected in declaration")

        self._expect("=", "= missing in declaration of {}", token.value)
        return self.symbols.define_name(token.value, self.expression())

    def statement(self):
        token = self.tokens.get()
        if token.kind is Kind.LET:
            return self.declaration()

        self.tokens.putback(token)
        return self.expression()


def remainder(dividend, divisor):
    """Floating-point remainder with the sign of dividend. An infinite dividend gives nan."""
    try:
        return math.fmod(dividend, divisor)
    except ValueError:
        return math.nan
