import io
import unittest

from calculator.lang.error import (CalcException, ErrorHandler, InternalError, LexError, MathError, ParseError,
                                   SymbolError)


class CalcExceptionTestCase(unittest.TestCase):

    def test_msg(self):
        error = CalcException("{} declared twice", "x")
        self.assertEqual("x declared twice", error.msg)
        self.assertEqual("x declared twice", str(error))
        self.assertEqual("x declared twice", error.highlighted(color=False))
        self.assertIn("declared twice", error.highlighted())

        error = CalcException("= missing in declaration of {}", ["y"])
        self.assertEqual("= missing in declaration of y", str(error))

    def test_kinds(self):
        cases = {
            LexError: "lex",
            ParseError: "syntax",
            SymbolError: "name",
            MathError: "math",
            InternalError: "internal",
        }
        for case, expected in cases.items():
            error = case("message")
            self.assertIsInstance(error, CalcException)
            self.assertEqual(expected, error.kind)
            self.assertEqual(case is InternalError, error.internal)


class ErrorHandlerTestCase(unittest.TestCase):

    def setUp(self):
        self.stream = io.StringIO()

    def handler(self, **kwargs):
        return ErrorHandler(color=False, stream=self.stream, **kwargs)

    def test_format(self):
        handler = self.handler()
        self.assertEqual("error: divide by zero", handler.format(MathError("divide by zero")))

        handler.register_file("input.calc")
        handler.register_line("input.calc", 4)
        self.assertEqual("input.calc:4: error: bad token '$'", handler.format(LexError("bad token '{}'", "$")))

        handler.register_line("input.calc", None)
        self.assertEqual("[internal] error: oops", handler.format(InternalError("oops")))

    def test_throw_fatal(self):
        with self.assertRaises(SystemExit) as context:
            self.handler().throw(MathError("divide by zero"))
        self.assertEqual(1, context.exception.code)
        self.assertEqual("error: divide by zero\n", self.stream.getvalue())

    def test_throw_not_fatal(self):
        handler = self.handler(fatal=False)
        handler.register_file("<stdin>")
        handler.register_line("<stdin>", 2)
        handler.throw(SymbolError("undefined variable {}", "x"))

        self.assertEqual("<stdin>:2: error: undefined variable x\n", self.stream.getvalue())
        self.assertIsNone(handler.traceback["<stdin>"])

    def test_known_exit_code(self):
        with self.assertRaises(SystemExit) as context:
            with self.handler():
                raise ParseError("primary expected")
        self.assertEqual(1, context.exception.code)

    def test_unknown_exit_code(self):
        with self.assertRaises(SystemExit) as context:
            with self.handler():
                raise ValueError("boom")
        self.assertEqual(2, context.exception.code)
        self.assertIn("[internal] error: unknown error: 'ValueError: boom'", self.stream.getvalue())

    def test_recursion_exit_code(self):
        with self.assertRaises(SystemExit) as context:
            with self.handler():
                raise RecursionError("maximum recursion depth exceeded")
        self.assertEqual(1, context.exception.code)
        self.assertEqual("error: maximum recursion depth exceeded\n", self.stream.getvalue())

    def test_keyboard_interrupt(self):
        with self.assertRaises(SystemExit) as context:
            with self.handler():
                raise KeyboardInterrupt()
        self.assertEqual(1, context.exception.code)
        self.assertIn("keyboard interrupt", self.stream.getvalue())

    def test_system_exit(self):
        with self.assertRaises(SystemExit) as context:
            with self.handler():
                raise SystemExit(0)
        self.assertEqual(0, context.exception.code)
        self.assertEqual("", self.stream.getvalue())

    def test_normal_exit(self):
        with self.handler():
            pass
        self.assertEqual("", self.stream.getvalue())

    def test_not_fatal_suppresses(self):
        with self.handler(fatal=False):
            raise MathError("divide by zero")
        self.assertEqual("error: divide by zero\n", self.stream.getvalue())


if __name__ == '__main__':
    unittest.main()
