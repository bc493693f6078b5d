import unittest

from calculator.lang.error import SymbolError
from calculator.lang.symbols import SymbolTable


class SymbolTableTestCase(unittest.TestCase):

    def setUp(self):
        self.symbols = SymbolTable()
        self.symbols.define_name("x", 5.0)

    def test_is_declared(self):
        self.assertTrue(self.symbols.is_declared("x"))
        self.assertFalse(self.symbols.is_declared("y"))
        self.assertIn("x", self.symbols)

    def test_get_value(self):
        self.assertEqual(5.0, self.symbols.get_value("x"))

        with self.assertRaises(SymbolError) as context:
            self.symbols.get_value("y")
        self.assertEqual("undefined variable y", str(context.exception))
        self.assertEqual(1, len(self.symbols))

    def test_define_name(self):
        self.assertEqual(2.0, self.symbols.define_name("y", 2.0))
        self.assertEqual(2.0, self.symbols.get_value("y"))

        with self.assertRaises(SymbolError) as context:
            self.symbols.define_name("x", 7.0)
        self.assertEqual("x declared twice", str(context.exception))
        self.assertEqual(5.0, self.symbols.get_value("x"))

    def test_set_value(self):
        self.symbols.set_value("x", 1.0)
        self.assertEqual(1.0, self.symbols.get_value("x"))

        self.symbols.set_value("z", 3.0)
        self.assertEqual(3.0, self.symbols.get_value("z"))
        self.assertRaises(SymbolError, self.symbols.define_name, "z", 4.0)


if __name__ == '__main__':
    unittest.main()
