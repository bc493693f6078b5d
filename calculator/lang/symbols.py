"""Variable storage for a calculator session."""

from calculator.lang.error import SymbolError


class SymbolTable:
    """Mapping of variable name to current value. Names can be declared once and assigned any number of times, but
    never removed.
    """

    def __init__(self):
        self.values = {}

    def is_declared(self, name):
        return name in self.values

    def get_value(self, name):
        try:
            return self.values[name]
        except KeyError:
            raise SymbolError("undefined variable {}", name) from None

    def set_value(self, name, value):
        """Overwrites (or inserts) name."""
        self.values[name] = value

    def define_name(self, name, value):
        """Declares name with value and returns value. Raises a SymbolError if name is already declared."""
        if self.is_declared(name):
            raise SymbolError("{} declared twice", name)
        self.values[name] = value
        return value

    def __contains__(self, name):
        return self.is_declared(name)

    def __len__(self):
        return len(self.values)

    def __repr__(self):
        return f"SymbolTable({self.values})"
