"""Display of computed values. Results are printed with a fixed number of significant digits in general format, so
14.0 prints as '14', math.pi as '3.14159' and 1e20 as '1e+20'.
"""

DEFAULT_PRECISION = 6


def format_value(value, precision=DEFAULT_PRECISION):
    """Returns value formatted with precision significant digits."""
    if precision < 1:
        raise ValueError(f"precision must be positive, got {precision}")
    return f"{value:.{precision}g}"
