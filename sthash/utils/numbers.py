# Canonical decimal rendering of numbers for hash messages.
#
# Tokens are compared across independently written clients, so every party has to
# render a number with the same characters. The rendering follows the ECMAScript
# Number::toString rules: shortest round-trip digits, no trailing ".0" on integral
# values, and exponent notation only below 1e-6 or at/above 1e21.

import math
from decimal import Decimal

def format_number(value) -> str:
    """
    Render an int or float as its minimal decimal string.

    >>> format_number(600)
    '600'
    >>> format_number(25.0)
    '25'
    >>> format_number(0.00001)
    '0.00001'
    >>> format_number(1e21)
    '1e+21'
    """
    if isinstance(value, bool):
        raise TypeError("booleans are not numbers here")

    if isinstance(value, int):
        if abs(value) < 10 ** 21:
            return str(value)
        value = float(value)
    else:
        value = float(value)

    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()

    # value == 0.<digits> * 10**n
    n = len(digit_tuple) + exponent
    digits = "".join(str(d) for d in digit_tuple).rstrip("0")
    k = len(digits)

    if k <= n <= 21:
        text = digits + "0" * (n - k)
    elif 0 < n <= 21:
        text = digits[:n] + "." + digits[n:]
    elif -6 < n <= 0:
        text = "0." + "0" * (-n) + digits
    else:
        e = n - 1
        mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
        text = f"{mantissa}e{'+' if e > 0 else '-'}{abs(e)}"

    return sign + text
