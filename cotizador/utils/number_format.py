"""Number helpers for monetary amounts and quantities."""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENT = Decimal('0.01')


def to_decimal(value, field='valor') -> Decimal:
    """
    Convert an int, float, str or Decimal to Decimal.

    Floats go through ``str`` so 0.1 becomes Decimal('0.1') and not its
    binary expansion.

    Raises:
        ValueError: if the value is empty, not numeric, infinite or NaN.
    """
    if value is None:
        raise ValueError(f'{field} requerido')
    if isinstance(value, bool):
        raise ValueError(f'{field} inválido: {value!r}')
    if isinstance(value, Decimal):
        number = value
    else:
        try:
            number = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise ValueError(f'{field} inválido: {value!r}')
    if not number.is_finite():
        raise ValueError(f'{field} debe ser un número finito: {value!r}')
    return number


def money(value, places: int = 2) -> Decimal:
    """Round an amount half-up to ``places`` decimals (cents by default)."""
    exponent = CENT if places == 2 else Decimal(1).scaleb(-places)
    return to_decimal(value).quantize(exponent, rounding=ROUND_HALF_UP)


def percent_factor(percent) -> Decimal:
    """Return ``1 - percent/100`` as Decimal."""
    return Decimal(1) - to_decimal(percent, 'porcentaje') / Decimal(100)


def parse_quantity(value, field='cantidad') -> int:
    """
    Parse a whole-unit quantity.

    Accepts ints and integral strings/Decimals ("3", "3.0"). Sign is not
    checked here; callers decide what a non-positive quantity means.

    Raises:
        ValueError: for fractional, non-finite or non-numeric values.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    number = to_decimal(value, field)
    if number != number.to_integral_value():
        raise ValueError(f'{field} debe ser un número entero: {value!r}')
    return int(number)
