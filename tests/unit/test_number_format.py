"""
Unit tests for number helpers.
"""

import pytest
from decimal import Decimal

from cotizador.utils.number_format import money, parse_quantity, percent_factor, to_decimal


def test_to_decimal_from_float_uses_text():
    assert to_decimal(0.1) == Decimal('0.1')


@pytest.mark.parametrize('value', [None, True, 'abc', '', 'NaN', 'Infinity', Decimal('-Infinity'), float('inf')])
def test_to_decimal_rejects(value):
    with pytest.raises(ValueError):
        to_decimal(value)


@pytest.mark.parametrize('value,expected', [
    ('2.345', Decimal('2.35')),
    ('2.344', Decimal('2.34')),
    (Decimal('-1.005'), Decimal('-1.01')),
])
def test_money_rounds_half_up(value, expected):
    assert money(value) == expected


def test_percent_factor():
    assert percent_factor(15) == Decimal('0.85')


@pytest.mark.parametrize('value,expected', [(3, 3), ('4', 4), ('5.0', 5), (Decimal('-2'), -2)])
def test_parse_quantity(value, expected):
    assert parse_quantity(value) == expected


@pytest.mark.parametrize('value', ['1.5', 'x', None, True, 'Infinity', 'NaN', Decimal('Infinity')])
def test_parse_quantity_rejects(value):
    with pytest.raises(ValueError):
        parse_quantity(value)
