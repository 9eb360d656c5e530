"""
Country tax strategies (calculadores de impuesto por país).

Each strategy is a pure function of a non-negative amount. A quote applies
one or more of them over its subtotal and adds the results.
"""
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from cotizador.exceptions import BusinessLogicError, UnsupportedTaxJurisdiction
from cotizador.utils.number_format import to_decimal


class TaxStrategy:
    """Fixed-rate tax for one jurisdiction."""

    code = None
    name = None
    rate = Decimal('0')

    def calculate(self, amount) -> Decimal:
        amount = to_decimal(amount, 'monto')
        if amount < 0:
            raise BusinessLogicError(f'No se puede calcular impuesto sobre un monto negativo: {amount}')
        return amount * self.rate

    def __repr__(self):
        return f"<{type(self).__name__}(code='{self.code}', rate={self.rate})>"


class MexicoTax(TaxStrategy):
    code = 'MX'
    name = 'IVA México'
    rate = Decimal('0.16')


class UsaTax(TaxStrategy):
    code = 'US'
    name = 'Sales tax USA'
    rate = Decimal('0.05')


class CanadaTax(TaxStrategy):
    code = 'CA'
    name = 'GST/HST Canadá'
    rate = Decimal('0.15')


TAX_STRATEGIES: Dict[str, type] = {
    MexicoTax.code: MexicoTax,
    UsaTax.code: UsaTax,
    CanadaTax.code: CanadaTax,
}

TAX_ALIASES = {
    'IVA': MexicoTax.code,
    'MEX': MexicoTax.code,
    'USA': UsaTax.code,
    'CAN': CanadaTax.code,
}


def supported_tax_codes() -> List[str]:
    return sorted(TAX_STRATEGIES)


def get_tax_strategy(code: str) -> TaxStrategy:
    """Return the strategy for a jurisdiction code, failing on unknown codes."""
    normalized = (code or '').strip().upper()
    normalized = TAX_ALIASES.get(normalized, normalized)
    strategy_cls = TAX_STRATEGIES.get(normalized)
    if strategy_cls is None:
        raise UnsupportedTaxJurisdiction(code)
    return strategy_cls()


def resolve_tax_strategies(codes: Optional[Iterable[str]], default_codes: Iterable[str] = ('MX',)) -> List[TaxStrategy]:
    """
    Map tax codes to strategies.

    All codes are resolved before anything is returned, so one unknown code
    fails the whole set. An empty or missing list falls back to
    ``default_codes``.
    """
    codes = [c for c in (codes or []) if c is not None and str(c).strip()]
    if not codes:
        codes = list(default_codes)
    return [get_tax_strategy(code) for code in codes]


def total_tax(amount, strategies: Iterable[TaxStrategy]) -> Decimal:
    return sum((strategy.calculate(amount) for strategy in strategies), Decimal('0'))
