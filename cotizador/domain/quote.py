"""
Quote aggregate (cotización) and the quoter that builds it.

A quote is created empty, lines are appended, totals are computed once the
tax strategies are known, and it becomes read-only when the persistence
layer assigns it a folio.
"""
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Union

from cotizador.domain.components import Component
from cotizador.domain.taxes import TaxStrategy, get_tax_strategy
from cotizador.exceptions import (
    BusinessLogicError, EmptyQuoteError, InvalidComponentError, InvalidLineError, QuoteFinalizedError
)
from cotizador.utils.number_format import money, to_decimal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuoteLine:
    """Quote line (detalle de cotización). Immutable."""

    line_number: int
    component_id: str
    quantity: int
    unit_price: Decimal
    amount: Decimal
    description: str = ''

    def to_dict(self) -> Dict:
        return {
            'line_number': self.line_number,
            'component_id': self.component_id,
            'description': self.description,
            'quantity': self.quantity,
            'unit_price': str(self.unit_price),
            'amount': str(self.amount),
        }


class Quote:
    """
    Quote (Cotización).

    Invariants once totals are computed: ``subtotal == sum(line.amount)`` and
    ``total == subtotal + tax_amount``.
    """

    def __init__(self, created_on: Optional[date] = None, folio: Optional[int] = None):
        self.folio = folio
        self.created_on = created_on or date.today()
        self._lines: List[QuoteLine] = []
        self.tax_codes: List[str] = []
        self.subtotal = Decimal('0.00')
        self.tax_amount = Decimal('0.00')
        self.total = Decimal('0.00')

    def __repr__(self):
        return f"<Quote(folio={self.folio}, lines={len(self._lines)}, total={self.total})>"

    @property
    def lines(self) -> List[QuoteLine]:
        return list(self._lines)

    @property
    def is_finalized(self) -> bool:
        return self.folio is not None

    def _ensure_editable(self):
        if self.is_finalized:
            raise QuoteFinalizedError(self.folio)

    def add_line(self, component_id: str, quantity: int, unit_price, amount=None,
                 description: str = '') -> QuoteLine:
        """
        Append a line with the next sequential line number.

        ``unit_price`` is stored rounded to cents. ``amount`` is the
        promotion-discounted line amount; when omitted it is
        ``unit_price * quantity``.
        """
        self._ensure_editable()
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidLineError(component_id, quantity)
        unit_price = money(to_decimal(unit_price, 'precio unitario'))
        if unit_price < 0:
            raise InvalidLineError(component_id, quantity)
        line_amount = unit_price * quantity if amount is None else to_decimal(amount, 'importe')

        line = QuoteLine(
            line_number=len(self._lines) + 1,
            component_id=component_id,
            quantity=quantity,
            unit_price=unit_price,
            amount=money(line_amount),
            description=description or '',
        )
        self._lines.append(line)
        return line

    def compute_totals(self, tax_strategies: Iterable[Union[TaxStrategy, str]]) -> 'Quote':
        """
        Compute subtotal, tax and total from the current lines.

        Strategies may be given as codes; every code is resolved before any
        total is written, so an unsupported jurisdiction leaves the previous
        totals untouched. Recomputing with the same input gives the same
        result.
        """
        self._ensure_editable()
        if not self._lines:
            raise EmptyQuoteError()
        if isinstance(tax_strategies, (str, TaxStrategy)):
            tax_strategies = [tax_strategies]
        strategies = [s if isinstance(s, TaxStrategy) else get_tax_strategy(s) for s in tax_strategies or ()]
        if not strategies:
            raise BusinessLogicError('Se requiere al menos un impuesto para calcular los totales.')

        subtotal = sum((line.amount for line in self._lines), Decimal('0'))
        tax_amount = money(sum((s.calculate(subtotal) for s in strategies), Decimal('0')))

        self.subtotal = money(subtotal)
        self.tax_amount = tax_amount
        self.total = self.subtotal + self.tax_amount
        self.tax_codes = [s.code for s in strategies]
        return self

    def finalize(self, folio: int) -> 'Quote':
        """Mark the quote as persisted under ``folio``; it is read-only afterwards."""
        if not self._lines:
            raise EmptyQuoteError()
        if folio is None:
            raise ValueError('folio requerido')
        self.folio = folio
        return self

    def quantities_by_component(self) -> Dict[str, int]:
        quantities: Dict[str, int] = {}
        for line in self._lines:
            quantities[line.component_id] = quantities.get(line.component_id, 0) + line.quantity
        return quantities

    def to_dict(self) -> Dict:
        return {
            'folio': self.folio,
            'created_on': self.created_on.isoformat(),
            'lines': [line.to_dict() for line in self._lines],
            'tax_codes': list(self.tax_codes),
            'subtotal': str(self.subtotal),
            'tax_amount': str(self.tax_amount),
            'total': str(self.total),
        }

    @classmethod
    def restore(cls, folio: int, created_on: date, lines: Iterable[QuoteLine], subtotal, tax_amount, total,
                tax_codes: Iterable[str] = ()) -> 'Quote':
        """Rebuild a persisted quote from stored values, without recomputing."""
        quote = cls(created_on=created_on)
        quote._lines = sorted(lines, key=lambda line: line.line_number)
        quote.subtotal = to_decimal(subtotal)
        quote.tax_amount = to_decimal(tax_amount)
        quote.total = to_decimal(total)
        quote.tax_codes = list(tax_codes)
        quote.folio = folio
        return quote


class Quoter:
    """
    Quoter (Cotizador): collects components and quantities, then prices them.

    Each ``add_component`` call becomes one quote line, even when the same
    component is added twice.
    """

    def __init__(self):
        self._items: List[tuple] = []

    def add_component(self, quantity: int, component: Component) -> None:
        if component is None:
            raise InvalidComponentError('Componente requerido.')
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidLineError(component.id, quantity)
        component.validate()
        self._items.append((quantity, component))

    def remove_component(self, component_id: str) -> None:
        """Remove every entry of ``component_id``."""
        remaining = [item for item in self._items if item[1].id != component_id]
        if len(remaining) == len(self._items):
            raise InvalidComponentError(f'El componente {component_id} no está en la cotización.')
        self._items = remaining

    def components(self) -> List[Dict]:
        return [
            {
                'component_id': component.id,
                'description': component.description,
                'quantity': quantity,
                'unit_price': component.list_price(),
                'amount': component.quote_amount(quantity),
            }
            for quantity, component in self._items
        ]

    def generate_quote(self, tax_strategies: Iterable[Union[TaxStrategy, str]],
                       created_on: Optional[date] = None) -> Quote:
        quote = Quote(created_on=created_on)
        for quantity, component in self._items:
            quote.add_line(
                component.id,
                quantity,
                component.list_price(),
                amount=component.quote_amount(quantity),
                description=component.description,
            )
        quote.compute_totals(tax_strategies)
        logger.debug(f"Quote generated: {len(quote.lines)} lines, total={quote.total}")
        return quote
