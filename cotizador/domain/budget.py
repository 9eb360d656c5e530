"""
Budget (presupuesto) interface and the quote-backed adapter.

Order generation only reads budgets through this interface, so it never
depends on how a quote stores its lines.
"""
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Dict

from cotizador.exceptions import BudgetNotLoadedError

UNIT_PRICE = 'unit_price'
LINE_TOTAL = 'line_total'
QUANTITY = 'quantity'
DESCRIPTION = 'description'

DESCRIPTION_NOT_FOUND = 'Descripción no encontrada'


class Budget(ABC):
    """Read-only view of something that can be ordered."""

    @abstractmethod
    def quantities_by_article(self) -> Dict[str, int]:
        """Article id -> quantity, in the order articles should be ordered."""

    @abstractmethod
    def description_of(self, article_id: str) -> str:
        """Human description of an article."""

    @abstractmethod
    def data_of(self, article_id: str) -> Dict[str, Any]:
        """Additional data; at least ``unit_price`` and ``line_total`` when known."""


class QuoteBudgetAdapter(Budget):
    """Expose a Quote as a Budget, grouping its lines by component id."""

    def __init__(self, quote):
        if quote is None:
            raise BudgetNotLoadedError('No se puede adaptar una cotización nula.')
        self._quote = quote

    @property
    def quote(self):
        return self._quote

    def _lines_for(self, article_id):
        return [line for line in self._quote.lines if line.component_id == article_id]

    def quantities_by_article(self) -> Dict[str, int]:
        quantities: Dict[str, int] = {}
        for line in self._quote.lines:
            quantities[line.component_id] = quantities.get(line.component_id, 0) + line.quantity
        return quantities

    def description_of(self, article_id: str) -> str:
        for line in self._lines_for(article_id):
            if line.description:
                return line.description
        return DESCRIPTION_NOT_FOUND

    def data_of(self, article_id: str) -> Dict[str, Any]:
        lines = self._lines_for(article_id)
        if not lines:
            return {}
        return {
            DESCRIPTION: self.description_of(article_id),
            QUANTITY: sum(line.quantity for line in lines),
            UNIT_PRICE: lines[0].unit_price,
            LINE_TOTAL: sum((line.amount for line in lines), Decimal('0')),
        }
