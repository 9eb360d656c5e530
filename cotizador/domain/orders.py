"""
Supplier orders (pedidos) and the order manager (gestor de pedidos).
"""
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from cotizador.domain.budget import Budget, LINE_TOTAL, UNIT_PRICE
from cotizador.exceptions import BudgetNotLoadedError, InvalidOrderError, SupplierNotFoundError
from cotizador.utils.number_format import money, to_decimal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Supplier:
    """Supplier (Proveedor). Reference data."""

    key: str
    name: str
    legal_name: str = ''

    def to_dict(self) -> Dict:
        return {'key': self.key, 'name': self.name, 'legal_name': self.legal_name}


@dataclass(frozen=True)
class OrderLine:
    """Order line (detalle de pedido)."""

    article_id: str
    description: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal

    def to_dict(self) -> Dict:
        return {
            'article_id': self.article_id,
            'description': self.description,
            'quantity': self.quantity,
            'unit_price': str(self.unit_price),
            'line_total': str(self.line_total),
        }


class Order:
    """
    Order (Pedido).

    The supplier is fixed at creation. ``number`` stays 0 until persistence
    assigns one.
    """

    def __init__(self, number: int, issue_date: date, delivery_date: date, fulfillment_level: int,
                 supplier: Supplier, quote_folio: Optional[int] = None):
        if supplier is None:
            raise InvalidOrderError('El pedido requiere un proveedor.')
        if isinstance(fulfillment_level, bool) or not isinstance(fulfillment_level, int) \
                or not 0 <= fulfillment_level <= 100:
            raise InvalidOrderError(f'Nivel de surtido inválido: {fulfillment_level}. Debe estar entre 0 y 100.')
        if issue_date and delivery_date and delivery_date < issue_date:
            raise InvalidOrderError('La fecha de entrega no puede ser anterior a la de emisión.')
        self.number = number or 0
        self.issue_date = issue_date
        self.delivery_date = delivery_date
        self.fulfillment_level = fulfillment_level
        self._supplier = supplier
        self.quote_folio = quote_folio
        self._lines: List[OrderLine] = []

    def __repr__(self):
        return f"<Order(number={self.number}, supplier='{self._supplier.key}', lines={len(self._lines)})>"

    @property
    def supplier(self) -> Supplier:
        return self._supplier

    @property
    def lines(self) -> List[OrderLine]:
        return list(self._lines)

    @property
    def total(self) -> Decimal:
        return sum((line.line_total for line in self._lines), Decimal('0'))

    def add_line(self, article_id: str, description: str, quantity: int, unit_price, line_total) -> OrderLine:
        line = OrderLine(
            article_id=article_id,
            description=description,
            quantity=quantity,
            unit_price=to_decimal(unit_price),
            line_total=to_decimal(line_total),
        )
        self._lines.append(line)
        return line

    def assign_number(self, number: int) -> 'Order':
        self.number = number
        return self

    def to_dict(self) -> Dict:
        return {
            'number': self.number,
            'issue_date': self.issue_date.isoformat() if self.issue_date else None,
            'delivery_date': self.delivery_date.isoformat() if self.delivery_date else None,
            'fulfillment_level': self.fulfillment_level,
            'supplier': self._supplier.to_dict(),
            'quote_folio': self.quote_folio,
            'lines': [line.to_dict() for line in self._lines],
            'total': str(money(self.total)),
        }


def _decimal_or_zero(data: Dict, key: str) -> Decimal:
    value = data.get(key)
    if value is None or isinstance(value, bool):
        return Decimal('0')
    try:
        return to_decimal(value)
    except ValueError:
        return Decimal('0')


class OrderManager:
    """
    Order manager (GestorPedidos).

    Holds the loaded budget and a read-only supplier catalog (anything with
    ``find_supplier(key)``). Generated orders are returned, never stored.
    """

    def __init__(self, supplier_catalog):
        self._suppliers = supplier_catalog
        self._budget: Optional[Budget] = None

    @property
    def budget(self) -> Optional[Budget]:
        return self._budget

    def load_budget(self, budget: Budget) -> None:
        if budget is None:
            raise BudgetNotLoadedError()
        self._budget = budget
        logger.debug(f"Budget loaded: {type(budget).__name__}")

    def generate_order(self, supplier_key: str, order_number: int, fulfillment_level: int,
                       issue_date: date, delivery_date: date, quote_folio: Optional[int] = None) -> Order:
        budget = self._budget
        if budget is None:
            raise BudgetNotLoadedError()

        supplier = self._suppliers.find_supplier(supplier_key)
        if supplier is None:
            logger.warning(f"Order rejected: supplier {supplier_key} not found")
            raise SupplierNotFoundError(supplier_key)

        order = Order(order_number, issue_date, delivery_date, fulfillment_level, supplier,
                      quote_folio=quote_folio)
        for article_id, quantity in budget.quantities_by_article().items():
            data = budget.data_of(article_id) or {}
            order.add_line(
                article_id,
                budget.description_of(article_id),
                quantity,
                _decimal_or_zero(data, UNIT_PRICE),
                _decimal_or_zero(data, LINE_TOTAL),
            )

        logger.info(f"Order generated for supplier {supplier.key}: {len(order.lines)} lines, total={order.total}")
        return order


class InMemorySupplierCatalog:
    """Supplier catalog over a fixed list."""

    def __init__(self, suppliers: Iterable[Supplier] = ()):
        self._by_key = {s.key: s for s in suppliers}

    def find_supplier(self, key: str) -> Optional[Supplier]:
        return self._by_key.get(key)
