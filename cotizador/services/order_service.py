"""Order service: turn a saved quote into a supplier order and persist it."""
import logging
from datetime import date, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from cotizador import domain
from cotizador.exceptions import NotFoundError
from cotizador.models import Order, OrderLine
from cotizador.services.catalog_service import SqlCatalog
from cotizador.services.quote_service import load_quote
from cotizador.utils.number_format import money

logger = logging.getLogger(__name__)


def save_order(session: Session, order: domain.Order) -> domain.Order:
    """Persist an order and assign it the number the database generated."""
    try:
        entity = Order(
            supplier_cve=order.supplier.key,
            quote_folio=order.quote_folio,
            issue_date=order.issue_date,
            delivery_date=order.delivery_date,
            fulfillment_level=order.fulfillment_level,
            total_amount=money(order.total),
        )
        for line in order.lines:
            entity.lines.append(OrderLine(
                article_id=line.article_id,
                description=line.description,
                qty=line.quantity,
                unit_price=line.unit_price,
                line_total=line.line_total,
            ))
        session.add(entity)
        session.flush()
        number = entity.number
        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info(f"Order {number} saved for supplier {order.supplier.key} (quote {order.quote_folio})")
    return order.assign_number(number)


def generate_order_from_quote(session: Session, quote_folio: int, supplier_key: str,
                              fulfillment_level: int = 100, issue_date: Optional[date] = None,
                              delivery_date: Optional[date] = None, delivery_days: int = 7) -> domain.Order:
    """
    Load a saved quote, adapt it as a budget and generate a persisted order
    for ``supplier_key``.
    """
    quote = load_quote(session, quote_folio)
    issue_date = issue_date or date.today()
    delivery_date = delivery_date or issue_date + timedelta(days=delivery_days)

    manager = domain.OrderManager(SqlCatalog(session, on_date=issue_date))
    manager.load_budget(domain.QuoteBudgetAdapter(quote))
    order = manager.generate_order(
        supplier_key,
        0,
        fulfillment_level,
        issue_date,
        delivery_date,
        quote_folio=quote.folio,
    )
    return save_order(session, order)


def load_order(session: Session, number: int) -> domain.Order:
    entity = session.query(Order).filter(Order.number == number).first()
    if not entity:
        raise NotFoundError(f'Pedido {number} no encontrado.')

    supplier = domain.Supplier(
        key=entity.supplier.cve,
        name=entity.supplier.name,
        legal_name=entity.supplier.legal_name or '',
    )
    order = domain.Order(
        entity.number,
        entity.issue_date,
        entity.delivery_date,
        entity.fulfillment_level,
        supplier,
        quote_folio=entity.quote_folio,
    )
    for line in entity.lines:
        order.add_line(line.article_id, line.description, line.qty, line.unit_price, line.line_total)
    return order
