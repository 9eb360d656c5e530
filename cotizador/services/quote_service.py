"""Quote service: price requested components, total them and persist the quote."""
import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from cotizador import domain
from cotizador.domain.taxes import resolve_tax_strategies
from cotizador.exceptions import (
    BusinessLogicError, ComponentNotFoundError, EmptyQuoteError, NotFoundError, QuoteFinalizedError
)
from cotizador.models import Quote, QuoteLine
from cotizador.services.catalog_service import SqlCatalog
from cotizador.utils.number_format import parse_quantity

logger = logging.getLogger(__name__)


def _parse_request_lines(lines: Iterable[Dict[str, Any]]) -> List[tuple]:
    parsed = []
    for index, line in enumerate(lines or [], start=1):
        if not isinstance(line, dict):
            raise BusinessLogicError(f'Línea {index}: se esperaba un objeto con component_id y quantity.')
        component_id = str(line.get('component_id') or '').strip()
        if not component_id:
            raise BusinessLogicError(f'Línea {index}: component_id requerido.')
        try:
            quantity = parse_quantity(line.get('quantity'))
        except ValueError as e:
            raise BusinessLogicError(f'Línea {index}: {e}')
        parsed.append((component_id, quantity))
    return parsed


def build_quote(lines: Iterable[Dict[str, Any]], catalog, tax_codes: Optional[Iterable[str]] = None,
                created_on: Optional[date] = None, default_tax_codes: Iterable[str] = ('MX',)) -> domain.Quote:
    """
    Price ``lines`` (dicts with ``component_id`` and ``quantity``) against
    ``catalog`` and return a totalled, unsaved quote.
    """
    requested = _parse_request_lines(lines)
    if not requested:
        raise EmptyQuoteError()

    # Resolve taxes before pricing anything
    strategies = resolve_tax_strategies(tax_codes, default_tax_codes)

    quoter = domain.Quoter()
    for component_id, quantity in requested:
        component = catalog.find_component(component_id)
        if component is None:
            raise ComponentNotFoundError(component_id)
        quoter.add_component(quantity, component)

    return quoter.generate_quote(strategies, created_on=created_on)


def save_quote(session: Session, quote: domain.Quote) -> domain.Quote:
    """Persist a totalled quote and finalize it with the folio the database assigned."""
    if quote.is_finalized:
        raise QuoteFinalizedError(quote.folio)
    if not quote.lines:
        raise EmptyQuoteError()

    try:
        entity = Quote(
            created_on=quote.created_on,
            tax_codes=','.join(quote.tax_codes),
            subtotal=quote.subtotal,
            tax_amount=quote.tax_amount,
            total=quote.total,
        )
        for line in quote.lines:
            entity.lines.append(QuoteLine(
                line_number=line.line_number,
                component_id=line.component_id,
                description_snapshot=line.description,
                qty=line.quantity,
                unit_price=line.unit_price,
                line_total=line.amount,
            ))
        session.add(entity)
        session.flush()
        folio = entity.folio
        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info(f"Quote {folio} saved: subtotal={quote.subtotal}, tax={quote.tax_amount}, total={quote.total}")
    return quote.finalize(folio)


def create_quote(session: Session, lines: Iterable[Dict[str, Any]], tax_codes: Optional[Iterable[str]] = None,
                 created_on: Optional[date] = None, default_tax_codes: Iterable[str] = ('MX',)) -> domain.Quote:
    """Create and persist a quote from requested lines."""
    created_on = created_on or date.today()
    catalog = SqlCatalog(session, on_date=created_on)
    quote = build_quote(lines, catalog, tax_codes, created_on, default_tax_codes)
    return save_quote(session, quote)


def load_quote(session: Session, folio: int) -> domain.Quote:
    """Rebuild a persisted quote as a read-only domain quote."""
    entity = session.query(Quote).filter(Quote.folio == folio).first()
    if not entity:
        raise NotFoundError(f'Cotización {folio} no encontrada.')

    lines = [
        domain.QuoteLine(
            line_number=line.line_number,
            component_id=line.component_id,
            quantity=line.qty,
            unit_price=line.unit_price,
            amount=line.line_total,
            description=line.description_snapshot or '',
        )
        for line in entity.lines
    ]
    tax_codes = [code for code in (entity.tax_codes or '').split(',') if code]
    return domain.Quote.restore(
        folio=entity.folio,
        created_on=entity.created_on,
        lines=lines,
        subtotal=entity.subtotal,
        tax_amount=entity.tax_amount,
        total=entity.total,
        tax_codes=tax_codes,
    )
