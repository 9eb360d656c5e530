"""
Catalog lookups backed by SQLAlchemy.

Translates stored components, promotions and suppliers into domain objects.
Read-only: nothing here writes to the session.
"""
import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from cotizador import domain
from cotizador.domain.promotions import build_promotion
from cotizador.models import Component, Promotion, Supplier

logger = logging.getLogger(__name__)


def promotion_from_entity(entity: Promotion) -> domain.Promotion:
    """Build the promotion chain for a stored promotion (base first, then layers by position)."""
    return build_promotion(
        [detail.to_builder_dict() for detail in entity.details],
        promotion_id=entity.id,
        name=entity.name,
        description=entity.description,
        valid_from=entity.valid_from,
        valid_until=entity.valid_until,
    )


class SqlCatalog:
    """
    Component, promotion and supplier catalog over a database session.

    ``on_date`` is the quoting date: a component's promotion is attached only
    when it is active that day.
    """

    def __init__(self, session: Session, on_date: Optional[date] = None):
        self.session = session
        self.on_date = on_date or date.today()

    def _to_domain(self, entity: Component) -> domain.Component:
        promotion = None
        if entity.promotion is not None:
            candidate = promotion_from_entity(entity.promotion)
            if candidate.is_active(self.on_date):
                promotion = candidate
            else:
                logger.debug(f"Promotion {entity.promotion_id} inactive on {self.on_date} for component {entity.id}")

        return domain.Component(
            id=entity.id,
            description=entity.description,
            brand=entity.brand or '',
            model=entity.model or '',
            cost=entity.cost,
            base_price=entity.base_price,
            promotion=promotion,
            component_type=entity.component_type,
            sub_components=[self._to_domain(part.component) for part in entity.parts],
        )

    def find_component(self, component_id: str) -> Optional[domain.Component]:
        entity = self.session.query(Component).filter(Component.id == component_id).first()
        if entity is None:
            return None
        return self._to_domain(entity)

    def find_promotion(self, promotion_id: int) -> Optional[domain.Promotion]:
        entity = self.session.query(Promotion).filter(Promotion.id == promotion_id).first()
        if entity is None:
            return None
        return promotion_from_entity(entity)

    def find_supplier(self, key: str) -> Optional[domain.Supplier]:
        entity = self.session.query(Supplier).filter(Supplier.cve == key).first()
        if entity is None:
            return None
        return domain.Supplier(key=entity.cve, name=entity.name, legal_name=entity.legal_name or '')
