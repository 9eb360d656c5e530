"""In-memory catalog: components, promotions and suppliers already loaded by the caller."""
from typing import Dict, Iterable, Optional

from cotizador.domain.components import Component
from cotizador.domain.orders import InMemorySupplierCatalog, Supplier
from cotizador.domain.promotions import Promotion


class InMemoryCatalog(InMemorySupplierCatalog):
    """Read-only lookups over dictionaries built at construction."""

    def __init__(self, components: Iterable[Component] = (), promotions: Dict[int, Promotion] = None,
                 suppliers: Iterable[Supplier] = ()):
        super().__init__(suppliers)
        self._components = {c.id: c for c in components}
        self._promotions = dict(promotions or {})

    def find_component(self, component_id: str) -> Optional[Component]:
        return self._components.get(component_id)

    def find_promotion(self, promotion_id: int) -> Optional[Promotion]:
        return self._promotions.get(promotion_id)
