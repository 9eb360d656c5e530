"""
Priced components (componentes).

A component is either a standalone part (monitor, disk, video card, ...) or a
composite PC whose price basis is the sum of its parts' quoted unit prices.
Prices are always computed on demand from the current parts list.
"""
import enum
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from cotizador.domain.promotions import Promotion
from cotizador.exceptions import InvalidComponentError
from cotizador.utils.number_format import to_decimal


class ComponentType(enum.Enum):
    """Component type enum (tipo de componente)."""
    MONITOR = "MONITOR"
    DISCO_DURO = "DISCO_DURO"
    TARJETA_VIDEO = "TARJETA_VIDEO"
    CPU = "CPU"
    RAM = "RAM"
    SSD = "SSD"
    PC = "PC"

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls((value or '').strip().upper())
        except ValueError:
            raise InvalidComponentError(f'Tipo de componente desconocido: {value}')


@dataclass
class Component:
    """
    Component (Componente).

    For a PC, ``base_price`` and ``cost`` are derived from ``sub_components``;
    the values passed in are ignored.
    """

    id: str
    description: str
    brand: str = ''
    model: str = ''
    cost: Decimal = Decimal('0')
    base_price: Decimal = Decimal('0')
    promotion: Optional[Promotion] = None
    component_type: ComponentType = ComponentType.MONITOR
    sub_components: List['Component'] = field(default_factory=list)

    def __post_init__(self):
        if not self.id or not str(self.id).strip():
            raise InvalidComponentError('El componente requiere un id.')
        self.id = str(self.id).strip()
        self.component_type = ComponentType.parse(self.component_type)
        try:
            self.cost = to_decimal(self.cost, 'costo')
            self.base_price = to_decimal(self.base_price, 'precio base')
        except ValueError as e:
            raise InvalidComponentError(str(e))
        if self.cost < 0 or self.base_price < 0:
            raise InvalidComponentError(
                f'Costo y precio base no pueden ser negativos ({self.id}: costo={self.cost}, precio={self.base_price})'
            )
        if not self.is_composite and self.sub_components:
            raise InvalidComponentError(f'Solo una PC puede tener subcomponentes ({self.id}).')
        for part in list(self.sub_components):
            self._check_part(part)

    @property
    def is_composite(self) -> bool:
        return self.component_type == ComponentType.PC

    def _check_part(self, part):
        if not isinstance(part, Component):
            raise InvalidComponentError(f'Subcomponente inválido: {part!r}')
        if part.is_composite:
            raise InvalidComponentError(f'Una PC no puede contener otra PC ({part.id}).')

    # Composite management

    def add_sub_component(self, part: 'Component') -> None:
        if not self.is_composite:
            raise InvalidComponentError(f'{self.id} no es una PC.')
        self._check_part(part)
        self.sub_components.append(part)

    def remove_sub_component(self, part_id: str) -> 'Component':
        """Remove the first part with ``part_id`` and return it."""
        for index, part in enumerate(self.sub_components):
            if part.id == part_id:
                return self.sub_components.pop(index)
        raise InvalidComponentError(f'La PC {self.id} no contiene el componente {part_id}.')

    def validate(self) -> None:
        """Check the invariants required before quoting."""
        if self.is_composite and not self.sub_components:
            raise InvalidComponentError(f'La PC {self.id} no tiene componentes.')

    # Pricing

    def list_price(self) -> Decimal:
        """Price basis before this component's own promotion."""
        if self.is_composite:
            return sum((part.unit_price() for part in self.sub_components), Decimal('0'))
        return self.base_price

    def total_cost(self) -> Decimal:
        if self.is_composite:
            return sum((part.total_cost() for part in self.sub_components), Decimal('0'))
        return self.cost

    def quote_amount(self, quantity: int) -> Decimal:
        """Amount for ``quantity`` units, run through the attached promotion."""
        price = self.list_price()
        if self.promotion is None:
            return price * quantity
        return self.promotion.calculate_amount(quantity, price)

    def unit_price(self) -> Decimal:
        return self.quote_amount(1)

    def total_price(self) -> Decimal:
        """PC price: parts' unit prices summed, then the PC promotion."""
        return self.unit_price()

    def profit(self) -> Decimal:
        return self.list_price() - self.total_cost()

    def promotion_savings(self, quantity: int) -> Decimal:
        return self.list_price() * quantity - self.quote_amount(quantity)

    @property
    def has_promotion(self) -> bool:
        return self.promotion is not None

    def __repr__(self):
        return f"<Component(id='{self.id}', type={self.component_type.value}, price={self.list_price()})>"


def make_pc(pc_id: str, description: str, parts: List[Component], brand: str = '', model: str = '',
            promotion: Optional[Promotion] = None) -> Component:
    """Build and validate a PC from its parts."""
    pc = Component(
        id=pc_id,
        description=description,
        brand=brand,
        model=model,
        promotion=promotion,
        component_type=ComponentType.PC,
        sub_components=list(parts),
    )
    pc.validate()
    return pc
