"""
Promotion chain (promociones).

A promotion is one base promotion plus an ordered tuple of accumulable
layers::

    Promotion(base=BuyNPayM(3, 2), layers=(FlatPercentDiscount(10),))

``calculate_amount`` folds innermost-first: the base resolves the starting
amount for ``quantity`` units at ``base_price``, then every layer, in the order
it was attached, transforms the amount produced beneath it. A non-positive
quantity passes the undiscounted amount through every layer.

All parameters are validated when the objects are built; calculation never
raises for configuration reasons.
"""
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Tuple, Union

from cotizador.exceptions import InvalidPromotionConfiguration
from cotizador.utils.number_format import parse_quantity, percent_factor, to_decimal

HUNDRED = Decimal(100)


def _check_percent(value, label) -> Decimal:
    try:
        percent = to_decimal(value, label)
    except ValueError as e:
        raise InvalidPromotionConfiguration(str(e))
    if percent < 0 or percent > HUNDRED:
        raise InvalidPromotionConfiguration(f'{label} debe estar entre 0 y 100: {value}')
    return percent


def _check_int(value, label) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidPromotionConfiguration(f'{label} debe ser un entero: {value!r}')
    return value


def _format_percent(percent: Decimal) -> str:
    if percent == percent.to_integral_value():
        return f'{int(percent)}%'
    return f'{percent.normalize()}%'


# Base promotions

@dataclass(frozen=True)
class NoDiscount:
    """Regular price (sin descuento)."""

    kind = 'SIN_DESCUENTO'

    def apply(self, quantity: int, base_price: Decimal) -> Decimal:
        return base_price * quantity

    def describe(self) -> str:
        return 'Precio regular - Sin promoción'


@dataclass(frozen=True)
class BuyNPayM:
    """
    "Lleven N, paguen M".

    Every complete group of ``llevent`` units is charged as ``paguen`` units;
    units outside a complete group are charged in full.
    """

    llevent: int
    paguen: int

    kind = 'NXM'

    def __post_init__(self):
        _check_int(self.llevent, 'llevent')
        _check_int(self.paguen, 'paguen')
        if self.paguen <= 0:
            raise InvalidPromotionConfiguration(f'paguen debe ser positivo: {self.paguen}')
        if self.paguen >= self.llevent:
            raise InvalidPromotionConfiguration(
                f'paguen ({self.paguen}) debe ser menor que llevent ({self.llevent})'
            )

    def apply(self, quantity: int, base_price: Decimal) -> Decimal:
        if quantity <= 0:
            return base_price * quantity
        full_groups, remainder = divmod(quantity, self.llevent)
        payable_units = full_groups * self.paguen + remainder
        return base_price * payable_units

    def discount_percent(self) -> Decimal:
        """Nominal discount of a complete group. Display only."""
        return Decimal(self.llevent - self.paguen) / Decimal(self.llevent) * HUNDRED

    def describe(self) -> str:
        if (self.llevent, self.paguen) in ((2, 1), (3, 2)):
            return f'{self.llevent}x{self.paguen}'
        return f'Lleva {self.llevent}, Paga {self.paguen}'


# Accumulable layers

@dataclass(frozen=True)
class FlatPercentDiscount:
    """Flat percentage off the amount beneath (descuento plano)."""

    percent: Decimal

    kind = 'DESCUENTO_PLANO'

    def __post_init__(self):
        object.__setattr__(self, 'percent', _check_percent(self.percent, 'porcentaje de descuento'))

    def apply(self, quantity: int, amount: Decimal) -> Decimal:
        if quantity <= 0 or self.percent == 0:
            return amount
        return amount * percent_factor(self.percent)

    def describe(self) -> str:
        if self.percent == 0:
            return 'Sin descuento'
        return f'{_format_percent(self.percent)} de descuento'


@dataclass(frozen=True)
class TieredQuantityDiscount:
    """
    Percentage chosen by quantity (descuento por cantidad).

    ``tiers`` maps a minimum quantity to a percentage. The tier with the
    largest minimum that is still <= quantity applies; below every minimum
    nothing is discounted.
    """

    tiers: Tuple[Tuple[int, Decimal], ...]

    kind = 'DESCUENTO_POR_CANTIDAD'

    def __post_init__(self):
        raw = self.tiers.items() if isinstance(self.tiers, Mapping) else self.tiers
        pairs = []
        seen = set()
        for entry in raw or ():
            try:
                min_qty, percent = entry
            except (TypeError, ValueError):
                raise InvalidPromotionConfiguration(f'Escala inválida: {entry!r}')
            _check_int(min_qty, 'cantidad mínima')
            if min_qty <= 0:
                raise InvalidPromotionConfiguration(f'Las cantidades deben ser positivas: {min_qty}')
            if min_qty in seen:
                raise InvalidPromotionConfiguration(f'Escala repetida para cantidad {min_qty}')
            seen.add(min_qty)
            pairs.append((min_qty, _check_percent(percent, 'porcentaje de escala')))
        if not pairs:
            raise InvalidPromotionConfiguration('Debe especificar al menos una escala de descuento')
        object.__setattr__(self, 'tiers', tuple(sorted(pairs)))

    def percent_for(self, quantity: int) -> Decimal:
        qualifying = [percent for min_qty, percent in self.tiers if min_qty <= quantity]
        return qualifying[-1] if qualifying else Decimal('0')

    def next_tier(self, quantity: int) -> Optional[Tuple[int, Decimal]]:
        for min_qty, percent in self.tiers:
            if min_qty > quantity:
                return min_qty, percent
        return None

    def apply(self, quantity: int, amount: Decimal) -> Decimal:
        if quantity <= 0:
            return amount
        percent = self.percent_for(quantity)
        if percent == 0:
            return amount
        return amount * percent_factor(percent)

    def describe(self) -> str:
        scales = ', '.join(f'{q}+ = {_format_percent(p)}' for q, p in self.tiers)
        return f'Escalas de descuento: {scales}'


BasePromotion = Union[NoDiscount, BuyNPayM]
AccumulableDiscount = Union[FlatPercentDiscount, TieredQuantityDiscount]

BASE_KINDS = (NoDiscount, BuyNPayM)
ACCUMULABLE_KINDS = (FlatPercentDiscount, TieredQuantityDiscount)


@dataclass(frozen=True)
class Promotion:
    """A base promotion and its accumulable layers, plus catalog metadata."""

    base: BasePromotion = field(default_factory=NoDiscount)
    layers: Tuple[AccumulableDiscount, ...] = ()
    promotion_id: Optional[int] = None
    name: str = 'Sin promoción'
    description: Optional[str] = None
    valid_from: Optional[date] = None
    valid_until: Optional[date] = None

    def __post_init__(self):
        if not isinstance(self.base, BASE_KINDS):
            raise InvalidPromotionConfiguration(f'Promoción base inválida: {self.base!r}')
        layers = tuple(self.layers or ())
        for layer in layers:
            if not isinstance(layer, ACCUMULABLE_KINDS):
                raise InvalidPromotionConfiguration(f'Promoción acumulable inválida: {layer!r}')
        object.__setattr__(self, 'layers', layers)
        if self.valid_from and self.valid_until and self.valid_from > self.valid_until:
            raise InvalidPromotionConfiguration('La vigencia inicial es posterior a la final')

    def with_layer(self, layer: AccumulableDiscount) -> 'Promotion':
        """Return a new promotion with ``layer`` wrapped around this one."""
        return replace(self, layers=self.layers + (layer,))

    def calculate_amount(self, quantity: int, base_price) -> Decimal:
        base_price = to_decimal(base_price, 'precio base')
        amount = self.base.apply(quantity, base_price)
        for layer in self.layers:
            amount = layer.apply(quantity, amount)
        return amount

    def savings(self, quantity: int, base_price) -> Decimal:
        base_price = to_decimal(base_price, 'precio base')
        return base_price * quantity - self.calculate_amount(quantity, base_price)

    def is_active(self, on_date: Optional[date] = None) -> bool:
        on_date = on_date or date.today()
        if self.valid_from and on_date < self.valid_from:
            return False
        if self.valid_until and on_date > self.valid_until:
            return False
        return True

    @property
    def has_discount(self) -> bool:
        return not isinstance(self.base, NoDiscount) or bool(self.layers)

    def describe(self) -> str:
        parts = [self.base.describe()]
        parts.extend(layer.describe() for layer in self.layers)
        return ' + '.join(parts)


def chain(base: Optional[BasePromotion] = None, *layers: AccumulableDiscount, **metadata) -> Promotion:
    """Shortcut: ``chain(BuyNPayM(3, 2), FlatPercentDiscount(10))``."""
    return Promotion(base=base or NoDiscount(), layers=tuple(layers), **metadata)


# Builder from stored detail rows

BASE_TYPE_CODES = {
    'SIN_DESCUENTO': 'none',
    'NINGUNO': 'none',
    'NXM': 'nxm',
    'LLEVENT_PAGUEN': 'nxm',
}

ACCUMULABLE_TYPE_CODES = {
    'DESCUENTO_PLANO': 'flat',
    'PORCENTAJE_FIJO': 'flat',
    'DESCUENTO_POR_CANTIDAD': 'tiered',
    'ESCALAS_CANTIDAD': 'tiered',
}


def build_base(type_code: Optional[str], llevent=None, paguen=None) -> BasePromotion:
    kind = BASE_TYPE_CODES.get((type_code or 'SIN_DESCUENTO').strip().upper())
    if kind is None:
        raise InvalidPromotionConfiguration(f'Tipo de promoción base desconocido: {type_code}')
    if kind == 'none':
        return NoDiscount()
    if llevent is None or paguen is None:
        raise InvalidPromotionConfiguration('La promoción NxM requiere llevent y paguen')
    try:
        return BuyNPayM(parse_quantity(llevent, 'llevent'), parse_quantity(paguen, 'paguen'))
    except ValueError as e:
        raise InvalidPromotionConfiguration(f'Parámetros NxM inválidos: {e}')


def build_layer(type_code: str, percent=None, tiers: Optional[Iterable] = None) -> AccumulableDiscount:
    kind = ACCUMULABLE_TYPE_CODES.get((type_code or '').strip().upper())
    if kind is None:
        raise InvalidPromotionConfiguration(f'Tipo de promoción acumulable desconocido: {type_code}')
    if kind == 'flat':
        if percent is None:
            raise InvalidPromotionConfiguration('El descuento plano requiere un porcentaje')
        return FlatPercentDiscount(percent)
    return TieredQuantityDiscount(tuple(tiers or ()))


def build_promotion(details: Iterable[Mapping], **metadata) -> Promotion:
    """
    Build a promotion from detail dicts, as stored by the catalog.

    Each detail has ``is_base``; base details carry ``base_type``,
    ``llevent``, ``paguen``; accumulable details carry ``accumulable_type``,
    ``percent`` or ``tiers`` (pairs of min quantity and percent). Accumulable
    details are applied in the order given. No details means no discount.
    """
    details = list(details or [])
    bases = [d for d in details if d.get('is_base')]
    if len(bases) > 1:
        raise InvalidPromotionConfiguration('Una promoción solo puede tener una promoción base')

    base = NoDiscount()
    if bases:
        b = bases[0]
        base = build_base(b.get('base_type'), b.get('llevent'), b.get('paguen'))

    layers = tuple(
        build_layer(d.get('accumulable_type'), d.get('percent'), d.get('tiers'))
        for d in details if not d.get('is_base')
    )
    return Promotion(base=base, layers=layers, **metadata)
