"""Pure pricing, quoting and ordering logic. No Flask or database imports here."""
from cotizador.domain.budget import Budget, QuoteBudgetAdapter
from cotizador.domain.catalog import InMemoryCatalog
from cotizador.domain.components import Component, ComponentType, make_pc
from cotizador.domain.orders import InMemorySupplierCatalog, Order, OrderLine, OrderManager, Supplier
from cotizador.domain.promotions import (
    BuyNPayM, FlatPercentDiscount, NoDiscount, Promotion, TieredQuantityDiscount,
    build_promotion, chain
)
from cotizador.domain.quote import Quote, QuoteLine, Quoter
from cotizador.domain.taxes import (
    CanadaTax, MexicoTax, TaxStrategy, UsaTax, get_tax_strategy, resolve_tax_strategies
)

__all__ = [
    'Budget', 'QuoteBudgetAdapter', 'InMemoryCatalog',
    'Component', 'ComponentType', 'make_pc',
    'InMemorySupplierCatalog', 'Order', 'OrderLine', 'OrderManager', 'Supplier',
    'BuyNPayM', 'FlatPercentDiscount', 'NoDiscount', 'Promotion', 'TieredQuantityDiscount',
    'build_promotion', 'chain',
    'Quote', 'QuoteLine', 'Quoter',
    'CanadaTax', 'MexicoTax', 'TaxStrategy', 'UsaTax', 'get_tax_strategy', 'resolve_tax_strategies',
]
