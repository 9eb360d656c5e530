"""Models package - exports all SQLAlchemy models."""
# Catalog Models
from cotizador.models.component import Component, PcPart
from cotizador.models.promotion import Promotion, PromotionDetail, PromotionTier
from cotizador.models.supplier import Supplier

# Business Models
from cotizador.models.quote import Quote
from cotizador.models.quote_line import QuoteLine
from cotizador.models.order import Order
from cotizador.models.order_line import OrderLine

__all__ = [
    # Catalog
    'Component', 'PcPart', 'Promotion', 'PromotionDetail', 'PromotionTier', 'Supplier',
    # Business
    'Quote', 'QuoteLine', 'Order', 'OrderLine',
]
