"""Order Line model."""
from sqlalchemy import Column, Integer, String, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from cotizador.database import Base, IdType


class OrderLine(Base):
    """Order Line (detalle de pedido)."""

    __tablename__ = 'purchase_order_line'

    id = Column(IdType, primary_key=True, autoincrement=True)
    order_number = Column(IdType, ForeignKey('purchase_order.number'), nullable=False)
    article_id = Column(String(40), nullable=False)
    description = Column(String(200), nullable=False, default='')
    qty = Column(Integer, nullable=False)
    unit_price = Column(Numeric(14, 2), nullable=False)
    line_total = Column(Numeric(14, 2), nullable=False)

    # Relationships
    order = relationship('Order', back_populates='lines')

    def __repr__(self):
        return f"<OrderLine(id={self.id}, article_id='{self.article_id}', qty={self.qty})>"
