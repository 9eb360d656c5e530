"""Order model (pedido a proveedor)."""
from sqlalchemy import Column, Integer, String, Date, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from cotizador.database import Base, IdType


class Order(Base):
    """Order (Pedido). The number is assigned by the database on insert."""

    __tablename__ = 'purchase_order'

    number = Column(IdType, primary_key=True, autoincrement=True)
    supplier_cve = Column(String(20), ForeignKey('supplier.cve'), nullable=False)
    quote_folio = Column(IdType, ForeignKey('quote.folio'), nullable=True)
    issue_date = Column(Date, nullable=False)
    delivery_date = Column(Date, nullable=False)
    fulfillment_level = Column(Integer, nullable=False, default=0)
    total_amount = Column(Numeric(14, 2), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # Relationships
    supplier = relationship('Supplier', back_populates='orders')
    quote = relationship('Quote', back_populates='orders')
    lines = relationship('OrderLine', back_populates='order', cascade='all, delete-orphan', order_by='OrderLine.id')

    def __repr__(self):
        return f"<Order(number={self.number}, supplier='{self.supplier_cve}', total={self.total_amount})>"
