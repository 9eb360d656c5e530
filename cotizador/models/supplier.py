"""Supplier model."""
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from cotizador.database import Base


class Supplier(Base):
    """Supplier (proveedor), identified by its key (cve)."""

    __tablename__ = 'supplier'

    cve = Column(String(20), primary_key=True)
    name = Column(String(120), nullable=False)
    legal_name = Column(String(200), nullable=False, default='')
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # Relationships
    orders = relationship('Order', back_populates='supplier')

    def __repr__(self):
        return f"<Supplier(cve='{self.cve}', name='{self.name}')>"
