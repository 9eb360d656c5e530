"""Component model (componentes y partes de PC)."""
from sqlalchemy import Column, String, Numeric, DateTime, ForeignKey, Integer
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from cotizador.database import Base, IdType


class Component(Base):
    """
    Component (Componente).

    ``component_type`` is the discriminator; rows with type PC list their
    parts through ``PcPart``. A PC's stored prices are informational only,
    pricing always sums its parts.
    """

    __tablename__ = 'component'

    id = Column(String(40), primary_key=True)
    description = Column(String(200), nullable=False)
    brand = Column(String(80), nullable=False, default='')
    model = Column(String(80), nullable=False, default='')
    cost = Column(Numeric(14, 2), nullable=False, default=0)
    base_price = Column(Numeric(14, 2), nullable=False, default=0)
    component_type = Column(String(20), nullable=False)
    promotion_id = Column(IdType, ForeignKey('promotion.id'), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # Relationships
    promotion = relationship('Promotion')
    parts = relationship(
        'PcPart',
        foreign_keys='PcPart.pc_id',
        back_populates='pc',
        cascade='all, delete-orphan',
        order_by='PcPart.position',
    )

    def __repr__(self):
        return f"<Component(id='{self.id}', type='{self.component_type}', price={self.base_price})>"


class PcPart(Base):
    """Association between a PC and one of its parts (pc_parte)."""

    __tablename__ = 'pc_part'

    pc_id = Column(String(40), ForeignKey('component.id'), primary_key=True)
    component_id = Column(String(40), ForeignKey('component.id'), primary_key=True)
    position = Column(Integer, nullable=False, default=0)

    # Relationships
    pc = relationship('Component', foreign_keys=[pc_id], back_populates='parts')
    component = relationship('Component', foreign_keys=[component_id])

    def __repr__(self):
        return f"<PcPart(pc_id='{self.pc_id}', component_id='{self.component_id}')>"
