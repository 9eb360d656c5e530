"""Promotion models: header, details and quantity tiers."""
from sqlalchemy import Column, String, Boolean, Numeric, Date, Integer, Text, ForeignKey
from sqlalchemy.orm import relationship
from cotizador.database import Base, IdType


class Promotion(Base):
    """Promotion (Promoción) header with its validity window."""

    __tablename__ = 'promotion'

    id = Column(IdType, primary_key=True, autoincrement=True)
    name = Column(String(120), nullable=False)
    description = Column(Text, nullable=True)
    valid_from = Column(Date, nullable=True)
    valid_until = Column(Date, nullable=True)

    # Relationships
    details = relationship(
        'PromotionDetail',
        back_populates='promotion',
        cascade='all, delete-orphan',
        order_by='PromotionDetail.position',
    )

    def __repr__(self):
        return f"<Promotion(id={self.id}, name='{self.name}')>"


class PromotionDetail(Base):
    """
    Promotion detail (detalle de promoción).

    One row is the base promotion (``is_base``); the rest are accumulable
    layers applied by ascending ``position``.
    """

    __tablename__ = 'promotion_detail'

    id = Column(IdType, primary_key=True, autoincrement=True)
    promotion_id = Column(IdType, ForeignKey('promotion.id'), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    is_base = Column(Boolean, nullable=False, default=False)
    base_type = Column(String(30), nullable=True)  # SIN_DESCUENTO, NXM
    accumulable_type = Column(String(30), nullable=True)  # DESCUENTO_PLANO, DESCUENTO_POR_CANTIDAD
    llevent = Column(Integer, nullable=True)
    paguen = Column(Integer, nullable=True)
    flat_percent = Column(Numeric(5, 2), nullable=True)

    # Relationships
    promotion = relationship('Promotion', back_populates='details')
    tiers = relationship(
        'PromotionTier',
        back_populates='detail',
        cascade='all, delete-orphan',
        order_by='PromotionTier.min_quantity',
    )

    def __repr__(self):
        kind = self.base_type if self.is_base else self.accumulable_type
        return f"<PromotionDetail(id={self.id}, promotion_id={self.promotion_id}, type='{kind}')>"

    def to_builder_dict(self):
        """Detail as the dict understood by ``build_promotion``."""
        return {
            'is_base': bool(self.is_base),
            'base_type': self.base_type,
            'llevent': self.llevent,
            'paguen': self.paguen,
            'accumulable_type': self.accumulable_type,
            'percent': self.flat_percent,
            'tiers': [(tier.min_quantity, tier.percent) for tier in self.tiers],
        }


class PromotionTier(Base):
    """Quantity tier of a tiered discount (escala de descuento por cantidad)."""

    __tablename__ = 'promotion_tier'

    id = Column(IdType, primary_key=True, autoincrement=True)
    detail_id = Column(IdType, ForeignKey('promotion_detail.id'), nullable=False)
    min_quantity = Column(Integer, nullable=False)
    percent = Column(Numeric(5, 2), nullable=False)

    # Relationships
    detail = relationship('PromotionDetail', back_populates='tiers')

    def __repr__(self):
        return f"<PromotionTier(min_quantity={self.min_quantity}, percent={self.percent})>"
