"""Quote model for cotizaciones."""
from sqlalchemy import Column, String, Numeric, Date, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from cotizador.database import Base, IdType


class Quote(Base):
    """
    Quote (Cotización).

    The folio is assigned by the database on insert. Totals are stored as
    computed by the domain quote and never recomputed here.
    """

    __tablename__ = 'quote'

    folio = Column(IdType, primary_key=True, autoincrement=True)
    created_on = Column(Date, nullable=False)
    tax_codes = Column(String(60), nullable=False, default='')  # comma separated, e.g. "MX,US"
    subtotal = Column(Numeric(14, 2), nullable=False, default=0)
    tax_amount = Column(Numeric(14, 2), nullable=False, default=0)
    total = Column(Numeric(14, 2), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # Relationships
    lines = relationship(
        'QuoteLine',
        back_populates='quote',
        cascade='all, delete-orphan',
        order_by='QuoteLine.line_number',
    )
    orders = relationship('Order', back_populates='quote')

    def __repr__(self):
        return f"<Quote(folio={self.folio}, total={self.total})>"
